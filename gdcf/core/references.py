"""Find function references in GDScript source."""

import logging
import re
from enum import Enum

from gdcf.core.constants import IDENTIFIER, KEYWORDS
from gdcf.core.source import line_at, mask_string_literals

logger = logging.getLogger(__name__)

NAME = rf"(?P<name>{IDENTIFIER})"


class TextView(str, Enum):
    """Which rendition of the source a rule matches against."""

    # Original text: the name is the content of a string literal
    SOURCE = "source"
    # String contents blanked: the name is code
    MASKED = "masked"
    BOTH = "both"
    # Matched on the original text, kept only when the match starts in code
    CODE_ANCHORED = "code_anchored"


class ReferenceRule:
    """One syntactic shape that counts as a reference to a name."""

    def __init__(
        self,
        name: str,
        pattern: str,
        view: TextView,
        skip_keywords: bool = False,
    ) -> None:
        self.name = name
        self.pattern = re.compile(pattern)
        self.view = view
        self.skip_keywords = skip_keywords

    def __repr__(self) -> str:
        return f"ReferenceRule({self.name!r}, view={self.view.value})"

    def find(self, source: str, masked: str) -> list[tuple[int, str]]:
        """Return `(offset, name)` for every match, offsets valid in both texts."""
        if self.view is TextView.MASKED:
            texts = [masked]
        elif self.view is TextView.BOTH:
            texts = [masked, source]
        else:
            texts = [source]

        hits: list[tuple[int, str]] = []
        for text in texts:
            for match in self.pattern.finditer(text):
                ident = match.group("name")
                if self.skip_keywords and ident in KEYWORDS:
                    continue
                start = match.start()
                if self.view is TextView.CODE_ANCHORED and masked[start] != text[start]:
                    continue
                hits.append((match.start("name"), ident))
        return hits


def default_rules() -> tuple[ReferenceRule, ...]:
    """The ordered reference heuristics applied to every source file."""
    return (
        # call("f"), .call("f"), call_deferred("f"), .call_deferred("f")
        ReferenceRule(
            "dynamic_call",
            rf"""(?:\.|(?<![A-Za-z0-9_.]))call(?:_deferred)?\s*\(\s*["']{NAME}["']""",
            TextView.SOURCE,
        ),
        # Callable(self, "f") or Callable(obj.child, "f")
        ReferenceRule(
            "callable",
            rf"(?<![A-Za-z0-9_])Callable\s*\(\s*(?:self|{IDENTIFIER}(?:\.{IDENTIFIER})*)\s*,"
            rf"""\s*["']{NAME}["']""",
            TextView.SOURCE,
        ),
        # sig.connect(f) or sig.connect(self.f)
        ReferenceRule(
            "connect",
            rf"\.connect\s*\(\s*(?:self\.)?{NAME}",
            TextView.MASKED,
        ),
        # obj.f(
        ReferenceRule(
            "method_call",
            rf"\.\s*{NAME}\s*\(",
            TextView.MASKED,
        ),
        # handlers["f"](
        ReferenceRule(
            "indexed_call",
            rf"""\[\s*["']{NAME}["']\s*\]\s*\(""",
            TextView.CODE_ANCHORED,
        ),
        # f( not after a dot or inside another identifier
        ReferenceRule(
            "bare_call",
            rf"(?<![A-Za-z0-9_.]){NAME}\s*\(",
            TextView.BOTH,
            skip_keywords=True,
        ),
        # outer(f(
        ReferenceRule(
            "nested_call",
            rf"\(\s*{NAME}\s*\(",
            TextView.MASKED,
        ),
        # table["key"] = f
        ReferenceRule(
            "assigned_value",
            rf"=\s*{NAME}[ \t]*(?=[,;)\]}}#\n]|$)",
            TextView.MASKED,
            skip_keywords=True,
        ),
        # tween.tween_method(f, a, b) or defer(f)
        ReferenceRule(
            "first_argument",
            rf"\(\s*{NAME}\s*(?=[,)])",
            TextView.MASKED,
            skip_keywords=True,
        ),
    )


class ReferenceExtractor:
    """Collect candidate reference sites from GDScript source.

    Rules are independent and may report the same name more than once;
    callers fold the results into a set.
    """

    def __init__(self, rules: tuple[ReferenceRule, ...] | None = None) -> None:
        self.rules = rules if rules is not None else default_rules()

    def rule(self, name: str) -> ReferenceRule:
        for rule in self.rules:
            if rule.name == name:
                return rule
        raise KeyError(f"Unknown reference rule: {name}")

    def extract(self, source: str) -> list[tuple[str, int]]:
        """
        Find references to functions (calls, connect(callback), call("name"), ...).

        Args:
            source: Normalized source text

        Returns:
            `(name, line)` pairs in text order; line numbers are 1-based
        """
        masked = mask_string_literals(source)
        hits: list[tuple[int, str]] = []
        for rule in self.rules:
            hits.extend(rule.find(source, masked))

        hits.sort(key=lambda hit: hit[0])
        logger.debug(f"Found {len(hits)} reference candidates")
        return [(name, line_at(source, offset)) for offset, name in hits]
