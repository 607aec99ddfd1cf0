"""Extract function definitions from GDScript source."""

import logging
import re
from pathlib import Path

from gdcf.core.constants import IDENTIFIER
from gdcf.core.models import FunctionDefinition
from gdcf.core.source import line_at, mask_string_literals

logger = logging.getLogger(__name__)


class DefinitionExtractor:
    """Find `func name(...):` and `static func name(...) -> T:` declarations."""

    def __init__(self) -> None:
        self._func_def_re = re.compile(
            rf"^[ \t]*(?P<static>static\s+)?func\s+(?P<name>{IDENTIFIER})"
            r"\s*\([^)]*\)\s*(?:->[^:]+)?\s*:",
            re.MULTILINE,
        )
        self._ignore_re = re.compile(
            r"#\s*(?:gdcf-ignore|dead-code-ignore|TODO:\s*dead-code)",
            re.IGNORECASE,
        )

    def has_ignore_marker(self, line: str) -> bool:
        return self._ignore_re.search(line) is not None

    def extract(self, path: Path, source: str) -> list[FunctionDefinition]:
        """
        Extract all function definitions (top-level and inner classes).

        Functions tagged with `# gdcf-ignore`, `# dead-code-ignore` or
        `# TODO: dead-code` after the colon or on the next line get
        `ignore_dead_code=True`.

        Args:
            path: File the source was read from
            source: Normalized source text
        """
        masked = mask_string_literals(source)
        definitions: list[FunctionDefinition] = []

        for match in self._func_def_re.finditer(masked):
            rest_start = match.end()
            same_line_end = source.find("\n", rest_start)
            if same_line_end == -1:
                same_line_end = len(source)
                next_line = ""
            else:
                next_end = source.find("\n", same_line_end + 1)
                if next_end == -1:
                    next_end = len(source)
                next_line = source[same_line_end + 1 : next_end]
            same_line = source[rest_start:same_line_end]

            definitions.append(
                FunctionDefinition(
                    name=match.group("name"),
                    file=path,
                    line=line_at(source, match.start("name")),
                    is_static=match.group("static") is not None,
                    ignore_dead_code=(
                        self.has_ignore_marker(same_line) or self.has_ignore_marker(next_line)
                    ),
                )
            )

        logger.debug(f"Found {len(definitions)} definitions in {path}")
        return definitions
