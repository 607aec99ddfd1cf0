"""Find signal connection references in .tscn scene files."""

import re

from gdcf.core.constants import IDENTIFIER
from gdcf.core.source import line_at


class SceneReferenceExtractor:
    """Read `method="callback"` from `[connection ...]` records."""

    def __init__(self) -> None:
        self._method_re = re.compile(rf"""method\s*=\s*["']({IDENTIFIER})["']""")

    def extract(self, source: str) -> list[tuple[str, int]]:
        return [
            (match.group(1), line_at(source, match.start(1)))
            for match in self._method_re.finditer(source)
        ]
