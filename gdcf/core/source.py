"""Source text normalization and string literal masking."""

from __future__ import annotations

from pathlib import Path

BOM = "\ufeff"
QUOTES = ("'", '"')


def normalize_source(text: str) -> str:
    """Normalize line endings and strip a leading BOM.

    Keeps regex matches and line counts consistent across platforms.
    """
    if not text:
        return text
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.removeprefix(BOM)


def read_source(path: Path) -> str:
    """Read a file as UTF-8 (invalid bytes replaced) and normalize it.

    Raises:
        OSError: if the file cannot be opened or read.
    """
    return normalize_source(path.read_text(encoding="utf-8", errors="replace"))


def line_at(source: str, offset: int) -> int:
    """1-based line number of a character offset."""
    return source.count("\n", 0, offset) + 1


def _blank(text: str) -> str:
    return "".join("\n" if ch == "\n" else " " for ch in text)


def mask_string_literals(source: str) -> str:
    """
    Replace the contents of string literals with spaces.

    The result always has the same length as `source`, so offsets found in the
    masked text are valid in the original. Quote characters and newlines are
    kept; only the characters inside a literal are blanked.
    """
    out: list[str] = []
    n = len(source)
    i = 0
    while i < n:
        ch = source[i]
        if ch not in QUOTES or (i > 0 and source[i - 1] == "\\"):
            out.append(ch)
            i += 1
            continue

        triple = ch * 3
        if source.startswith(triple, i):
            end = source.find(triple, i + 3)
            if end == -1:
                out.append(triple)
                out.append(_blank(source[i + 3 :]))
                break
            out.append(triple)
            out.append(_blank(source[i + 3 : end]))
            out.append(triple)
            i = end + 3
            continue

        out.append(ch)
        i += 1
        if i < n and source[i] == ch:
            # Empty literal
            out.append(ch)
            i += 1
            continue

        while i < n:
            cur = source[i]
            if cur == "\n":
                break
            if cur == "\\" and i + 1 < n and source[i + 1] != "\n":
                out.append("  ")
                i += 2
                continue
            if cur == ch:
                out.append(ch)
                i += 1
                break
            out.append(" ")
            i += 1

    return "".join(out)
