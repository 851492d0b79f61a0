from __future__ import annotations

from typing import List, Optional


def byte_offset(text: str, index: int) -> int:
    """Convert a character index into a UTF-8 byte offset."""
    return len(text[:index].encode("utf-8"))


def find_line_of_position(text: str, pos: int) -> Optional[int]:
    """Return the 1-based line holding byte offset ``pos``.

    Only ``\\n`` separates lines; a ``\\r`` before it counts as content.
    Returns ``None`` when ``pos`` lies at or past the end of ``text``.
    """
    if pos < 0 or pos >= len(text.encode("utf-8")):
        return None
    line_number = 0
    current_pos = 0
    for segment in text.split("\n"):
        line_number += 1
        current_pos += len(segment.encode("utf-8")) + 1
        if current_pos >= pos:
            return line_number
    return None


def split_lines(text: str) -> List[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def snippet_for_line(text: str, line: int) -> str:
    # matched line plus the one before it
    lines = split_lines(text)
    start = max(0, line - 2)
    return "\n".join(lines[start:line])
