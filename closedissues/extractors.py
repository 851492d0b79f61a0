from __future__ import annotations

from pathlib import Path
from typing import List

from .config import TrackerTarget
from .models import UNRESOLVED_ISSUE_ID, Found
from .patterns import URL_RX
from .text_utils import byte_offset, find_line_of_position, snippet_for_line

MAX_ISSUE_ID = 2**32 - 1


class ScanError(RuntimeError):
    pass


class FileReadError(ScanError):
    pass


class LineNotFoundError(ScanError):
    pass


def extract_issue_id(url: str) -> int:
    """Parse the trailing issue number of a tracker URL.

    Fragment and query markers are located in the original URL, so the
    two strips do not compound. Returns ``UNRESOLVED_ISSUE_ID`` when no
    number can be parsed.
    """
    value = url
    fragment_pos = url.rfind("#")
    if fragment_pos != -1:
        value = value[:fragment_pos]
    query_pos = url.rfind("?")
    if query_pos != -1:
        value = value[:query_pos]

    while value and not ("0" <= value[-1] <= "9"):
        value = value[:-1]

    last_slash = url.rfind("/")
    if last_slash == -1:
        return UNRESOLVED_ISSUE_ID
    digits = value[last_slash + 1:]
    if not digits or not all("0" <= ch <= "9" for ch in digits):
        return UNRESOLVED_ISSUE_ID
    issue_id = int(digits)
    if issue_id > MAX_ISSUE_ID:
        return UNRESOLVED_ISSUE_ID
    return issue_id


def relative_file_name(path: Path, root: Path) -> str:
    try:
        rel_path = path.relative_to(root).as_posix()
    except ValueError:
        rel_path = str(path)
    return rel_path.replace("\\", "/")


def extract_occurrence(text: str, rel_path: str, tracker: TrackerTarget) -> List[Found]:
    m = URL_RX.search(text)
    if m is None:
        return []
    url = m.group(0)
    if tracker.issue_marker not in url:
        return []

    start = byte_offset(text, m.start())
    end = start + len(url.encode("utf-8"))
    line = find_line_of_position(text, start)
    if line is None:
        raise LineNotFoundError(f"No line for offset {start} in {rel_path}")

    return [
        Found(
            file=rel_path,
            url=url,
            snippet=snippet_for_line(text, line),
            line=line,
            start=start,
            end=end,
        )
    ]


def extract_from_file(path: Path, root: Path, tracker: TrackerTarget) -> List[Found]:
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise FileReadError(f"Cannot open file {path}: {exc}") from exc
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return []
    return extract_occurrence(text, relative_file_name(path, root), tracker)
