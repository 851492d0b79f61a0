from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Set

from .config import DEFAULT_EXCLUDED_DIRS, DEFAULT_EXCLUDED_SUFFIXES, HIDDEN_PREFIX, TrackerTarget
from .console import RichLogger
from .extractors import FileReadError, ScanError, extract_from_file
from .models import Found


class DirectoryReadError(ScanError):
    pass


def merge_unique(results: List[Found], seen: Set[Found], found: Found) -> bool:
    if found in seen:
        return False
    seen.add(found)
    results.append(found)
    return True


class Scanner:
    """Depth-first walk of a source tree collecting tracker issue URLs.

    Directories are kept on an explicit stack of entry iterators, so the
    visiting order is the same pre-order a recursive walk would produce
    without growing the call stack.
    """

    def __init__(
        self,
        tracker: TrackerTarget,
        logger: RichLogger,
        excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
        excluded_suffixes: Iterable[str] = DEFAULT_EXCLUDED_SUFFIXES,
        follow_symlinks: bool = True,
        strict: bool = True,
    ):
        self.tracker = tracker
        self.logger = logger
        self.excluded_dirs = set(excluded_dirs)
        self.excluded_suffixes = tuple(excluded_suffixes)
        self.follow_symlinks = follow_symlinks
        self.strict = strict
        self.stats: Dict[str, int] = {}

    def _reset_stats(self) -> None:
        self.stats = {
            "dirs": 0,
            "dirs_skipped": 0,
            "files": 0,
            "files_skipped": 0,
            "urls": 0,
            "duplicates": 0,
        }

    def is_excluded_dir(self, name: str) -> bool:
        return name.startswith(HIDDEN_PREFIX) or name in self.excluded_dirs

    def is_excluded_file(self, name: str) -> bool:
        return name.endswith(self.excluded_suffixes)

    def _list_dir(self, directory: Path) -> Iterator[Path]:
        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            if self.strict:
                raise DirectoryReadError(f"Failed to read directory {directory}: {exc}") from exc
            self.logger.warn(f"Skipping unreadable directory: {directory} ({exc})")
            self.stats["dirs_skipped"] += 1
            return iter(())
        self.stats["dirs"] += 1
        return iter(entries)

    def _extract(self, path: Path, root: Path) -> List[Found]:
        try:
            return extract_from_file(path, root, self.tracker)
        except FileReadError as exc:
            if self.strict:
                raise
            self.logger.warn(f"Skipping unreadable file: {exc}")
            self.stats["files_skipped"] += 1
            return []

    def scan(self, root: Path) -> List[Found]:
        root = Path(root)
        self._reset_stats()
        results: List[Found] = []
        seen: Set[Found] = set()
        visited: Set[Path] = {root.resolve()}
        stack: List[Iterator[Path]] = [self._list_dir(root)]

        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue

            if entry.is_symlink() and not self.follow_symlinks:
                self.logger.debug(f"Skipping symlink: {entry}")
                continue

            if entry.is_dir():
                if self.is_excluded_dir(entry.name):
                    self.logger.debug(f"Skipping directory: {entry}")
                    continue
                real = entry.resolve()
                if real in visited:
                    continue
                visited.add(real)
                stack.append(self._list_dir(entry))
                continue

            # broken links and special files
            if not entry.is_file():
                continue
            if self.is_excluded_file(entry.name):
                continue

            self.stats["files"] += 1
            for found in self._extract(entry, root):
                self.stats["urls"] += 1
                self.logger.debug(
                    f"Found URL {found.url} in File {entry} (pos {found.start} - {found.end})"
                )
                if not merge_unique(results, seen, found):
                    self.stats["duplicates"] += 1

        return results
