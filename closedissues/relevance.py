from __future__ import annotations

from typing import Iterable, List, Sequence

from .models import Found

DEFAULT_KEYWORDS = (
    "[ActiveIssue(",
    "fix",
    "resolve",
    "workaround",
    "work around",
    "for now",
    "temporarily",
    "currently",
)


class RelevanceFilter:
    """Keyword heuristic flagging snippets that read like a workaround."""

    def __init__(self, keywords: Sequence[str] = DEFAULT_KEYWORDS, extra: Iterable[str] = ()):
        merged: List[str] = []
        for raw in list(keywords) + list(extra):
            value = raw.strip().lower()
            if not value or value in merged:
                continue
            merged.append(value)
        if not merged:
            raise ValueError("Keywords cannot be empty")
        self.keywords = tuple(merged)

    def matches_text(self, text: str) -> bool:
        lowered = text.lower()
        return any(keyword in lowered for keyword in self.keywords)

    def matches(self, found: Found) -> bool:
        return self.matches_text(found.snippet)

    def select(self, results: Iterable[Found]) -> List[Found]:
        return [found for found in results if self.matches(found)]
