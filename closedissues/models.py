from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

UNRESOLVED_ISSUE_ID = 0


@dataclass(frozen=True)
class Found:
    file: str
    url: str
    snippet: str
    line: int
    start: int
    end: int

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)

    @staticmethod
    def from_dict(d: Dict[str, object]) -> "Found":
        return Found(
            file=str(d["file"]),
            url=str(d["url"]),
            snippet=str(d.get("snippet", "")),
            line=int(d["line"]),
            start=int(d["start"]),
            end=int(d["end"]),
        )


@dataclass(frozen=True)
class IssueStatus:
    number: int
    closed_at: Optional[str]
    state: str = ""
    title: str = ""

    @property
    def closed(self) -> bool:
        return self.closed_at is not None


IssueGroups = Dict[int, List[Found]]
