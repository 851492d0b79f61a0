from __future__ import annotations

import io
from typing import Dict, List, Optional

import pytest
from rich.console import Console

from closedissues.config import TrackerTarget
from closedissues.console import RichLogger
from closedissues.models import IssueStatus
from closedissues.tracker import TrackerError, TrackerNotFoundError


class FakeTracker:
    def __init__(self, closed: Optional[Dict[int, bool]] = None, failing: Optional[List[int]] = None):
        self.closed = closed or {}
        self.failing = set(failing or [])
        self.calls: List[tuple] = []

    def get_issue(self, owner: str, repo: str, number: int) -> IssueStatus:
        self.calls.append((owner, repo, number))
        if number in self.failing:
            raise TrackerError(f"boom {number}")
        if number not in self.closed:
            raise TrackerNotFoundError(f"missing {number}")
        closed_at = "2024-01-01T00:00:00Z" if self.closed[number] else None
        return IssueStatus(number=number, closed_at=closed_at, state="closed" if closed_at else "open")


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=120, force_terminal=False)


@pytest.fixture
def logger(console) -> RichLogger:
    return RichLogger(console=console, verbose=True)


@pytest.fixture
def tracker() -> TrackerTarget:
    return TrackerTarget(owner="dotnet", repo="runtime")


@pytest.fixture
def fake_tracker_cls():
    return FakeTracker
