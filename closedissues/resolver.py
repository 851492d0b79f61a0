from __future__ import annotations

from typing import Dict, Iterable, List

from .config import TrackerTarget
from .console import RichLogger
from .extractors import extract_issue_id
from .models import UNRESOLVED_ISSUE_ID, Found, IssueGroups
from .tracker import GitHubClient, TrackerError


def group_candidates(candidates: Iterable[Found]) -> IssueGroups:
    groups: IssueGroups = {}
    for found in candidates:
        groups.setdefault(extract_issue_id(found.url), []).append(found)
    return groups


class IssueResolver:
    """Keeps only the issue groups whose issue the tracker reports as closed.

    One lookup is made per distinct issue id. Lookup failures and open
    issues drop the group; the unresolved bucket is never looked up.
    """

    def __init__(self, client: GitHubClient, tracker: TrackerTarget, logger: RichLogger):
        self.client = client
        self.tracker = tracker
        self.logger = logger
        self.stats: Dict[str, int] = {}

    def _reset_stats(self) -> None:
        self.stats = {
            "issues_total": 0,
            "issues_closed": 0,
            "issues_open": 0,
            "issues_failed": 0,
            "occurrences_unresolved": 0,
        }

    def resolve(self, groups: IssueGroups) -> IssueGroups:
        self._reset_stats()
        retained: IssueGroups = {}
        unresolved: List[Found] = groups.get(UNRESOLVED_ISSUE_ID, [])
        if unresolved:
            self.stats["occurrences_unresolved"] = len(unresolved)
            self.logger.warn(f"Skipping {len(unresolved)} occurrence(s) without a parseable issue id")

        issue_ids = [issue_id for issue_id in groups if issue_id != UNRESOLVED_ISSUE_ID]
        overall = len(issue_ids)
        self.stats["issues_total"] = overall
        if not issue_ids:
            return retained

        progress = self.logger.progress("Checking issues")
        with progress:
            task_id = progress.add_task("resolve", total=overall)
            for index, issue_id in enumerate(issue_ids):
                try:
                    status = self.client.get_issue(self.tracker.owner, self.tracker.repo, issue_id)
                except TrackerError as exc:
                    self.logger.warn(f"[{index}/{overall}] Failed to fetch issue {issue_id}: {exc}")
                    self.stats["issues_failed"] += 1
                    progress.advance(task_id)
                    continue

                if not status.closed:
                    self.logger.info(f"[{index}/{overall}] Found open issue {issue_id}")
                    self.stats["issues_open"] += 1
                else:
                    self.logger.info(f"[{index}/{overall}] Found closed issue {issue_id}")
                    self.stats["issues_closed"] += 1
                    retained[issue_id] = groups[issue_id]
                progress.advance(task_id)

        return retained
