from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

from rich.table import Table

from .config import TrackerTarget
from .console import RichLogger
from .models import Found, IssueGroups

RESULTS_JSON_NAME = "results.json"
RESULTS_MD_NAME = "results.md"
CANDIDATES_JSON_NAME = "candidates.json"
REPORT_TITLE = "Find Closed Issues Tool Results"


def sort_groups(groups: IssueGroups) -> List[Tuple[int, List[Found]]]:
    return sorted(groups.items(), key=lambda item: item[0])


def render_json(groups: IssueGroups) -> str:
    payload: Dict[str, List[Dict[str, object]]] = {
        str(issue_id): [found.to_dict() for found in occurrences]
        for issue_id, occurrences in sort_groups(groups)
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def deep_link(blob_base: str, found: Found) -> str:
    first = max(1, found.line - 2)
    return f"{blob_base}/{found.file}#L{first}-L{found.line + 2}"


def render_markdown(groups: IssueGroups, tracker: TrackerTarget, commit: str) -> str:
    blob_base = tracker.blob_base(commit)
    parts = [f"# {REPORT_TITLE}\n"]
    for issue_id, occurrences in sort_groups(groups):
        parts.append(f"\n## [Issue {issue_id}]({tracker.issue_url(issue_id)})\n")
        for found in occurrences:
            parts.append(
                f"\nFile `{found.file}` (File Position {found.start}-{found.end})\n\n"
                f"{deep_link(blob_base, found)}\n"
            )
    return "".join(parts)


def summary_table(groups: IssueGroups, tracker: TrackerTarget) -> Table:
    table = Table(title="Closed Issues Summary", header_style="bold")
    table.add_column("Issue", style="cyan", justify="right")
    table.add_column("Occurrences", justify="right")
    table.add_column("Files")
    for issue_id, occurrences in sort_groups(groups):
        files = sorted({found.file for found in occurrences})
        table.add_row(f"[link={tracker.issue_url(issue_id)}]{issue_id}[/link]", str(len(occurrences)), "\n".join(files))
    return table


class ReportWriter:
    def __init__(self, out_dir: Path, logger: RichLogger):
        self.out_dir = out_dir
        self.logger = logger

    def write_all(self, groups: IssueGroups, tracker: TrackerTarget, commit: str) -> Tuple[Path, Path]:
        self.out_dir.mkdir(parents=True, exist_ok=True)
        json_path = self.out_dir / RESULTS_JSON_NAME
        md_path = self.out_dir / RESULTS_MD_NAME

        self.logger.info(f"Generating {json_path.name}")
        _atomic_write(json_path, render_json(groups))
        self.logger.info(f"Generating {md_path.name}")
        _atomic_write(md_path, render_markdown(groups, tracker, commit))

        self.logger.done(f"Results written to: {self.out_dir}")
        return json_path, md_path

    def write_candidates(self, candidates: Sequence[Found]) -> Path:
        self.out_dir.mkdir(parents=True, exist_ok=True)
        path = self.out_dir / CANDIDATES_JSON_NAME
        payload = [found.to_dict() for found in candidates]
        _atomic_write(path, json.dumps(payload, indent=2, ensure_ascii=False))
        self.logger.done(f"Candidates written to: {path}")
        return path


def _atomic_write(path: Path, content: str) -> None:
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with open(tmp_path, "w", encoding="utf-8", newline="\n") as handle:
        handle.write(content)
    tmp_path.replace(path)
