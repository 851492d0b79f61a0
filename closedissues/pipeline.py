from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .config import ScanSettings
from .console import RichLogger
from .models import Found, IssueGroups
from .relevance import RelevanceFilter
from .resolver import IssueResolver, group_candidates
from .scanner import Scanner
from .tracker import GitHubClient


@dataclass
class ScanOutcome:
    found: List[Found]
    candidates: List[Found]
    stats: Dict[str, int] = field(default_factory=dict)


@dataclass
class PipelineOutcome:
    scan: ScanOutcome
    groups: IssueGroups
    stats: Dict[str, int] = field(default_factory=dict)


def scan_candidates(settings: ScanSettings, logger: RichLogger) -> ScanOutcome:
    scanner = Scanner(
        tracker=settings.tracker,
        logger=logger,
        excluded_dirs=settings.excluded_dirs,
        excluded_suffixes=settings.excluded_suffixes,
        follow_symlinks=settings.follow_symlinks,
        strict=settings.strict,
    )
    relevance = RelevanceFilter(extra=settings.extra_keywords)

    logger.step(f"Scanning {settings.root}")
    with logger.status("Scanning files"):
        found = scanner.scan(settings.root)
    logger.info(
        f"Scanned {scanner.stats['files']} files in {scanner.stats['dirs']} directories, "
        f"{len(found)} issue reference(s)"
    )

    logger.step("Mapping code parts to issues")
    candidates = relevance.select(found)
    selected = set(candidates)
    total = len(found)
    for index, item in enumerate(found):
        action = "Mapping" if item in selected else "Skipping"
        logger.debug(f"[{index}/{total}] {action} {item.url}")
    logger.info(f"{len(candidates)} of {total} reference(s) look like workarounds")

    return ScanOutcome(found=found, candidates=candidates, stats=dict(scanner.stats))


def run_pipeline(settings: ScanSettings, client: GitHubClient, logger: RichLogger) -> PipelineOutcome:
    scan = scan_candidates(settings, logger)
    groups = group_candidates(scan.candidates)

    logger.step("Checking issues (only collect closed issues)")
    resolver = IssueResolver(client, settings.tracker, logger)
    retained = resolver.resolve(groups)

    stats = dict(scan.stats)
    stats.update(resolver.stats)
    return PipelineOutcome(scan=scan, groups=retained, stats=stats)
