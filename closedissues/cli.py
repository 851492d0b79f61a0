from __future__ import annotations

import argparse
import tempfile
from pathlib import Path
from typing import Iterable, List, Tuple

from rich.console import Console

from .config import (
    DEFAULT_API_BASE,
    DEFAULT_COMMIT,
    DEFAULT_EXCLUDED_DIRS,
    DEFAULT_EXCLUDED_SUFFIXES,
    DEFAULT_HOST,
    DEFAULT_USER_AGENT,
    ScanSettings,
    TrackerTarget,
    normalize_suffix,
    resolve_token,
)
from .console import RichLogger
from .extractors import ScanError
from .pipeline import run_pipeline, scan_candidates
from .results import ReportWriter, summary_table
from .sources import SourceError, clone_repository, head_commit
from .tracker import DEFAULT_RATE_LIMIT_SECONDS, GitHubClient


def _add_common_arguments(parser: argparse.ArgumentParser, root_required: bool = True) -> None:
    parser.add_argument("--root", required=root_required, help="Source tree to scan.")
    parser.add_argument("--owner", required=True, help="Tracker repository owner, e.g. dotnet.")
    parser.add_argument("--repo", required=True, help="Tracker repository name, e.g. runtime.")
    parser.add_argument(
        "--host",
        default=DEFAULT_HOST,
        help=f"Tracker web host used to recognise issue URLs (default: {DEFAULT_HOST}).",
    )
    parser.add_argument(
        "--commit",
        default=None,
        help=f"Commit or branch used for deep links in the report (default: {DEFAULT_COMMIT}).",
    )
    parser.add_argument("--out", default=".", help="Output directory for result files (default: .).")
    parser.add_argument(
        "--keyword",
        action="append",
        default=[],
        help="Additional workaround keyword (repeatable).",
    )
    parser.add_argument(
        "--exclude-dir",
        action="append",
        default=[],
        help="Additional directory name to skip (repeatable). Hidden directories are always skipped.",
    )
    parser.add_argument(
        "--exclude-ext",
        action="append",
        default=[],
        help="Additional file extension to skip (repeatable).",
    )
    parser.add_argument(
        "--no-follow-symlinks",
        dest="follow_symlinks",
        action="store_false",
        help="Skip symbolic links while scanning (links are followed by default).",
    )
    parser.add_argument(
        "--skip-unreadable",
        action="store_true",
        help="Warn and continue on unreadable directories or files instead of aborting.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose debug logs")


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="closedissues",
        description="Find workaround comments in a source tree that point at issues which are now closed.",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    scan = sub.add_parser(
        "scan",
        help="Scan a source tree and write workaround candidates without contacting the tracker.",
    )
    _add_common_arguments(scan)

    report = sub.add_parser(
        "report",
        help="Scan a source tree, check referenced issues and report the closed ones.",
    )
    _add_common_arguments(report, root_required=False)
    report.add_argument(
        "--clone",
        metavar="URL",
        help="Clone this repository into a temporary directory and scan it instead of --root.",
    )
    report.add_argument(
        "--token",
        help="Tracker API token. You can also set GITHUB_TOKEN, GH_TOKEN or GITHUB_API_KEY.",
    )
    report.add_argument(
        "--api-base",
        default=DEFAULT_API_BASE,
        help=f"Tracker API base URL (default: {DEFAULT_API_BASE}).",
    )
    report.add_argument(
        "--rate-limit",
        type=float,
        default=DEFAULT_RATE_LIMIT_SECONDS,
        help="Minimum seconds between tracker requests (default: 0).",
    )
    report.add_argument(
        "--user-agent",
        default=DEFAULT_USER_AGENT,
        help="User-Agent header sent to the tracker.",
    )

    return ap


def _merge_names(defaults: Iterable[str], extra: Iterable[str]) -> Tuple[str, ...]:
    names: List[str] = list(defaults)
    for raw in extra:
        value = raw.strip()
        if value and value not in names:
            names.append(value)
    return tuple(names)


def _merge_suffixes(extra: Iterable[str]) -> Tuple[str, ...]:
    suffixes: List[str] = list(DEFAULT_EXCLUDED_SUFFIXES)
    for raw in extra:
        value = normalize_suffix(raw)
        if value and value not in suffixes:
            suffixes.append(value)
    return tuple(suffixes)


def build_settings(args, root: Path, commit: str | None = None) -> ScanSettings:
    tracker = TrackerTarget(
        owner=args.owner.strip(),
        repo=args.repo.strip(),
        host=args.host.strip().rstrip("/"),
        api_base=getattr(args, "api_base", DEFAULT_API_BASE),
    )
    return ScanSettings(
        root=root,
        tracker=tracker,
        commit=args.commit or commit or DEFAULT_COMMIT,
        excluded_dirs=_merge_names(DEFAULT_EXCLUDED_DIRS, args.exclude_dir),
        excluded_suffixes=_merge_suffixes(args.exclude_ext),
        extra_keywords=tuple(k for k in args.keyword if k.strip()),
        follow_symlinks=args.follow_symlinks,
        strict=not args.skip_unreadable,
    )


def _check_root(raw: str | None, logger: RichLogger) -> Path | None:
    if not raw:
        logger.error("Missing source tree. Use --root or --clone.")
        return None
    root = Path(raw).expanduser()
    if not root.is_dir():
        logger.error(f"Source tree is not a directory: {root}")
        return None
    return root.resolve()


def run_scan(args, console: Console | None = None) -> int:
    console = console or Console()
    logger = RichLogger(console=console, verbose=args.verbose)

    root = _check_root(args.root, logger)
    if root is None:
        return 2
    settings = build_settings(args, root)

    try:
        outcome = scan_candidates(settings, logger)
    except ScanError as exc:
        logger.error(str(exc))
        return 1

    ReportWriter(Path(args.out), logger).write_candidates(outcome.candidates)
    return 0


def _report(args, settings: ScanSettings, logger: RichLogger, token: str) -> int:
    client = GitHubClient(
        token,
        api_base=settings.tracker.api_base,
        user_agent=args.user_agent,
        rate_limit_seconds=args.rate_limit,
    )
    try:
        outcome = run_pipeline(settings, client, logger)
    except ScanError as exc:
        logger.error(str(exc))
        return 1

    logger.step("Generating results")
    logger.console.print(summary_table(outcome.groups, settings.tracker))
    ReportWriter(Path(args.out), logger).write_all(outcome.groups, settings.tracker, settings.commit)
    return 0


def run_report(args, console: Console | None = None) -> int:
    console = console or Console()
    logger = RichLogger(console=console, verbose=args.verbose)

    token = resolve_token(args.token)
    if not token:
        logger.error("Missing tracker token. Use --token or set GITHUB_TOKEN.")
        return 2

    if args.clone:
        with tempfile.TemporaryDirectory(prefix="closedissues-") as tmp:
            try:
                root = clone_repository(args.clone, Path(tmp) / "source", logger)
                commit = head_commit(root)
            except SourceError as exc:
                logger.error(str(exc))
                return 1
            return _report(args, build_settings(args, root, commit), logger, token)

    root = _check_root(args.root, logger)
    if root is None:
        return 2
    return _report(args, build_settings(args, root), logger, token)


def main(argv: List[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    if args.command == "scan":
        return run_scan(args)
    if args.command == "report":
        return run_report(args)
    return 2
