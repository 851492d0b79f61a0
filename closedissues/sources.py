from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import List

from .console import RichLogger


class SourceError(RuntimeError):
    pass


def _run_git(args: List[str], cwd: Path | None = None) -> str:
    git = shutil.which("git")
    if git is None:
        raise SourceError("git executable not found on PATH.")
    try:
        proc = subprocess.run(
            [git, *args],
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise SourceError(f"Failed to run git {' '.join(args)}: {exc}") from exc
    if proc.returncode != 0:
        detail = (proc.stderr or proc.stdout or "").strip()[:500]
        raise SourceError(f"git {args[0]} failed ({proc.returncode}): {detail}")
    return proc.stdout


def clone_repository(url: str, dest: Path, logger: RichLogger) -> Path:
    logger.info(f"Cloning {url} into {dest}")
    _run_git(["clone", "--depth", "1", "--quiet", url, str(dest)])
    return dest


def head_commit(path: Path) -> str:
    commit = _run_git(["rev-parse", "HEAD"], cwd=path).strip()
    if not commit:
        raise SourceError(f"Could not determine HEAD commit of {path}")
    return commit
