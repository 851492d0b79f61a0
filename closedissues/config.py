from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

DEFAULT_HOST = "github.com"
DEFAULT_API_BASE = "https://api.github.com"
DEFAULT_COMMIT = "main"
DEFAULT_USER_AGENT = "closedissues/1.0"
DEFAULT_EXCLUDED_DIRS: Tuple[str, ...] = ("artifacts",)
DEFAULT_EXCLUDED_SUFFIXES: Tuple[str, ...] = (".dll", ".pdb", ".exe", ".lib")
HIDDEN_PREFIX = "."

TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN", "GITHUB_API_KEY")


@dataclass(frozen=True)
class TrackerTarget:
    owner: str
    repo: str
    host: str = DEFAULT_HOST
    api_base: str = DEFAULT_API_BASE

    @property
    def issue_marker(self) -> str:
        return f"{self.host}/{self.owner}/{self.repo}/issues"

    def issue_url(self, issue_id: int) -> str:
        return f"https://{self.issue_marker}/{issue_id}"

    def blob_base(self, commit: str) -> str:
        return f"https://{self.host}/{self.owner}/{self.repo}/blob/{commit}"


@dataclass(frozen=True)
class ScanSettings:
    root: Path
    tracker: TrackerTarget
    commit: str = DEFAULT_COMMIT
    excluded_dirs: Tuple[str, ...] = DEFAULT_EXCLUDED_DIRS
    excluded_suffixes: Tuple[str, ...] = DEFAULT_EXCLUDED_SUFFIXES
    extra_keywords: Tuple[str, ...] = field(default_factory=tuple)
    follow_symlinks: bool = True
    strict: bool = True


def resolve_token(explicit: str | None) -> str | None:
    if explicit and explicit.strip():
        return explicit.strip()
    for key in TOKEN_ENV_VARS:
        value = os.environ.get(key, "")
        if value.strip():
            return value.strip()
    return None


def normalize_suffix(value: str) -> Optional[str]:
    raw = value.strip()
    if not raw:
        return None
    return raw if raw.startswith(".") else f".{raw}"
