from __future__ import annotations

import time
from typing import Optional

import requests

from .config import DEFAULT_API_BASE, DEFAULT_USER_AGENT
from .models import IssueStatus

DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_RATE_LIMIT_SECONDS = 0.0


class TrackerError(RuntimeError):
    pass


class TrackerAuthorizationError(TrackerError):
    pass


class TrackerNotFoundError(TrackerError):
    pass


class TrackerRateLimitError(TrackerError):
    pass


class GitHubClient:
    def __init__(
        self,
        token: str,
        api_base: str = DEFAULT_API_BASE,
        user_agent: str = DEFAULT_USER_AGENT,
        rate_limit_seconds: float = DEFAULT_RATE_LIMIT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.token = token.strip()
        self.api_base = api_base.rstrip("/")
        self.user_agent = user_agent.strip() or DEFAULT_USER_AGENT
        self.rate_limit_seconds = max(0.0, rate_limit_seconds)
        self.session = session or requests.Session()
        self._last_request = 0.0

    def _wait_rate_limit(self) -> None:
        if self.rate_limit_seconds <= 0:
            return
        now = time.time()
        delta = now - self._last_request
        if delta < self.rate_limit_seconds:
            time.sleep(self.rate_limit_seconds - delta)
        self._last_request = time.time()

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        self._wait_rate_limit()
        headers = kwargs.pop("headers", {})
        headers.setdefault("Authorization", f"Bearer {self.token}")
        headers.setdefault("Accept", "application/vnd.github+json")
        headers.setdefault("User-Agent", self.user_agent)
        try:
            resp = self.session.request(
                method, f"{self.api_base}{path}", headers=headers, timeout=DEFAULT_TIMEOUT_SECONDS, **kwargs
            )
        except requests.RequestException as exc:
            raise TrackerError(f"Network error contacting {self.api_base}: {exc}") from exc

        if resp.status_code == 401:
            raise TrackerAuthorizationError("Tracker token unauthorized (401).")
        if resp.status_code in (403, 429) and resp.headers.get("X-RateLimit-Remaining") == "0":
            raise TrackerRateLimitError(f"Tracker rate limit exhausted ({resp.status_code}).")
        if resp.status_code == 403:
            raise TrackerAuthorizationError("Tracker token lacks access to this resource (403).")
        if resp.status_code in (404, 410):
            raise TrackerNotFoundError(f"Tracker resource not found: {path} ({resp.status_code}).")
        if resp.status_code >= 400:
            raise TrackerError(f"Tracker API error {resp.status_code}: {resp.text[:200]}")
        return resp

    def get_issue(self, owner: str, repo: str, number: int) -> IssueStatus:
        resp = self._request("get", f"/repos/{owner}/{repo}/issues/{number}")
        try:
            data = resp.json()
        except ValueError as exc:
            raise TrackerError(f"Issue {number} returned invalid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise TrackerError(f"Issue {number} returned an unexpected payload.")
        closed_at = data.get("closed_at")
        return IssueStatus(
            number=int(data.get("number") or number),
            closed_at=str(closed_at) if closed_at else None,
            state=str(data.get("state") or ""),
            title=str(data.get("title") or ""),
        )
