import subprocess

import pytest

from closedissues import sources
from closedissues.sources import SourceError, clone_repository, head_commit


@pytest.fixture
def fake_git(monkeypatch):
    calls = []
    outcome = {"returncode": 0, "stdout": "", "stderr": ""}

    def run(cmd, cwd=None, capture_output=False, text=False, check=False):
        calls.append((cmd, cwd))
        return subprocess.CompletedProcess(cmd, outcome["returncode"], outcome["stdout"], outcome["stderr"])

    monkeypatch.setattr(sources.shutil, "which", lambda name: "/usr/bin/git")
    monkeypatch.setattr(sources.subprocess, "run", run)
    return calls, outcome


def test_clone_repository(fake_git, tmp_path, logger):
    calls, _ = fake_git
    dest = tmp_path / "source"
    assert clone_repository("https://github.com/dotnet/runtime", dest, logger) == dest
    cmd, _ = calls[0]
    assert cmd == ["/usr/bin/git", "clone", "--depth", "1", "--quiet", "https://github.com/dotnet/runtime", str(dest)]


def test_head_commit(fake_git, tmp_path):
    calls, outcome = fake_git
    outcome["stdout"] = "f04a24249835096eea1a1a66e4af03cfec5ed32b\n"
    assert head_commit(tmp_path) == "f04a24249835096eea1a1a66e4af03cfec5ed32b"
    assert calls[0][1] == str(tmp_path)


def test_git_failure(fake_git, tmp_path, logger):
    _, outcome = fake_git
    outcome.update(returncode=128, stderr="fatal: repository not found")
    with pytest.raises(SourceError, match="repository not found"):
        clone_repository("https://example.invalid/x", tmp_path / "s", logger)


def test_missing_git(monkeypatch, tmp_path):
    monkeypatch.setattr(sources.shutil, "which", lambda name: None)
    with pytest.raises(SourceError):
        head_commit(tmp_path)
