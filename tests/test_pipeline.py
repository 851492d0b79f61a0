import pytest

from closedissues.config import ScanSettings
from closedissues.pipeline import run_pipeline, scan_candidates
from closedissues.scanner import DirectoryReadError


@pytest.fixture
def source_tree(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "Widget.cs").write_text(
        "namespace Widgets\n// fix for https://github.com/dotnet/runtime/issues/42\nclass Widget {}\n",
        encoding="utf-8",
    )
    (src / "Docs.cs").write_text(
        "// Design notes\n// see https://github.com/dotnet/runtime/issues/77\n",
        encoding="utf-8",
    )
    return tmp_path


def test_closed_issue_is_reported(source_tree, tracker, logger, fake_tracker_cls):
    client = fake_tracker_cls(closed={42: True, 77: True})
    outcome = run_pipeline(ScanSettings(root=source_tree, tracker=tracker), client, logger)
    assert list(outcome.groups) == [42]
    (found,) = outcome.groups[42]
    assert found.file == "src/Widget.cs"
    assert found.line == 2
    assert client.calls == [("dotnet", "runtime", 42)]


def test_open_issue_is_dropped(source_tree, tracker, logger, fake_tracker_cls):
    client = fake_tracker_cls(closed={42: False})
    outcome = run_pipeline(ScanSettings(root=source_tree, tracker=tracker), client, logger)
    assert outcome.groups == {}
    assert outcome.stats["issues_open"] == 1


def test_extra_keywords_widen_candidates(source_tree, tracker, logger):
    settings = ScanSettings(root=source_tree, tracker=tracker, extra_keywords=("design notes",))
    outcome = scan_candidates(settings, logger)
    assert [f.file for f in outcome.found] == ["src/Docs.cs", "src/Widget.cs"]
    assert len(outcome.candidates) == 2


def test_scan_error_propagates(source_tree, tracker, logger, fake_tracker_cls):
    settings = ScanSettings(root=source_tree / "missing", tracker=tracker)
    client = fake_tracker_cls()
    with pytest.raises(DirectoryReadError):
        run_pipeline(settings, client, logger)
    assert client.calls == []


def test_mapping_decisions_logged(source_tree, tracker, logger, console):
    outcome = scan_candidates(ScanSettings(root=source_tree, tracker=tracker), logger)
    assert [f.file for f in outcome.candidates] == ["src/Widget.cs"]
    output = console.file.getvalue()
    assert "Skipping https://github.com/dotnet/runtime/issues/77" in output
    assert "Mapping https://github.com/dotnet/runtime/issues/42" in output
