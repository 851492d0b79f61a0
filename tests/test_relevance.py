import pytest

from closedissues.models import Found
from closedissues.relevance import DEFAULT_KEYWORDS, RelevanceFilter


def _found(snippet):
    return Found(
        file="a.cs",
        url="https://github.com/dotnet/runtime/issues/1",
        snippet=snippet,
        line=1,
        start=0,
        end=42,
    )


@pytest.mark.parametrize(
    "snippet",
    [
        "// Temporarily disabled",
        "// TEMPORARILY disabled",
        "[ActiveIssue(\"https://github.com/dotnet/runtime/issues/1\")]",
        "// Work around a JIT bug",
        "// WORKAROUND: remove once fixed",
        "// This is currently broken",
        "// skip for now",
        "// Resolved upstream",
    ],
)
def test_matches_keywords_case_insensitive(snippet):
    assert RelevanceFilter().matches(_found(snippet))


def test_rejects_unrelated_snippet():
    assert not RelevanceFilter().matches(_found("// See the design doc at"))


def test_extra_keywords():
    relevance = RelevanceFilter(extra=["HACK", " ", "hack"])
    assert relevance.keywords[-1] == "hack"
    assert len(relevance.keywords) == len(DEFAULT_KEYWORDS) + 1
    assert relevance.matches(_found("// Hack until the runtime ships"))


def test_select_preserves_order():
    items = [_found("fix one"), _found("unrelated"), _found("for now two")]
    assert RelevanceFilter().select(items) == [items[0], items[2]]


def test_empty_keywords_rejected():
    with pytest.raises(ValueError):
        RelevanceFilter(keywords=[" "])
