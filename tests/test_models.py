"""Tests for shared value types."""
from prep_planner.models import ImportSummary, Playbook, SearchResult, SheetSummary


def test_sheet_summary_defaults():
    s = SheetSummary()
    assert s.inserted == 0
    assert s.updated == 0
    assert s.errors == []


def test_sheet_summaries_do_not_share_errors():
    a, b = SheetSummary(), SheetSummary()
    a.errors.append("x")
    assert b.errors == []


def test_import_summary_totals():
    summary = ImportSummary()
    summary.plan.inserted = 3
    summary.mocks.updated = 2
    summary.problems.errors.append("Row 2: bad")
    assert summary.total_operations == 5
    assert summary.total_errors == 1


def test_import_summary_to_dict():
    d = ImportSummary().to_dict()
    assert list(d) == ["plan", "problems", "oop_problems", "resources", "mocks"]
    assert d["plan"] == {"inserted": 0, "updated": 0, "errors": []}


def test_search_result_defaults():
    r = SearchResult(id="plan-1", type="plan", title="t", description="d")
    assert r.content == ""
    assert r.metadata == {}
    assert r.matched_fields == []


def test_playbook_defaults():
    pb = Playbook(id="x", name="x.md", title="X", description="")
    assert pb.category == "General"
    assert pb.week is None
    assert pb.estimated_hours == 6
