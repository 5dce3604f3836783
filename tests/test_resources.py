# tests/test_resources.py
from prep_planner.resources import get_resources, toggle_resource_pin


def add_resource(store, title, week=1, area="LLM"):
    return store.insert("resources", {"week": week, "area": area, "title": title})


def test_pinned_first(store):
    add_resource(store, "Book", week=1)
    rid = add_resource(store, "Paper", week=3)
    assert toggle_resource_pin(store, rid) is True
    rows = get_resources(store)
    assert [r["title"] for r in rows] == ["Paper", "Book"]
    assert rows[0]["pinned"] is True


def test_filter_pinned(store):
    add_resource(store, "Book")
    rid = add_resource(store, "Paper")
    toggle_resource_pin(store, rid)
    assert [r["title"] for r in get_resources(store, pinned=False)] == ["Book"]
    assert toggle_resource_pin(store, rid) is False
    assert get_resources(store, pinned=True) == []


def test_filter_area(store):
    add_resource(store, "Book", area="Systems")
    add_resource(store, "Paper", area="LLM")
    assert [r["title"] for r in get_resources(store, area="LLM")] == ["Paper"]
