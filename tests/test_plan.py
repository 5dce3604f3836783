# tests/test_plan.py
from datetime import date

import pytest

from prep_planner.plan import (
    get_plan_item, get_plan_items, get_plan_items_by_date_range, get_todays_plan_items,
    update_plan_item_notes, update_plan_item_status,
)


def add_item(store, day, task_type="Study", week=1, status="todo"):
    return store.insert("plan_items", {
        "date": day, "week": week, "day_name": "Monday", "theme": "Attention",
        "task_type": task_type, "task_desc": f"{task_type} task", "status": status,
    })


def test_todays_items_ordered_by_task_type(store):
    add_item(store, "2025-06-10", "Study")
    add_item(store, "2025-06-10", "Build")
    add_item(store, "2025-06-11", "Drill")
    items = get_todays_plan_items(store, date(2025, 6, 10))
    assert [i["task_type"] for i in items] == ["Build", "Study"]


def test_date_range_is_inclusive(store):
    for day in ("2025-06-09", "2025-06-10", "2025-06-12", "2025-06-13"):
        add_item(store, day)
    items = get_plan_items_by_date_range(store, "2025-06-10", "2025-06-12")
    assert [i["date"] for i in items] == ["2025-06-10", "2025-06-12"]


def test_filters_combine(store):
    add_item(store, "2025-06-10", week=1, status="done")
    add_item(store, "2025-06-11", week=1, status="todo")
    add_item(store, "2025-06-17", week=2, status="done")
    assert len(get_plan_items(store, week=1, status="done")) == 1
    assert len(get_plan_items(store, status="done")) == 2


def test_any_status_transition_allowed(store):
    item_id = add_item(store, "2025-06-10", status="done")
    update_plan_item_status(store, item_id, "todo")
    assert get_plan_item(store, item_id)["status"] == "todo"
    update_plan_item_status(store, item_id, "in_progress")
    assert get_plan_item(store, item_id)["status"] == "in_progress"


def test_unknown_status_rejected(store):
    item_id = add_item(store, "2025-06-10")
    with pytest.raises(ValueError):
        update_plan_item_status(store, item_id, "solved")
    assert get_plan_item(store, item_id)["status"] == "todo"


def test_update_notes(store):
    item_id = add_item(store, "2025-06-10")
    update_plan_item_notes(store, item_id, "re-read section 3")
    assert get_plan_item(store, item_id)["notes"] == "re-read section 3"
