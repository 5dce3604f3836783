# tests/test_analytics.py
from datetime import date

from prep_planner.analytics import (
    get_analytics_data, get_completion_label, get_debug_snapshot, get_overview_stats,
)
from prep_planner.mocks import record_mock_outcome
from prep_planner.problems import add_time_to_problem, update_problem_status
from prep_planner.sessions import save_session

TODAY = date(2025, 6, 10)


def seed(store):
    for day, week, status, task_type in [
        ("2025-06-10", 1, "done", "Study"),
        ("2025-06-10", 1, "in_progress", "Drill"),
        ("2025-06-17", 2, "todo", "Study"),
    ]:
        store.insert("plan_items", {
            "date": day, "week": week, "day_name": "Tuesday", "theme": "T",
            "task_type": task_type, "task_desc": "d", "status": status,
        })
    pid = store.insert("problems", {"week": 1, "category": "DP", "name": "LCS", "difficulty": "Medium"})
    store.insert("problems", {"week": 1, "category": "DP", "name": "Knapsack", "difficulty": "Hard"})
    update_problem_status(store, pid, "solved")
    add_time_to_problem(store, pid, 40)
    mid = store.insert("mocks", {"week": 1, "mock_type": "Coding", "goal": "g"})
    store.insert("mocks", {"week": 2, "mock_type": "Design", "goal": "h"})
    record_mock_outcome(store, mid, "pass")
    save_session(store, "2025-06-10", "study", 30)
    save_session(store, "2025-06-10", "study", 15)


def test_completion_label():
    assert get_completion_label(90) == "ON TRACK"
    assert get_completion_label(60) == "STEADY"
    assert get_completion_label(25) == "BEHIND"
    assert get_completion_label(0) == "GETTING STARTED"


def test_analytics_empty_store(store):
    data = get_analytics_data(store)
    assert data["weekly_progress"] == []
    assert data["task_type_distribution"] == {}


def test_analytics_data(store):
    seed(store)
    data = get_analytics_data(store)
    assert data["weekly_progress"][0] == {"week": 1, "total": 2, "completed": 1, "in_progress": 1}
    assert data["task_type_distribution"] == {"Study": 2, "Drill": 1}
    medium = next(p for p in data["problems_by_difficulty"] if p["difficulty"] == "Medium")
    assert medium["solved"] == 1
    assert data["mock_performance"] == [{"week": 1, "mock_type": "Coding", "outcome": "pass", "count": 1}]
    assert data["session_time"] == [{"date": "2025-06-10", "kind": "study", "total_minutes": 45}]


def test_overview_stats(store):
    seed(store)
    stats = get_overview_stats(store, TODAY)
    assert stats["today_items"] == 2
    assert stats["today_done"] == 1
    assert stats["plan_completion"] == 33.3
    assert stats["problems_solved"] == 1
    assert stats["mocks_completed"] == 1
    assert stats["problem_minutes"] == 40
    assert stats["session_minutes"] == 45


def test_debug_snapshot(store):
    seed(store)
    snap = get_debug_snapshot(store, TODAY)
    assert snap["today"] == "2025-06-10"
    assert snap["counts"]["plan_items"] == 3
    assert snap["today_items"] == 2
    assert snap["sample_dates"][0]["date"] == "2025-06-10"
