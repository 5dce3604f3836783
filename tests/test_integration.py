"""End-to-end flow: import a workbook, work through it, then reset."""
from datetime import date

from prep_planner.analytics import get_overview_stats
from prep_planner.importer import run_import
from prep_planner.mocks import get_mocks, record_mock_outcome, schedule_mock
from prep_planner.plan import get_todays_plan_items, update_plan_item_status
from prep_planner.problems import add_time_to_problem, get_problems, update_problem_status
from prep_planner.resources import get_resources, toggle_resource_pin
from prep_planner.search import search_all
from prep_planner.sessions import reset_all_data, save_session

TODAY = date(2025, 6, 10)


def test_full_workflow(store, make_workbook):
    path = make_workbook({
        "Plan": [
            {"Date": "2020-01-01", "Theme (Week Focus)": "Transformers", "Task Type": "Study",
             "Task Description": "Read attention paper"},
            {"Date": "2020-01-02", "Theme (Week Focus)": "Transformers", "Task Type": "Build",
             "Task Description": "Implement attention"},
        ],
        "Weekly Problem Sets": [
            {"Week": 1, "Topic": "DP", "Problem": "Longest Common Subsequence", "Difficulty": "Medium"},
        ],
        "Projects & Resources": [{"Week": 1, "Area": "LLM", "Resource": "Attention Is All You Need"}],
        "Mocks & Checklists": [{"Week": 1, "Mock Type": "Coding", "Goal": "Two mediums"}],
    })
    result = run_import(store, path, today=TODAY)
    assert result["success"] is True

    today_items = get_todays_plan_items(store, TODAY)
    assert [i["task_type"] for i in today_items] == ["Study"]
    update_plan_item_status(store, today_items[0]["id"], "done")

    problem = get_problems(store)[0]
    update_problem_status(store, problem["id"], "solved")
    add_time_to_problem(store, problem["id"], 35)
    save_session(store, TODAY, "study", 50, linked_plan_item_id=today_items[0]["id"])

    resource = get_resources(store)[0]
    assert toggle_resource_pin(store, resource["id"]) is True

    mock = get_mocks(store)[0]
    schedule_mock(store, mock["id"], "2025-06-12 14:00", interviewer="Sam", duration=45)
    record_mock_outcome(store, mock["id"], "pass", feedback="clean", score=4)

    hits = search_all(store, "attention")
    assert {h.type for h in hits} == {"plan", "resource"}

    stats = get_overview_stats(store, TODAY)
    assert stats["plan_done"] == 1
    assert stats["problems_solved"] == 1
    assert stats["problem_minutes"] == 35
    assert stats["session_minutes"] == 50
    assert stats["mocks_completed"] == 1
    assert stats["last_import"] is not None

    # Re-import keeps progress made since the first import.
    run_import(store, path, today=TODAY)
    assert get_problems(store)[0]["status"] == "solved"
    assert get_resources(store)[0]["pinned"] is True

    cleared = reset_all_data(store)
    assert cleared["sessions"] == 1
    assert all(store.count(t) == 0 for t in cleared)
