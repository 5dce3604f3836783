# tests/test_problems.py
import pytest

from prep_planner.db import Store
from prep_planner.problems import (
    add_time_to_oop_problem, add_time_to_problem, get_oop_problems, get_problems,
    update_oop_problem_status, update_problem_status,
)


def add_problem(store, name, week=1, category="DP", difficulty="Medium"):
    return store.insert("problems", {
        "week": week, "category": category, "name": name, "difficulty": difficulty,
    })


def add_oop(store, name, week=1, track="Design", difficulty="Hard"):
    return store.insert("oop_problems", {
        "week": week, "track": track, "name": name, "difficulty": difficulty,
    })


def test_get_problems_filters_and_order(store):
    add_problem(store, "Graph BFS", week=2, category="Graphs")
    add_problem(store, "LCS", week=1, category="DP")
    add_problem(store, "Two Sum", week=1, category="Arrays", difficulty="Easy")
    assert [p["name"] for p in get_problems(store)] == ["Two Sum", "LCS", "Graph BFS"]
    assert [p["name"] for p in get_problems(store, difficulty="Easy")] == ["Two Sum"]
    assert get_problems(store, week=3) == []


def test_get_oop_problems_by_track(store):
    add_oop(store, "Parking Lot", track="Design")
    add_oop(store, "Vending Machine", track="State")
    assert [p["name"] for p in get_oop_problems(store, track="State")] == ["Vending Machine"]


def test_update_problem_status(store):
    pid = add_problem(store, "LCS")
    update_problem_status(store, pid, "solved")
    assert get_problems(store, status="solved")[0]["id"] == pid
    with pytest.raises(ValueError):
        update_problem_status(store, pid, "done")


def test_update_oop_problem_status(store):
    pid = add_oop(store, "Parking Lot")
    update_oop_problem_status(store, pid, "skipped")
    assert get_oop_problems(store)[0]["status"] == "skipped"


def test_time_accumulates(store):
    pid = add_problem(store, "LCS")
    add_time_to_problem(store, pid, 25)
    add_time_to_problem(store, pid, 15)
    assert store.fetch_one("problems", pid)["time_spent_mins"] == 40


def test_time_accumulates_across_handles(store, tmp_db):
    pid = add_problem(store, "LCS")
    other = Store(tmp_db)
    add_time_to_problem(store, pid, 10)
    add_time_to_problem(other, pid, 20)
    add_time_to_problem(store, pid, 5)
    other.close()
    assert store.fetch_one("problems", pid)["time_spent_mins"] == 35


def test_oop_time_accumulates(store):
    pid = add_oop(store, "Parking Lot")
    add_time_to_oop_problem(store, pid, 30)
    add_time_to_oop_problem(store, pid, 30)
    assert store.fetch_one("oop_problems", pid)["time_spent_mins"] == 60


def test_negative_time_rejected(store):
    pid = add_problem(store, "LCS")
    add_time_to_problem(store, pid, 10)
    with pytest.raises(ValueError):
        add_time_to_problem(store, pid, -5)
    assert store.fetch_one("problems", pid)["time_spent_mins"] == 10
