"""Progress analytics and headline statistics."""
from datetime import date

from prep_planner.db import Store
from prep_planner.sessions import get_total_minutes
from prep_planner.settings import get_last_import


def get_completion_label(pct: float) -> str:
    if pct >= 80:
        return "ON TRACK"
    elif pct >= 50:
        return "STEADY"
    elif pct >= 20:
        return "BEHIND"
    return "GETTING STARTED"


def get_completion_color(pct: float) -> str:
    if pct >= 80:
        return "green"
    elif pct >= 50:
        return "yellow"
    elif pct >= 20:
        return "dark_orange"
    return "red"


def _rows(store: Store, sql: str, params=()) -> list[dict]:
    return [dict(r) for r in store.conn.execute(sql, params).fetchall()]


def get_weekly_progress(store: Store) -> list[dict]:
    return _rows(store, """SELECT week,
            COUNT(*) AS total,
            SUM(CASE WHEN status = 'done' THEN 1 ELSE 0 END) AS completed,
            SUM(CASE WHEN status = 'in_progress' THEN 1 ELSE 0 END) AS in_progress
        FROM plan_items GROUP BY week ORDER BY week""")


def get_problems_by_difficulty(store: Store) -> list[dict]:
    return _rows(store, """SELECT week, difficulty,
            COUNT(*) AS total,
            SUM(CASE WHEN status = 'solved' THEN 1 ELSE 0 END) AS solved
        FROM problems GROUP BY week, difficulty ORDER BY week, difficulty""")


def get_task_type_distribution(store: Store) -> dict:
    return store.count_by("plan_items", "task_type")


def get_mock_performance(store: Store) -> list[dict]:
    return _rows(store, """SELECT week, mock_type, outcome, COUNT(*) AS count
        FROM mocks WHERE outcome IS NOT NULL
        GROUP BY week, mock_type, outcome ORDER BY week""")


def get_session_time(store: Store) -> list[dict]:
    return _rows(store, """SELECT date, kind, SUM(duration_mins) AS total_minutes
        FROM sessions GROUP BY date, kind ORDER BY date""")


def get_analytics_data(store: Store) -> dict:
    return {
        "weekly_progress": get_weekly_progress(store),
        "problems_by_difficulty": get_problems_by_difficulty(store),
        "task_type_distribution": get_task_type_distribution(store),
        "mock_performance": get_mock_performance(store),
        "session_time": get_session_time(store),
    }


def get_overview_stats(store: Store, today: date | None = None) -> dict:
    """Headline numbers for the home screen."""
    today = (today or date.today()).isoformat()
    conn = store.conn
    plan_total = store.count("plan_items")
    plan_done = store.count("plan_items", {"status": "done"})
    row = conn.execute(
        "SELECT COALESCE(SUM(time_spent_mins), 0) AS mins FROM problems"
    ).fetchone()
    oop_row = conn.execute(
        "SELECT COALESCE(SUM(time_spent_mins), 0) AS mins FROM oop_problems"
    ).fetchone()
    completion = round(plan_done / plan_total * 100, 1) if plan_total else 0.0
    return {
        "today_items": store.count("plan_items", {"date": today}),
        "today_done": store.count("plan_items", {"date": today, "status": "done"}),
        "plan_total": plan_total,
        "plan_done": plan_done,
        "plan_completion": completion,
        "problems_solved": store.count("problems", {"status": "solved"}),
        "problems_total": store.count("problems"),
        "oop_solved": store.count("oop_problems", {"status": "solved"}),
        "oop_total": store.count("oop_problems"),
        "mocks_completed": conn.execute(
            "SELECT COUNT(*) FROM mocks WHERE outcome IS NOT NULL"
        ).fetchone()[0],
        "mocks_total": store.count("mocks"),
        "problem_minutes": row["mins"] + oop_row["mins"],
        "session_minutes": get_total_minutes(store),
        "last_import": get_last_import(store),
    }


def get_debug_snapshot(store: Store, today: date | None = None) -> dict:
    today = (today or date.today()).isoformat()
    samples = store.conn.execute(
        "SELECT date, task_type, task_desc FROM plan_items ORDER BY date LIMIT 10"
    ).fetchall()
    return {
        "today": today,
        "counts": {
            table: store.count(table)
            for table in ("plan_items", "problems", "oop_problems", "resources", "mocks")
        },
        "today_items": store.count("plan_items", {"date": today}),
        "sample_dates": [
            {"date": s["date"], "task_type": s["task_type"], "task_desc": s["task_desc"][:50]}
            for s in samples
        ],
    }
