"""Problem set tracking: filters, status and time spent."""
from prep_planner.db import Store
from prep_planner.models import PROBLEM_STATUSES


def get_problems(
    store: Store,
    week: int | None = None,
    category: str | None = None,
    difficulty: str | None = None,
    status: str | None = None,
) -> list[dict]:
    return store.select(
        "problems",
        filters={"week": week, "category": category, "difficulty": difficulty, "status": status},
        order_by="week ASC, category ASC, id ASC",
    )


def get_oop_problems(
    store: Store,
    week: int | None = None,
    track: str | None = None,
    difficulty: str | None = None,
    status: str | None = None,
) -> list[dict]:
    return store.select(
        "oop_problems",
        filters={"week": week, "track": track, "difficulty": difficulty, "status": status},
        order_by="week ASC, track ASC, id ASC",
    )


def _set_status(store: Store, table: str, problem_id: int, status: str) -> None:
    if status not in PROBLEM_STATUSES:
        raise ValueError(f"Invalid problem status: {status}")
    store.update(table, problem_id, {"status": status})


def update_problem_status(store: Store, problem_id: int, status: str) -> None:
    _set_status(store, "problems", problem_id, status)


def update_oop_problem_status(store: Store, problem_id: int, status: str) -> None:
    _set_status(store, "oop_problems", problem_id, status)


def _add_time(store: Store, table: str, problem_id: int, minutes: int) -> None:
    # The increment happens inside SQLite so concurrent writers never lose minutes.
    if minutes < 0:
        raise ValueError("Minutes must not be negative")
    store.execute(
        f"""UPDATE {table}
        SET time_spent_mins = time_spent_mins + ?, updated_at = CAST(strftime('%s', 'now') AS INTEGER)
        WHERE id = ?""",
        (int(minutes), problem_id),
    )


def add_time_to_problem(store: Store, problem_id: int, minutes: int) -> None:
    _add_time(store, "problems", problem_id, minutes)


def add_time_to_oop_problem(store: Store, problem_id: int, minutes: int) -> None:
    _add_time(store, "oop_problems", problem_id, minutes)
