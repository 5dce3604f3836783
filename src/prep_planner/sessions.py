"""Time-tracking session log and full data reset."""
import logging
from datetime import date

from prep_planner.db import Store
from prep_planner.models import SESSION_KINDS

logger = logging.getLogger(__name__)

# Children before parents so foreign keys never block a delete.
RESET_ORDER = ("sessions", "plan_items", "problems", "oop_problems", "resources", "mocks", "settings")


def save_session(
    store: Store,
    day: date | str,
    kind: str,
    duration_mins: int,
    notes: str | None = None,
    linked_plan_item_id: int | None = None,
    linked_problem_id: int | None = None,
    linked_oop_problem_id: int | None = None,
) -> int:
    """Append a session. Callers link at most one plan item or problem."""
    if kind not in SESSION_KINDS:
        raise ValueError(f"Invalid session kind: {kind}")
    return store.insert("sessions", {
        "date": day.isoformat() if isinstance(day, date) else day,
        "kind": kind,
        "duration_mins": int(duration_mins),
        "notes": notes or None,
        "linked_plan_item_id": linked_plan_item_id,
        "linked_problem_id": linked_problem_id,
        "linked_oop_problem_id": linked_oop_problem_id,
    })


def get_sessions(
    store: Store,
    start: str | None = None,
    end: str | None = None,
    kind: str | None = None,
) -> list[dict]:
    return store.select(
        "sessions",
        filters={"kind": kind},
        date_range=("date", start, end),
        order_by="date ASC, id ASC",
    )


def get_total_minutes(store: Store) -> int:
    return store.conn.execute(
        "SELECT COALESCE(SUM(duration_mins), 0) FROM sessions"
    ).fetchone()[0]


def reset_all_data(store: Store) -> dict[str, int]:
    """Delete every row from every table. Playbook files on disk are not touched."""
    cleared = {}
    for table in RESET_ORDER:
        cleared[table] = store.delete_where(table)
        logger.info("Cleared %s (%d rows)", table, cleared[table])
    return cleared
