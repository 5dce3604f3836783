"""Plan item listing and status tracking."""
from datetime import date

from prep_planner.db import Store
from prep_planner.models import PLAN_STATUSES

PLAN_ORDER = "date ASC, task_type ASC, id ASC"


def get_plan_items(
    store: Store,
    week: int | None = None,
    status: str | None = None,
    task_type: str | None = None,
    start: str | None = None,
    end: str | None = None,
) -> list[dict]:
    """Plan items matching all given filters, within an inclusive date range."""
    return store.select(
        "plan_items",
        filters={"week": week, "status": status, "task_type": task_type},
        date_range=("date", start, end),
        order_by=PLAN_ORDER,
    )


def get_todays_plan_items(store: Store, day: date | None = None) -> list[dict]:
    day = (day or date.today()).isoformat()
    return get_plan_items(store, start=day, end=day)


def get_plan_items_by_date_range(store: Store, start: str, end: str) -> list[dict]:
    return get_plan_items(store, start=start, end=end)


def get_plan_item(store: Store, item_id: int) -> dict | None:
    return store.fetch_one("plan_items", item_id)


def update_plan_item_status(store: Store, item_id: int, status: str) -> None:
    if status not in PLAN_STATUSES:
        raise ValueError(f"Invalid plan status: {status}")
    store.update("plan_items", item_id, {"status": status})


def update_plan_item_notes(store: Store, item_id: int, notes: str | None) -> None:
    store.update("plan_items", item_id, {"notes": notes or None})
