"""Reading list and project resources."""
from prep_planner.db import Store


def get_resources(
    store: Store,
    week: int | None = None,
    area: str | None = None,
    pinned: bool | None = None,
) -> list[dict]:
    rows = store.select(
        "resources",
        filters={"week": week, "area": area, "pinned": None if pinned is None else int(pinned)},
        order_by="pinned DESC, week ASC, area ASC, id ASC",
    )
    for r in rows:
        r["pinned"] = bool(r["pinned"])
    return rows


def toggle_resource_pin(store: Store, resource_id: int) -> bool:
    """Flip the pinned flag and return the new value."""
    store.execute(
        "UPDATE resources SET pinned = 1 - pinned, updated_at = CAST(strftime('%s', 'now') AS INTEGER) WHERE id = ?",
        (resource_id,),
    )
    row = store.fetch_one("resources", resource_id)
    return bool(row["pinned"]) if row else False
