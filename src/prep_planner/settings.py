"""Key/value settings persisted alongside the plan."""
from prep_planner.db import Store, now_epoch

LAST_IMPORT_KEY = "last_import"


def get_setting(store: Store, key: str, default: str = None) -> str | None:
    row = store.conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
    return row["value"] if row else default


def set_setting(store: Store, key: str, value: str) -> None:
    store.execute(
        """INSERT INTO settings (key, value) VALUES (?, ?)
        ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = ?""",
        (key, value, now_epoch()),
    )


def get_last_import(store: Store) -> str | None:
    return get_setting(store, LAST_IMPORT_KEY)
