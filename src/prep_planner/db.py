"""Database schema and the shared record store."""
import sqlite3
import time
from pathlib import Path

from prep_planner.config import DEFAULT_DB_PATH

SCHEMA = """
CREATE TABLE IF NOT EXISTS plan_items (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    date TEXT NOT NULL,
    week INTEGER NOT NULL,
    week_range TEXT,
    day_name TEXT NOT NULL,
    phase TEXT,
    theme TEXT NOT NULL,
    task_type TEXT NOT NULL,
    task_desc TEXT NOT NULL,
    weekly_challenge TEXT,
    resource_pointer TEXT,
    status TEXT NOT NULL DEFAULT 'todo',
    notes TEXT,
    created_at INTEGER DEFAULT (CAST(strftime('%s', 'now') AS INTEGER)),
    updated_at INTEGER DEFAULT (CAST(strftime('%s', 'now') AS INTEGER))
);
CREATE INDEX IF NOT EXISTS plan_items_date_idx ON plan_items(date);
CREATE INDEX IF NOT EXISTS plan_items_week_idx ON plan_items(week);
CREATE INDEX IF NOT EXISTS plan_items_status_idx ON plan_items(status);

CREATE TABLE IF NOT EXISTS problems (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    week INTEGER NOT NULL,
    category TEXT NOT NULL,
    name TEXT NOT NULL,
    difficulty TEXT NOT NULL,
    url TEXT,
    notes TEXT,
    status TEXT NOT NULL DEFAULT 'todo',
    time_spent_mins INTEGER NOT NULL DEFAULT 0,
    created_at INTEGER DEFAULT (CAST(strftime('%s', 'now') AS INTEGER)),
    updated_at INTEGER DEFAULT (CAST(strftime('%s', 'now') AS INTEGER))
);
CREATE INDEX IF NOT EXISTS problems_week_idx ON problems(week);
CREATE INDEX IF NOT EXISTS problems_status_idx ON problems(status);

CREATE TABLE IF NOT EXISTS oop_problems (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    week INTEGER NOT NULL,
    track TEXT NOT NULL,
    name TEXT NOT NULL,
    difficulty TEXT NOT NULL,
    url TEXT,
    notes TEXT,
    status TEXT NOT NULL DEFAULT 'todo',
    time_spent_mins INTEGER NOT NULL DEFAULT 0,
    created_at INTEGER DEFAULT (CAST(strftime('%s', 'now') AS INTEGER)),
    updated_at INTEGER DEFAULT (CAST(strftime('%s', 'now') AS INTEGER))
);
CREATE INDEX IF NOT EXISTS oop_problems_week_idx ON oop_problems(week);
CREATE INDEX IF NOT EXISTS oop_problems_status_idx ON oop_problems(status);

CREATE TABLE IF NOT EXISTS resources (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    week INTEGER NOT NULL,
    area TEXT NOT NULL,
    title TEXT NOT NULL,
    url TEXT,
    notes TEXT,
    pinned INTEGER NOT NULL DEFAULT 0,
    created_at INTEGER DEFAULT (CAST(strftime('%s', 'now') AS INTEGER)),
    updated_at INTEGER DEFAULT (CAST(strftime('%s', 'now') AS INTEGER))
);
CREATE INDEX IF NOT EXISTS resources_week_idx ON resources(week);

CREATE TABLE IF NOT EXISTS mocks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    week INTEGER NOT NULL,
    mock_type TEXT NOT NULL,
    goal TEXT NOT NULL,
    notes TEXT,
    scheduled_at INTEGER,
    outcome TEXT,
    feedback TEXT,
    score INTEGER,
    duration INTEGER,
    interviewer TEXT,
    created_at INTEGER DEFAULT (CAST(strftime('%s', 'now') AS INTEGER)),
    updated_at INTEGER DEFAULT (CAST(strftime('%s', 'now') AS INTEGER))
);
CREATE INDEX IF NOT EXISTS mocks_week_idx ON mocks(week);
CREATE INDEX IF NOT EXISTS mocks_scheduled_at_idx ON mocks(scheduled_at);

CREATE TABLE IF NOT EXISTS sessions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    date TEXT NOT NULL,
    kind TEXT NOT NULL,
    duration_mins INTEGER NOT NULL,
    notes TEXT,
    linked_plan_item_id INTEGER REFERENCES plan_items(id),
    linked_problem_id INTEGER REFERENCES problems(id),
    linked_oop_problem_id INTEGER REFERENCES oop_problems(id),
    created_at INTEGER DEFAULT (CAST(strftime('%s', 'now') AS INTEGER)),
    updated_at INTEGER DEFAULT (CAST(strftime('%s', 'now') AS INTEGER))
);
CREATE INDEX IF NOT EXISTS sessions_date_idx ON sessions(date);

CREATE TABLE IF NOT EXISTS settings (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    created_at INTEGER DEFAULT (CAST(strftime('%s', 'now') AS INTEGER)),
    updated_at INTEGER DEFAULT (CAST(strftime('%s', 'now') AS INTEGER))
);
"""

TABLES = (
    "plan_items", "problems", "oop_problems", "resources", "mocks", "sessions", "settings",
)

# Identity columns used to reconcile imported rows with stored ones.
NATURAL_KEYS = {
    "plan_items": ("date", "task_type", "theme"),
    "problems": ("week", "name", "url"),
    "oop_problems": ("week", "name", "url"),
    "resources": ("week", "title", "url"),
    "mocks": ("week", "mock_type", "goal"),
}


def now_epoch() -> int:
    return int(time.time())


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Return a SQLite connection with row factory and foreign keys enabled."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def _check_table(table: str) -> None:
    if table not in TABLES:
        raise ValueError(f"Unknown table: {table}")


def _where(filters: dict | None, date_range: tuple | None = None) -> tuple[str, list]:
    clauses, params = [], []
    for column, value in (filters or {}).items():
        if value is None:
            continue
        clauses.append(f"{column} = ?")
        params.append(value)
    if date_range:
        column, start, end = date_range
        if start is not None:
            clauses.append(f"{column} >= ?")
            params.append(start)
        if end is not None:
            clauses.append(f"{column} <= ?")
            params.append(end)
    return (" WHERE " + " AND ".join(clauses) if clauses else ""), params


class Store:
    """One long-lived connection to the planner database.

    Created once at process start and handed to every component. Writes
    commit immediately; SQLite serializes concurrent writers.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        self.db_path = db_path
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = get_connection(db_path)
        self.conn.execute("PRAGMA journal_mode = WAL")
        self.conn.executescript(SCHEMA)
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()

    def execute(self, sql: str, params=()) -> sqlite3.Cursor:
        cur = self.conn.execute(sql, params)
        self.conn.commit()
        return cur

    def insert(self, table: str, values: dict) -> int:
        _check_table(table)
        columns = ", ".join(values)
        marks = ", ".join("?" for _ in values)
        cur = self.execute(
            f"INSERT INTO {table} ({columns}) VALUES ({marks})", tuple(values.values()),
        )
        return cur.lastrowid

    def update(self, table: str, row_id: int, values: dict, touch: bool = True) -> int:
        """Overwrite columns of one row; returns the number of rows changed."""
        _check_table(table)
        values = dict(values)
        if touch:
            values["updated_at"] = now_epoch()
        assignments = ", ".join(f"{column} = ?" for column in values)
        cur = self.execute(
            f"UPDATE {table} SET {assignments} WHERE id = ?", (*values.values(), row_id),
        )
        return cur.rowcount

    def delete_where(self, table: str, filters: dict | None = None) -> int:
        _check_table(table)
        where, params = _where(filters)
        return self.execute(f"DELETE FROM {table}{where}", params).rowcount

    def select(
        self,
        table: str,
        filters: dict | None = None,
        date_range: tuple | None = None,
        order_by: str | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        """Rows matching all equality filters and an inclusive (column, start, end) range."""
        _check_table(table)
        where, params = _where(filters, date_range)
        sql = f"SELECT * FROM {table}{where}"
        if order_by:
            sql += f" ORDER BY {order_by}"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)
        return [dict(r) for r in self.conn.execute(sql, params).fetchall()]

    def fetch_one(self, table: str, row_id: int) -> dict | None:
        _check_table(table)
        row = self.conn.execute(f"SELECT * FROM {table} WHERE id = ?", (row_id,)).fetchone()
        return dict(row) if row else None

    def count(self, table: str, filters: dict | None = None) -> int:
        _check_table(table)
        where, params = _where(filters)
        return self.conn.execute(f"SELECT COUNT(*) FROM {table}{where}", params).fetchone()[0]

    def count_by(self, table: str, group_by: str) -> dict:
        _check_table(table)
        rows = self.conn.execute(
            f"SELECT {group_by} AS k, COUNT(*) AS n FROM {table} GROUP BY {group_by}"
        ).fetchall()
        return {r["k"]: r["n"] for r in rows}

    def find_by_key(self, table: str, key: dict) -> dict | None:
        """Look up a row by its natural key. NULL key parts match NULL."""
        columns = NATURAL_KEYS[table]
        clauses = " AND ".join(f"{column} IS ?" for column in columns)
        row = self.conn.execute(
            f"SELECT * FROM {table} WHERE {clauses} LIMIT 1",
            tuple(key.get(column) for column in columns),
        ).fetchone()
        return dict(row) if row else None
