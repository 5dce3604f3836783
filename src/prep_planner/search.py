"""Ranked keyword search across plan items, problems, resources and mocks."""
from dataclasses import dataclass
from typing import Callable

from prep_planner.db import Store
from prep_planner.models import SearchResult

PER_TABLE_LIMIT = 50
MAX_RESULTS = 100
MIN_SCORE = 30


def calculate_relevance_score(query: str, text: str) -> float:
    """Lexical relevance of ``text`` to ``query`` on a 0-100 scale.

    100 for an exact match, 80 when the query appears verbatim, otherwise
    60 points spread over whole-word hits and 30 over partial word hits.
    """
    query = query.strip().lower()
    if not query or not text:
        return 0
    text = text.lower()
    if query in text:
        return 100 if text == query else 80

    query_words = query.split()
    text_words = text.split()
    full = partial = 0
    for qw in query_words:
        if qw in text_words:
            full += 1
        elif any(qw in tw or tw in qw for tw in text_words):
            partial += 1
    score = full / len(query_words) * 60 + partial / len(query_words) * 30
    return min(100, score)


def _join(*parts) -> str:
    return " ".join(p for p in parts if p)


def _project_plan(row: dict) -> dict:
    return {
        "title": row["task_desc"],
        "description": f"{row['theme']} - {row['task_type']}",
        "content": row["notes"] or "",
        "metadata": {
            "week": row["week"], "status": row["status"],
            "task_type": row["task_type"], "date": row["date"],
        },
    }


def _project_problem(row: dict) -> dict:
    return {
        "title": row["name"],
        "description": f"{row['category']} - {row['difficulty']}",
        "content": row["notes"] or "",
        "metadata": {
            "week": row["week"], "difficulty": row["difficulty"], "category": row["category"],
            "status": row["status"], "url": row["url"],
        },
    }


def _project_oop_problem(row: dict) -> dict:
    return {
        "title": row["name"],
        "description": f"{row['track']} - {row['difficulty']}",
        "content": row["notes"] or "",
        "metadata": {
            "week": row["week"], "difficulty": row["difficulty"], "track": row["track"],
            "status": row["status"], "url": row["url"],
        },
    }


def _project_resource(row: dict) -> dict:
    return {
        "title": row["title"],
        "description": f"{row['area']} - Week {row['week']}",
        "content": row["notes"] or "",
        "metadata": {
            "week": row["week"], "area": row["area"], "url": row["url"],
            "pinned": bool(row["pinned"]),
        },
    }


def _project_mock(row: dict) -> dict:
    return {
        "title": row["goal"],
        "description": f"{row['mock_type']} - Week {row['week']}",
        "content": _join(row["notes"], row["feedback"]),
        "metadata": {
            "week": row["week"], "mock_type": row["mock_type"], "outcome": row["outcome"],
            "score": row["score"], "scheduled_at": row["scheduled_at"],
        },
    }


@dataclass(frozen=True)
class SearchSource:
    type: str
    prefix: str
    table: str
    fields: tuple[str, ...]
    filterable: frozenset
    project: Callable[[dict], dict]


SOURCES = (
    SearchSource("plan", "plan", "plan_items", ("task_desc", "theme", "notes"),
                 frozenset({"week", "status"}), _project_plan),
    SearchSource("problem", "problem", "problems", ("name", "category", "notes"),
                 frozenset({"week", "status", "difficulty"}), _project_problem),
    SearchSource("oop_problem", "oop", "oop_problems", ("name", "track", "notes"),
                 frozenset({"week", "status", "difficulty"}), _project_oop_problem),
    SearchSource("resource", "resource", "resources", ("title", "area", "notes"),
                 frozenset({"week"}), _project_resource),
    SearchSource("mock", "mock", "mocks", ("goal", "mock_type", "notes", "feedback"),
                 frozenset({"week"}), _project_mock),
)


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _query_source(store: Store, source: SearchSource, needle: str, filters: dict) -> list[dict]:
    match = " OR ".join(f"lower({f}) LIKE ? ESCAPE '\\'" for f in source.fields)
    params = [f"%{_escape_like(needle)}%"] * len(source.fields)
    sql = f"SELECT * FROM {source.table} WHERE ({match})"
    for column, value in filters.items():
        sql += f" AND {column} = ?"
        params.append(value)
    sql += " LIMIT ?"
    params.append(PER_TABLE_LIMIT)
    return [dict(r) for r in store.conn.execute(sql, params).fetchall()]


def to_result(source: SearchSource, row: dict, query: str) -> SearchResult:
    needle = query.strip().lower()
    values = [row[f] for f in source.fields]
    matched = [f for f, v in zip(source.fields, values) if v and needle in v.lower()]
    # The first searchable field is the title; an exact title hit always ranks top.
    title = values[0]
    if title and title.strip().lower() == needle:
        score = 100
    else:
        score = calculate_relevance_score(query, _join(*values))
    return SearchResult(
        id=f"{source.prefix}-{row['id']}",
        type=source.type,
        relevance_score=score,
        matched_fields=matched,
        **source.project(row),
    )


def search_all(store: Store, query: str, filters: dict | None = None) -> list[SearchResult]:
    """Search every content table and return the best matches, highest score first.

    ``filters`` may hold ``type``, ``week``, ``status`` and ``difficulty``. A
    filter on a column a table lacks excludes that table.
    """
    if not query or not query.strip():
        return []
    filters = {k: v for k, v in (filters or {}).items() if v not in (None, "", 0)}
    wanted_type = filters.pop("type", None)
    needle = query.strip().lower()

    results = []
    for source in SOURCES:
        if wanted_type and source.type != wanted_type:
            continue
        if not set(filters) <= source.filterable:
            continue
        for row in _query_source(store, source, needle, filters):
            results.append(to_result(source, row, query))

    results = [r for r in results if r.relevance_score > MIN_SCORE]
    results.sort(key=lambda r: r.relevance_score, reverse=True)
    return results[:MAX_RESULTS]
