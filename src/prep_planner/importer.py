"""Import the curriculum workbook into the planner database."""
import errno
import logging
import math
import os
import sqlite3
from datetime import date, datetime, timedelta
from io import BytesIO
from pathlib import Path

import openpyxl
from pydantic import ValidationError

from prep_planner.config import DEFAULT_WORKBOOK_NAME, WORKBOOK_SEARCH_DIRS
from prep_planner.db import Store
from prep_planner.errors import (
    InvalidWorkbookError, WorkbookAccessError, WorkbookError, WorkbookNotFoundError,
)
from prep_planner.models import ImportSummary, SheetSummary
from prep_planner.schemas import (
    MockRow, OopProblemRow, PlanRow, ProblemRow, ResourceRow, describe_validation_error,
)
from prep_planner.settings import LAST_IMPORT_KEY, set_setting

logger = logging.getLogger(__name__)

PLAN_SHEET_NAMES = ("Plan", "Plan Sheet")
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def legacy_week_number(day: date) -> int:
    """Week of the year counting Sunday-started weeks from January 1st.

    Only used when the sheet leaves ``Week`` empty; it can disagree with the
    curriculum's own week numbering.
    """
    jan1 = date(day.year, 1, 1)
    jan1_weekday = (jan1.weekday() + 1) % 7  # Sunday = 0
    return math.ceil(((day - jan1).days + jan1_weekday + 1) / 7)


def open_workbook(file_path) -> openpyxl.Workbook:
    """Read the whole file into memory and parse it, failing fast with a clear message."""
    path = Path(file_path)
    if not path.exists():
        raise WorkbookNotFoundError(f"File not found: {path}")
    if not os.access(path, os.R_OK):
        raise WorkbookAccessError(f"File is not readable. Please check file permissions: {path}")
    try:
        data = path.read_bytes()
    except PermissionError as exc:
        raise WorkbookAccessError(
            f"Access denied or file is open in another application. Close it and try again: {path}"
        ) from exc
    except OSError as exc:
        if exc.errno == errno.EBUSY:
            raise WorkbookAccessError(
                f"File is currently open in another application. Close it and try again: {path}"
            ) from exc
        raise WorkbookAccessError(f"Cannot read file: {exc}") from exc
    try:
        return openpyxl.load_workbook(BytesIO(data), data_only=True)
    except Exception as exc:
        raise InvalidWorkbookError(f"Invalid Excel file format: {exc}") from exc


def sheet_rows(ws) -> list[tuple[int, dict]]:
    """Header-keyed dicts for every non-blank row, paired with the spreadsheet row number."""
    rows = ws.iter_rows(values_only=True)
    header = next(rows, None)
    if header is None:
        return []
    keys = [str(h).strip() if h is not None else None for h in header]
    records = []
    for row_number, values in enumerate(rows, start=2):
        record = {
            key: value for key, value in zip(keys, values)
            if key and value is not None and not (isinstance(value, str) and not value.strip())
        }
        if record:
            records.append((row_number, record))
    return records


def upsert(store: Store, table: str, record: dict, defaults: dict) -> bool:
    """Update the row sharing ``record``'s natural key, or insert it. True if inserted."""
    existing = store.find_by_key(table, record)
    if existing:
        store.update(table, existing["id"], record)
        return False
    store.insert(table, {**defaults, **record})
    return True


def _write(store: Store, table: str, row_number: int, record: dict, defaults: dict,
           summary: SheetSummary) -> None:
    try:
        inserted = upsert(store, table, record, defaults)
    except sqlite3.Error as exc:
        summary.errors.append(f"Row {row_number}: {exc}")
        return
    if inserted:
        summary.inserted += 1
    else:
        summary.updated += 1


def _validate(model, rows: list[tuple[int, dict]], summary: SheetSummary) -> list:
    valid = []
    for row_number, raw in rows:
        try:
            valid.append((row_number, model.model_validate(raw)))
        except ValidationError as exc:
            summary.errors.append(f"Row {row_number}: {describe_validation_error(exc)}")
    return valid


def import_plan_sheet(store: Store, ws, today: date, summary: SheetSummary) -> None:
    """Import plan rows, shifting every date so the earliest one lands on ``today``."""
    rows = sheet_rows(ws)
    if not rows:
        return
    valid = _validate(PlanRow, rows, summary)
    if not valid:
        summary.errors.append("No valid dates found in Plan sheet")
        return

    earliest = min(row.plan_date for _, row in valid)
    offset = (today - earliest).days
    logger.info(
        "Shifting plan dates by %d days: %s now starts on %s",
        offset, earliest.isoformat(), today.isoformat(),
    )
    for row_number, row in valid:
        shifted = row.plan_date + timedelta(days=offset)
        record = {
            "date": shifted.isoformat(),
            "week": row.week or legacy_week_number(shifted),
            "week_range": row.week_range or None,
            "day_name": row.day or DAY_NAMES[shifted.weekday()],
            "phase": row.phase or None,
            "theme": row.theme,
            "task_type": row.task_type,
            "task_desc": row.task_desc,
            "weekly_challenge": row.weekly_challenge or None,
            "resource_pointer": row.resource_pointer or None,
        }
        _write(store, "plan_items", row_number, record, {"status": "todo"}, summary)


def _problem_record(row: ProblemRow) -> dict:
    return {
        "week": row.week, "category": row.topic, "name": row.problem,
        "difficulty": row.difficulty, "url": row.url or None, "notes": row.notes or None,
    }


def _oop_problem_record(row: OopProblemRow) -> dict:
    return {
        "week": row.week, "track": row.track, "name": row.problem,
        "difficulty": row.difficulty, "url": row.url or None, "notes": row.notes or None,
    }


def _resource_record(row: ResourceRow) -> dict:
    return {
        "week": row.week, "area": row.area, "title": row.resource,
        "url": row.url or None, "notes": row.notes or None,
    }


def _mock_record(row: MockRow) -> dict:
    return {
        "week": row.week, "mock_type": row.mock_type, "goal": row.goal,
        "notes": row.notes or None,
    }


# (summary field, sheet name, row model, table, record builder, insert defaults)
SHEETS = [
    ("problems", "Weekly Problem Sets", ProblemRow, "problems", _problem_record,
     {"status": "todo", "time_spent_mins": 0}),
    ("oop_problems", "OOP Problem Sets", OopProblemRow, "oop_problems", _oop_problem_record,
     {"status": "todo", "time_spent_mins": 0}),
    ("resources", "Projects & Resources", ResourceRow, "resources", _resource_record,
     {"pinned": 0}),
    ("mocks", "Mocks & Checklists", MockRow, "mocks", _mock_record, {}),
]


def import_sheet(store: Store, ws, model, table: str, to_record, defaults: dict,
                 summary: SheetSummary) -> None:
    for row_number, row in _validate(model, sheet_rows(ws), summary):
        _write(store, table, row_number, to_record(row), defaults, summary)


def import_workbook(store: Store, file_path, today: date | None = None) -> ImportSummary:
    """Import every known sheet of the workbook and return per-sheet counts.

    Raises a ``WorkbookError`` if the file cannot be opened; row problems are
    collected in the summary instead.
    """
    today = today or date.today()
    wb = open_workbook(file_path)
    summary = ImportSummary()
    try:
        plan_sheet = next((name for name in PLAN_SHEET_NAMES if name in wb.sheetnames), None)
        if plan_sheet:
            import_plan_sheet(store, wb[plan_sheet], today, summary.plan)
        for field_name, sheet_name, model, table, to_record, defaults in SHEETS:
            if sheet_name in wb.sheetnames:
                import_sheet(store, wb[sheet_name], model, table, to_record, defaults,
                             getattr(summary, field_name))
    finally:
        wb.close()

    set_setting(store, LAST_IMPORT_KEY, datetime.now().isoformat())
    logger.info(
        "Imported %s: %d rows written, %d errors",
        Path(file_path).name, summary.total_operations, summary.total_errors,
    )
    return summary


def run_import(store: Store, file_path, today: date | None = None) -> dict:
    """Import and report ``{"success": ..., "data"|"error": ...}`` for display."""
    try:
        summary = import_workbook(store, file_path, today=today)
    except WorkbookError as exc:
        logger.error("Import failed: %s", exc)
        return {"success": False, "error": str(exc)}
    return {"success": True, "data": summary.to_dict()}


def find_default_workbook(search_dirs=None, filename: str = DEFAULT_WORKBOOK_NAME) -> Path:
    """Return the first existing copy of the default workbook."""
    candidates = [Path(d) / filename for d in (search_dirs or WORKBOOK_SEARCH_DIRS)]
    for candidate in candidates:
        if candidate.is_file():
            logger.debug("Found workbook at %s", candidate)
            return candidate
    searched = "\n".join(f"  - {c}" for c in candidates)
    raise WorkbookNotFoundError(f"Workbook '{filename}' not found. Searched:\n{searched}")
