"""Mock interview scheduling and outcomes."""
import logging
from datetime import datetime, time

from dateutil import parser as date_parser

from prep_planner.db import Store
from prep_planner.errors import InvalidScheduleError
from prep_planner.models import MOCK_OUTCOMES

logger = logging.getLogger(__name__)


def get_mocks(
    store: Store,
    week: int | None = None,
    mock_type: str | None = None,
    outcome: str | None = None,
) -> list[dict]:
    """Mocks newest-scheduled first; unscheduled ones last, newest created first."""
    return store.select(
        "mocks",
        filters={"week": week, "mock_type": mock_type, "outcome": outcome},
        order_by="scheduled_at DESC, created_at DESC, id DESC",
    )


def get_mock(store: Store, mock_id: int) -> dict | None:
    return store.fetch_one("mocks", mock_id)


def _day_bounds(start: str, end: str) -> tuple[int, int]:
    try:
        first = datetime.combine(datetime.fromisoformat(start).date(), time.min)
        last = datetime.combine(datetime.fromisoformat(end).date(), time.max)
    except ValueError as exc:
        raise ValueError(f"Invalid date range: {start} .. {end}") from exc
    return int(first.timestamp()), int(last.timestamp())


def get_mocks_by_date_range(store: Store, start: str, end: str) -> list[dict]:
    """Mocks scheduled between two local calendar days, inclusive."""
    first, last = _day_bounds(start, end)
    return store.select(
        "mocks",
        date_range=("scheduled_at", first, last),
        order_by="scheduled_at ASC",
    )


def parse_schedule(when: str) -> int:
    """Epoch seconds for a human-entered date/time, read as local time when naive."""
    if not isinstance(when, str) or not when.strip():
        raise InvalidScheduleError(f"Invalid scheduled date: {when!r}")
    try:
        parsed = date_parser.parse(when.strip())
    except (ValueError, OverflowError) as exc:
        raise InvalidScheduleError(f"Invalid scheduled date: {when}") from exc
    return int(parsed.timestamp())


def schedule_mock(
    store: Store,
    mock_id: int,
    when: str,
    interviewer: str | None = None,
    duration: int | None = None,
) -> None:
    scheduled_at = parse_schedule(when)
    store.update("mocks", mock_id, {
        "scheduled_at": scheduled_at,
        "interviewer": interviewer or None,
        "duration": duration,
    })


def record_mock_outcome(
    store: Store,
    mock_id: int,
    outcome: str,
    feedback: str | None = None,
    score: int | None = None,
) -> None:
    """Set outcome, feedback and score together.

    Scheduling first is a workflow convention of the CLI; an unscheduled mock
    is logged, not refused.
    """
    if outcome not in MOCK_OUTCOMES:
        raise ValueError(f"Invalid mock outcome: {outcome}")
    if score is not None and not 1 <= score <= 5:
        raise ValueError("Score must be between 1 and 5")
    mock = get_mock(store, mock_id)
    if mock and mock["scheduled_at"] is None:
        logger.warning("Recording outcome for mock %s which was never scheduled", mock_id)
    store.update("mocks", mock_id, {"outcome": outcome, "feedback": feedback or None, "score": score})
