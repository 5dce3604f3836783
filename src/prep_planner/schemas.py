"""
Pydantic row shapes for each workbook sheet.

Field aliases are the exact column headers of the curriculum workbook.
"""
from datetime import date, datetime
from typing import Literal, Optional

from dateutil import parser as date_parser
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

Difficulty = Literal["Easy", "Medium", "Hard"]


def parse_sheet_date(value) -> date:
    """Coerce a cell value (datetime, date or free text) to a calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date_parser.parse(value.strip()).date()
        except (ValueError, OverflowError) as exc:
            raise ValueError(f"Invalid date: {value}") from exc
    raise ValueError(f"Invalid date: {value!r}")


class SheetRow(BaseModel):
    """Base schema for a header-keyed worksheet row."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore", populate_by_name=True)


class PlanRow(SheetRow):
    plan_date: date = Field(..., alias="Date")
    week: Optional[int] = Field(None, alias="Week")
    week_range: Optional[str] = Field(None, alias="Week Range")
    day: Optional[str] = Field(None, alias="Day")
    phase: Optional[str] = Field(None, alias="Phase")
    theme: str = Field(..., alias="Theme (Week Focus)")
    task_type: str = Field(..., alias="Task Type")
    task_desc: str = Field(..., alias="Task Description")
    weekly_challenge: Optional[str] = Field(None, alias="Weekly Challenge (Sat)")
    resource_pointer: Optional[str] = Field(None, alias="Resource Pointer")

    @field_validator("plan_date", mode="before")
    @classmethod
    def coerce_date(cls, v):
        return parse_sheet_date(v)

    @field_validator(
        "week_range", "day", "phase", "weekly_challenge", "resource_pointer", mode="before",
    )
    @classmethod
    def numbers_as_text(cls, v):
        # Spreadsheet cells like Day = 1 arrive as numbers.
        if isinstance(v, float) and v.is_integer():
            return str(int(v))
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class ProblemRow(SheetRow):
    week: int = Field(..., alias="Week")
    topic: str = Field(..., alias="Topic")
    problem: str = Field(..., alias="Problem")
    difficulty: Difficulty = Field(..., alias="Difficulty")
    url: Optional[str] = Field(None, alias="URL")
    notes: Optional[str] = Field(None, alias="Notes")


class OopProblemRow(SheetRow):
    week: int = Field(..., alias="Week")
    track: str = Field(..., alias="Track")
    problem: str = Field(..., alias="Problem")
    difficulty: Difficulty = Field(..., alias="Difficulty")
    url: Optional[str] = Field(None, alias="URL")
    notes: Optional[str] = Field(None, alias="Notes")


class ResourceRow(SheetRow):
    week: int = Field(..., alias="Week")
    area: str = Field(..., alias="Area")
    resource: str = Field(..., alias="Resource")
    url: Optional[str] = Field(None, alias="URL")
    notes: Optional[str] = Field(None, alias="Notes")


class MockRow(SheetRow):
    week: int = Field(..., alias="Week")
    mock_type: str = Field(..., alias="Mock Type")
    goal: str = Field(..., alias="Goal")
    notes: Optional[str] = Field(None, alias="Notes")


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic error into one readable line."""
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"]) or "row"
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)
