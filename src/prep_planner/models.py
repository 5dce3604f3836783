"""Value types shared across the planner."""
from dataclasses import dataclass, field, asdict
from typing import Any, Optional

PLAN_STATUSES = ("todo", "in_progress", "done")
PROBLEM_STATUSES = ("todo", "solved", "skipped")
DIFFICULTIES = ("Easy", "Medium", "Hard")
SESSION_KINDS = ("study", "drill", "build", "eval", "mock", "challenge")
MOCK_OUTCOMES = ("pass", "borderline", "fail")


@dataclass
class SheetSummary:
    inserted: int = 0
    updated: int = 0
    errors: list[str] = field(default_factory=list)


@dataclass
class ImportSummary:
    plan: SheetSummary = field(default_factory=SheetSummary)
    problems: SheetSummary = field(default_factory=SheetSummary)
    oop_problems: SheetSummary = field(default_factory=SheetSummary)
    resources: SheetSummary = field(default_factory=SheetSummary)
    mocks: SheetSummary = field(default_factory=SheetSummary)

    def sheets(self) -> dict[str, SheetSummary]:
        return {
            "plan": self.plan,
            "problems": self.problems,
            "oop_problems": self.oop_problems,
            "resources": self.resources,
            "mocks": self.mocks,
        }

    @property
    def total_errors(self) -> int:
        return sum(len(s.errors) for s in self.sheets().values())

    @property
    def total_operations(self) -> int:
        return sum(s.inserted + s.updated for s in self.sheets().values())

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SearchResult:
    id: str
    type: str  # plan | problem | oop_problem | resource | mock
    title: str
    description: str
    content: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    relevance_score: float = 0.0
    matched_fields: list[str] = field(default_factory=list)


@dataclass
class Playbook:
    id: str
    name: str
    title: str
    description: str
    category: str = "General"
    week: Optional[int] = None
    estimated_hours: int = 6
    difficulty: str = "Intermediate"
    technologies: list[str] = field(default_factory=list)
    content: str = ""
