"""Exceptions raised by the planner."""


class PlannerError(Exception):
    """Base class for planner errors."""


class WorkbookError(PlannerError):
    """The import source could not be opened; nothing was imported."""


class WorkbookNotFoundError(WorkbookError):
    pass


class WorkbookAccessError(WorkbookError):
    """Permission denied, or the file is held open by another application."""


class InvalidWorkbookError(WorkbookError):
    pass


class InvalidScheduleError(PlannerError, ValueError):
    """A scheduling date/time string could not be parsed."""
