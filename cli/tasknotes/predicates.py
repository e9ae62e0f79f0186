"""
Derived task states

Every date-dependent check takes the reference day explicitly; only
local_today() looks at the clock.
"""

from datetime import date

from .models import Task

DONE_STATUSES = frozenset({"done", "completed", "x"})


def local_today() -> date:
    """Today's date on the local calendar (not UTC)"""
    return date.today()


def is_done(task: Task) -> bool:
    return task.status.lower() in DONE_STATUSES


def is_pending(task: Task) -> bool:
    return not is_done(task)


def is_due_today(task: Task, as_of: date) -> bool:
    return task.due is not None and task.due == as_of


def is_overdue(task: Task, as_of: date) -> bool:
    """Due strictly before `as_of` and not done. Done tasks are never overdue."""
    return task.due is not None and task.due < as_of and not is_done(task)


def is_completed_today(task: Task, as_of: date) -> bool:
    return task.completed_date is not None and task.completed_date == as_of
