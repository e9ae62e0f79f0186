"""
Task queries behind the CLI subcommands
"""

import json
from datetime import date
from enum import Enum
from typing import Callable, Dict, Iterable, List

from .errors import SerializationError
from .models import Task
from .predicates import is_completed_today, is_due_today, is_overdue, is_pending


class Command(str, Enum):
    """Which tasks a query selects"""
    ALL = "all"
    TODAY = "today"
    OVERDUE = "overdue"
    PENDING = "pending"
    COMPLETED_TODAY = "completed-today"


FILTERS: Dict[Command, Callable[[Task, date], bool]] = {
    Command.ALL: lambda task, as_of: True,
    Command.TODAY: is_due_today,
    Command.OVERDUE: is_overdue,
    Command.PENDING: lambda task, as_of: is_pending(task),
    Command.COMPLETED_TODAY: is_completed_today,
}


def select_tasks(tasks: Iterable[Task], command: Command, as_of: date) -> List[Task]:
    """Tasks matching `command`, in the order given"""
    matches = FILTERS[Command(command)]
    return [task for task in tasks if matches(task, as_of)]


def resolve_count_command(today: bool = False, overdue: bool = False, completed_today: bool = False) -> Command:
    """
    Pick the query for `count` from its flags.

    When several flags are set the first one wins, in this order: today,
    overdue, completed-today. With no flag the pending tasks are counted.
    """
    if today:
        return Command.TODAY
    if overdue:
        return Command.OVERDUE
    if completed_today:
        return Command.COMPLETED_TODAY
    return Command.PENDING


def count_tasks(tasks: Iterable[Task], command: Command, as_of: date) -> int:
    return len(select_tasks(tasks, command, as_of))


def render_listing(tasks: Iterable[Task]) -> str:
    """
    Pretty-printed JSON array of tasks using the frontmatter field names.

    Raises:
        SerializationError: A task could not be encoded
    """
    try:
        payload = [task.model_dump(mode="json", by_alias=True) for task in tasks]
        return json.dumps(payload, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to encode tasks as JSON: {e}") from e
