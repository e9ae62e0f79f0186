"""
Pydantic model for TaskNotes task records
"""

import re
from datetime import date, datetime
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class Task(BaseModel):
    """One task note, decoded from its YAML frontmatter.

    Field aliases are the names TaskNotes writes into the frontmatter; they are
    also the names used when a task is dumped for output. `filename` is never
    read from the frontmatter and never dumped.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    filename: str = Field(default="", exclude=True)
    status: str
    priority: Optional[str] = None
    date_created: Optional[str] = Field(default=None, alias="dateCreated")
    tags: List[str] = Field(default_factory=list)
    projects: List[str] = Field(default_factory=list)
    due: Optional[date] = None
    completed_date: Optional[date] = Field(default=None, alias="completedDate")
    task_source_type: Optional[str] = Field(default=None, alias="taskSourceType")

    @field_validator("tags", "projects", mode="before")
    @classmethod
    def empty_list_when_blank(cls, value: Any) -> Any:
        # `tags:` with nothing after it loads as None
        if value is None:
            return []
        return value

    @field_validator("due", "completed_date", mode="before")
    @classmethod
    def parse_calendar_date(cls, value: Any) -> Any:
        if value is None:
            return None
        # datetime is a date subclass, reject it first
        if isinstance(value, datetime):
            raise ValueError("expected a calendar date without a time of day")
        if isinstance(value, date):
            return value
        if isinstance(value, str) and ISO_DATE_PATTERN.fullmatch(value):
            return date.fromisoformat(value)
        raise ValueError(f"expected a YYYY-MM-DD date, got {value!r}")

    @property
    def identity(self) -> Tuple[str, Optional[str]]:
        """Key used to spot the same task showing up twice during a scan"""
        return (self.filename, self.date_created)
