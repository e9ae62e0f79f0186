"""
Exceptions raised while reading TaskNotes task notes
"""

from pathlib import Path
from typing import Optional


class TaskNotesError(Exception):
    """Base class for every obsidian-tasks error"""


class TaskParseError(TaskNotesError):
    """A single note could not be turned into a task.

    The collector treats these as skips: one broken note never stops the scan.
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class NoteReadError(TaskParseError):
    """The note exists but could not be read as UTF-8 text"""


class MissingFrontmatter(TaskParseError):
    """The note does not start with a `---` delimited frontmatter block"""


class MalformedFrontmatter(TaskParseError):
    """The frontmatter is present but is not a valid task"""


class VaultAccessError(TaskNotesError):
    """The tasks folder itself exists but cannot be listed"""


class SerializationError(TaskNotesError):
    """The filtered tasks could not be encoded for output"""


class ConfigError(TaskNotesError):
    """The configuration file is unreadable or has invalid values"""
