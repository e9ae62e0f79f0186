"""
TaskNotes reader for Obsidian vaults

Parses task notes (markdown files with YAML frontmatter) and answers simple
queries about them: what is due today, what is overdue, what is still open.
"""

from .errors import (
    ConfigError,
    MalformedFrontmatter,
    MissingFrontmatter,
    NoteReadError,
    SerializationError,
    TaskNotesError,
    TaskParseError,
    VaultAccessError,
)
from .models import Task
from .frontmatter import extract_frontmatter, parse_task_file, parse_task_text
from .predicates import (
    is_completed_today,
    is_done,
    is_due_today,
    is_overdue,
    is_pending,
    local_today,
)
from .collector import ScanOutcome, TaskCollector, check_root_access, collect_tasks, scan_notes
from .commands import Command, count_tasks, render_listing, resolve_count_command, select_tasks

__all__ = [
    'ConfigError',
    'MalformedFrontmatter',
    'MissingFrontmatter',
    'NoteReadError',
    'SerializationError',
    'TaskNotesError',
    'TaskParseError',
    'VaultAccessError',
    'Task',
    'extract_frontmatter',
    'parse_task_file',
    'parse_task_text',
    'is_completed_today',
    'is_done',
    'is_due_today',
    'is_overdue',
    'is_pending',
    'local_today',
    'ScanOutcome',
    'TaskCollector',
    'check_root_access',
    'collect_tasks',
    'scan_notes',
    'Command',
    'count_tasks',
    'render_listing',
    'resolve_count_command',
    'select_tasks',
]
