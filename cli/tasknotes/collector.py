"""
Task collection from a TaskNotes folder

Walks a folder tree (following symlinks), parses every `.md` note and keeps
one task per (filename, dateCreated) identity. Notes that fail to parse are
recorded as skipped and never abort the scan.

Usage:
    from tasknotes.collector import collect_tasks

    tasks = collect_tasks(Path("~/vault/TaskNotes").expanduser())
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Set, Tuple, Union

from .errors import TaskParseError, VaultAccessError
from .frontmatter import parse_task_file
from .models import Task

logger = logging.getLogger(__name__)

NOTE_EXTENSION = ".md"
DEFAULT_ARCHIVE_FOLDER = "Archive"


@dataclass
class ScanOutcome:
    """Result of reading one note: either a task or the reason it was skipped"""
    path: Path
    task: Optional[Task] = None
    error: Optional[TaskParseError] = None

    @property
    def ok(self) -> bool:
        return self.task is not None


def is_note_file(path: Path) -> bool:
    return path.suffix.lower() == NOTE_EXTENSION


def iter_note_paths(root: Path) -> Iterator[Path]:
    """
    Yield every note under `root`, following symlinked folders.

    Order is deterministic: names are sorted, and the notes of a folder come
    before those of its subfolders. A folder reached a second time through a
    symlink is not descended into again.
    """
    visited: Set[Tuple[int, int]] = set()

    for dirpath, dirnames, filenames in os.walk(root, followlinks=True):
        try:
            stat = os.stat(dirpath)
        except OSError as e:
            logger.debug(f"Cannot stat {dirpath}: {e}")
            dirnames[:] = []
            continue

        key = (stat.st_dev, stat.st_ino)
        if key in visited:
            logger.debug(f"Already scanned {dirpath}, skipping")
            dirnames[:] = []
            continue
        visited.add(key)

        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if is_note_file(path):
                yield path


def scan_notes(root: Union[str, Path]) -> Iterator[ScanOutcome]:
    """
    Lazily parse every note under `root`.

    A missing root, or one that is not a folder, yields nothing. Calling
    again starts a fresh walk.
    """
    root = Path(root)
    if not root.is_dir():
        logger.debug(f"{root} is not a folder, nothing to scan")
        return

    for path in iter_note_paths(root):
        try:
            task = parse_task_file(path)
        except TaskParseError as e:
            yield ScanOutcome(path=path, error=e)
        else:
            yield ScanOutcome(path=path, task=task)


class TaskCollector:
    """Accumulates tasks from one or more folders, dropping duplicates"""

    def __init__(self):
        self.tasks: List[Task] = []
        self.skipped: List[ScanOutcome] = []
        self._seen: Set[Tuple[str, Optional[str]]] = set()

    def add(self, task: Task) -> bool:
        """Keep the task unless one with the same identity is already held"""
        if task.identity in self._seen:
            return False
        self._seen.add(task.identity)
        self.tasks.append(task)
        return True

    def scan(self, root: Union[str, Path]) -> int:
        """
        Add every task found under `root`.

        Returns:
            Number of tasks that were new to this collector
        """
        added = 0
        for outcome in scan_notes(root):
            if not outcome.ok:
                logger.debug(f"Skipping {outcome.path}: {outcome.error}")
                self.skipped.append(outcome)
                continue
            if self.add(outcome.task):
                added += 1
            else:
                logger.debug(f"Duplicate task {outcome.task.filename!r} in {outcome.path}")
        return added


def archive_sibling(root: Union[str, Path], archive_folder: str = DEFAULT_ARCHIVE_FOLDER) -> Optional[Path]:
    """
    The archive folder next to `root`, if there is one.

    Some vaults keep finished task notes in an `Archive` folder beside the
    TaskNotes folder rather than inside it.
    """
    root = Path(root)
    candidate = root.parent / archive_folder
    if not candidate.exists():
        return None
    if candidate.resolve() == root.resolve():
        return None
    return candidate


def check_root_access(root: Union[str, Path]) -> None:
    """
    Fail if `root` is a folder we are not allowed to list.

    A root that does not exist is fine: it simply holds no tasks.
    """
    root = Path(root)
    if not root.is_dir():
        return
    try:
        with os.scandir(root):
            pass
    except OSError as e:
        raise VaultAccessError(f"Cannot read tasks folder {root}: {e}") from e


def collect_tasks(
    root: Union[str, Path],
    include_archive: bool = True,
    archive_folder: str = DEFAULT_ARCHIVE_FOLDER,
) -> List[Task]:
    """
    Collect the tasks under `root`, plus its sibling archive folder if asked.

    Args:
        root: The TaskNotes folder
        include_archive: Also scan `<parent of root>/<archive_folder>`
        archive_folder: Name of the sibling archive folder

    Returns:
        Tasks in discovery order, duplicates removed
    """
    collector = TaskCollector()
    collector.scan(root)

    if include_archive:
        archive = archive_sibling(root, archive_folder)
        if archive is not None:
            added = collector.scan(archive)
            logger.debug(f"Archive folder {archive} added {added} tasks")

    logger.info(f"Collected {len(collector.tasks)} tasks, skipped {len(collector.skipped)} files")
    return collector.tasks
