"""
Pytest configuration and fixtures for obsidian-tasks tests
"""
import logging
import os
import pytest
import tempfile
import shutil
from datetime import date
from pathlib import Path
import sys

# Add the cli directory to the Python path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "cli"))

AS_OF = date(2025, 3, 14)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the developer's own config, .env and log handlers out of tests"""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OBSIDIAN_TASKS_CONFIG", str(tmp_path / "no-config.yaml"))
    monkeypatch.delenv("TASKNOTES_PATH", raising=False)
    for key in list(os.environ):
        if key.startswith("OBSIDIAN_TASKS_") and key != "OBSIDIAN_TASKS_CONFIG":
            monkeypatch.delenv(key)

    yield

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() == "obsidian_tasks":
            root_logger.removeHandler(handler)


@pytest.fixture
def temp_vault():
    """Create a temporary vault with an empty TaskNotes folder"""
    temp_dir = tempfile.mkdtemp(prefix="test_vault_")
    vault_path = Path(temp_dir)
    (vault_path / "TaskNotes").mkdir()

    real_scandir = os.scandir

    yield vault_path

    # Cleanup (tests may still have os.scandir monkeypatched at this point)
    with pytest.MonkeyPatch.context() as mp:
        mp.setattr(os, "scandir", real_scandir)
        shutil.rmtree(temp_dir)


@pytest.fixture
def tasks_dir(temp_vault):
    return temp_vault / "TaskNotes"


@pytest.fixture
def write_note():
    """Write a note whose frontmatter is given as YAML lines"""
    def _write(folder: Path, name: str, *frontmatter: str, body: str = "Task body.\n") -> Path:
        folder.mkdir(parents=True, exist_ok=True)
        path = folder / name
        lines = ["---", *frontmatter, "---", body]
        path.write_text("\n".join(lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_notes(tasks_dir, write_note):
    """A small TaskNotes folder covering each query, relative to AS_OF"""
    write_note(tasks_dir, "Write report.md",
               "status: open", "priority: high", "dateCreated: 2025-03-01T09:00:00",
               "tags: [task, work]", "due: 2025-03-14")
    write_note(tasks_dir, "Pay rent.md",
               "status: todo", "dateCreated: 2025-02-20T08:00:00", "due: 2025-03-10")
    write_note(tasks_dir, "Call plumber.md",
               "status: done", "dateCreated: 2025-02-25T10:00:00",
               "due: 2025-03-01", "completedDate: 2025-03-14")
    write_note(tasks_dir, "Someday.md",
               "status: in-progress", "projects: ['[[Home]]']")
    return tasks_dir


@pytest.fixture
def as_of():
    """Reference day the sample notes are written against"""
    return AS_OF
