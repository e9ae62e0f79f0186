"""
Frontmatter extraction and task note parsing

A TaskNotes note looks like:

    ---
    status: open
    due: 2025-03-14
    tags: [task]
    ---
    Body text...

Only the block between the two `---` lines is read; the body is ignored.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from .errors import MalformedFrontmatter, MissingFrontmatter, NoteReadError, TaskParseError
from .models import Task

logger = logging.getLogger(__name__)

FRONTMATTER_MARKER = "---"
UNKNOWN_FILENAME = "unknown"
# scalars other than null stay as the text the user wrote
TEXT_ONLY_TAGS = {
    "tag:yaml.org,2002:bool",
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
    "tag:yaml.org,2002:timestamp",
}


class TaskNotesLoader(yaml.SafeLoader):
    """SafeLoader that keeps plain scalars as the text the user wrote.

    `priority: 1` stays "1" and `dateCreated` is passed through verbatim;
    `due`/`completedDate` are checked against YYYY-MM-DD by the model rather
    than by YAML. Empty values still load as None.
    """


TaskNotesLoader.yaml_implicit_resolvers = {
    first_char: [
        (tag, regexp)
        for tag, regexp in resolvers
        if tag not in TEXT_ONLY_TAGS
    ]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _split_lines(content: str) -> List[str]:
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def extract_frontmatter(content: str) -> Optional[str]:
    """
    Return the text between the opening and closing `---` lines.

    The opening marker must be the very first line. Markers are matched
    exactly, so `--- ` with trailing whitespace does not count.

    Returns:
        The lines between the markers joined with newlines, or None when the
        note has no complete frontmatter block.
    """
    lines = _split_lines(content)
    if not lines or lines[0] != FRONTMATTER_MARKER:
        return None

    for i in range(1, len(lines)):
        if lines[i] == FRONTMATTER_MARKER:
            return "\n".join(lines[1:i])

    return None


def load_frontmatter(block: str) -> Dict[str, Any]:
    """Decode a frontmatter block into a mapping of string keys"""
    try:
        data = yaml.load(block, Loader=TaskNotesLoader)
    except yaml.YAMLError as e:
        raise MalformedFrontmatter(f"Invalid YAML in frontmatter: {e}") from e

    if not isinstance(data, dict):
        raise MalformedFrontmatter("Frontmatter is not a key/value mapping")

    return {key: value for key, value in data.items() if isinstance(key, str)}


def _describe_validation_error(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "frontmatter"
        problems.append(f"{field}: {item['msg']}")
    return "; ".join(problems)


def parse_task_text(content: str, filename: str = UNKNOWN_FILENAME) -> Task:
    """
    Build a task from the full text of a note.

    Args:
        content: Note text, frontmatter included
        filename: Name to record on the task (the note's base name)

    Raises:
        MissingFrontmatter: No `---` delimited block at the top of the note
        MalformedFrontmatter: The block is not valid YAML or not a valid task
    """
    block = extract_frontmatter(content)
    if block is None:
        raise MissingFrontmatter(f"No frontmatter found in {filename}")

    payload = load_frontmatter(block)
    payload["filename"] = filename

    try:
        return Task.model_validate(payload)
    except ValidationError as e:
        raise MalformedFrontmatter(
            f"Invalid task frontmatter in {filename}: {_describe_validation_error(e)}"
        ) from e


def note_filename(path: Path) -> str:
    """Base name of the note without its extension"""
    stem = path.stem
    try:
        stem.encode("utf-8")
    except UnicodeEncodeError:
        # undecodable bytes survive as surrogates in the name
        return UNKNOWN_FILENAME
    return stem


def parse_task_file(path: Union[str, Path]) -> Task:
    """
    Read a note from disk and build its task.

    Raises:
        NoteReadError: The file could not be read as UTF-8 text
        MissingFrontmatter, MalformedFrontmatter: see parse_task_text
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise NoteReadError(f"Failed to read file: {path}: {e}", path=path) from e

    try:
        return parse_task_text(content, filename=note_filename(path))
    except TaskParseError as e:
        e.path = path
        raise
