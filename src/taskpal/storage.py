"""Storage layer for taskpal using a markdown file with YAML frontmatter.

The whole task list lives in one file and every save rewrites it::

    ---
    format_version: 1
    task_count: 2
    updated: '2026-10-18T09:30:00+00:00'
    ---
    # Tasks

    - [ ] (T) buy milk
    - [x] (D) submit report
      - By: 2019-12-02
"""

import logging
import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Sequence
import frontmatter
import yaml

from .config import ConfigModel
from .errors import StorageError
from .task import Deadline, Event, Task, TaskKind, Todo
from .utils.datetime import from_iso_date, now_utc, to_iso_date, to_iso_string


logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

KIND_LETTERS: Dict[TaskKind, str] = {
    TaskKind.TODO: "T",
    TaskKind.DEADLINE: "D",
    TaskKind.EVENT: "E",
}
LETTER_KINDS: Dict[str, TaskKind] = {letter: kind for kind, letter in KIND_LETTERS.items()}

TASK_LINE_RE = re.compile(r"^- \[( |x|X)\] \(([TDE])\) (.*)$")
SUB_ITEM_RE = re.compile(r"^  - (By|By \(text\)|From|To): (.*)$")

DUE_LABEL = "By"
DUE_TEXT_LABEL = "By (text)"
START_LABEL = "From"
END_LABEL = "To"


class TaskMarkdownFormat:
    """Handles conversion between Task objects and markdown lines."""

    @staticmethod
    def to_markdown(task: Task) -> str:
        """Convert a task to a checkbox line plus date sub-items."""
        checkbox = "- [x]" if task.is_done else "- [ ]"
        lines = [f"{checkbox} ({KIND_LETTERS[task.kind]}) {task.description}"]

        if isinstance(task, Deadline):
            if isinstance(task.due, str):
                lines.append(f"  - {DUE_TEXT_LABEL}: {task.due}")
            else:
                lines.append(f"  - {DUE_LABEL}: {to_iso_date(task.due)}")
        elif isinstance(task, Event):
            lines.append(f"  - {START_LABEL}: {to_iso_date(task.start)}")
            lines.append(f"  - {END_LABEL}: {to_iso_date(task.end)}")

        return "\n".join(lines)

    @staticmethod
    def from_lines(header: str, sub_items: Sequence[str]) -> Task:
        """Build a task from its checkbox line and sub-item lines.

        Raises:
            ValueError: If the lines do not describe a complete task
        """
        match = TASK_LINE_RE.match(header)
        if not match:
            raise ValueError(f"Not a task line: {header!r}")

        is_done = match.group(1) in ("x", "X")
        kind = LETTER_KINDS[match.group(2)]
        description = match.group(3)

        attrs: Dict[str, str] = {}
        for line in sub_items:
            item = SUB_ITEM_RE.match(line)
            if item:
                attrs[item.group(1)] = item.group(2)

        if kind == TaskKind.TODO:
            return Todo(description, is_done=is_done)

        if kind == TaskKind.DEADLINE:
            if DUE_LABEL in attrs:
                return Deadline(description, from_iso_date(attrs[DUE_LABEL]), is_done=is_done)
            if DUE_TEXT_LABEL in attrs:
                return Deadline(description, attrs[DUE_TEXT_LABEL], is_done=is_done)
            raise ValueError(f"Deadline without a due date: {description!r}")

        if START_LABEL not in attrs or END_LABEL not in attrs:
            raise ValueError(f"Event without a date range: {description!r}")
        return Event(
            description,
            from_iso_date(attrs[START_LABEL]),
            from_iso_date(attrs[END_LABEL]),
            is_done=is_done,
        )


class TaskListMarkdownFormat:
    """Handles conversion between a whole task list and the markdown file."""

    @staticmethod
    def to_markdown(tasks: Sequence[Task]) -> str:
        """Convert tasks to markdown with YAML frontmatter."""
        content_lines = ["# Tasks", ""]
        for task in tasks:
            content_lines.append(TaskMarkdownFormat.to_markdown(task))

        post = frontmatter.Post(
            "\n".join(content_lines),
            format_version=FORMAT_VERSION,
            task_count=len(tasks),
            updated=to_iso_string(now_utc()),
        )
        return frontmatter.dumps(post) + "\n"

    @staticmethod
    def from_markdown(content: str) -> List[Task]:
        """Parse the markdown file back into tasks, in file order.

        Lines that are neither task lines nor sub-items are ignored.

        Raises:
            ValueError: If the file is from a newer format or holds a broken task
        """
        post = frontmatter.loads(content)

        version = post.metadata.get("format_version", FORMAT_VERSION)
        if not isinstance(version, int) or version > FORMAT_VERSION:
            raise ValueError(f"Unsupported task file format version: {version!r}")

        tasks: List[Task] = []
        header: Optional[str] = None
        sub_items: List[str] = []

        for raw_line in post.content.split("\n"):
            line = raw_line.rstrip("\r")
            if TASK_LINE_RE.match(line):
                if header is not None:
                    tasks.append(TaskMarkdownFormat.from_lines(header, sub_items))
                header, sub_items = line, []
            elif header is not None and SUB_ITEM_RE.match(line):
                sub_items.append(line)

        if header is not None:
            tasks.append(TaskMarkdownFormat.from_lines(header, sub_items))

        expected = post.metadata.get("task_count")
        if expected is not None and expected != len(tasks):
            logger.warning(f"Task file lists {expected} tasks but {len(tasks)} were read")

        return tasks


def _atomic_write(path: Path, content: str) -> None:
    """Write content atomically via tempfile + rename."""
    fd, tmp = tempfile.mkstemp(dir=path.parent, suffix='.tmp')
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


class Storage:
    """File-based storage for the task list."""

    def __init__(self, config: ConfigModel):
        self.config = config
        self.tasks_path = config.get_tasks_path()

    def _ensure_directories(self):
        """Ensure necessary directories exist."""
        self.tasks_path.parent.mkdir(parents=True, exist_ok=True)

    def load_tasks(self) -> List[Task]:
        """Load the saved task list; empty if nothing has been saved yet.

        A file that cannot be read or parsed is copied to the backup
        directory and an empty list is returned.
        """
        if not self.tasks_path.exists():
            logger.debug(f"No task file at {self.tasks_path}; starting empty")
            return []

        try:
            with open(self.tasks_path, "r", encoding="utf-8") as f:
                content = f.read()
            tasks = TaskListMarkdownFormat.from_markdown(content)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.warning(f"Could not read task file {self.tasks_path}: {e}")
            backup = self.backup_tasks()
            if backup:
                logger.warning(f"Unreadable task file preserved at {backup}")
            return []

        logger.debug(f"Loaded {len(tasks)} tasks from {self.tasks_path}")
        return tasks

    def save_tasks(self, tasks: Sequence[Task]) -> None:
        """Overwrite the task file with the given tasks.

        Raises:
            StorageError: If the file cannot be written
        """
        try:
            self._ensure_directories()
            _atomic_write(self.tasks_path, TaskListMarkdownFormat.to_markdown(tasks))
        except OSError as e:
            raise StorageError(f"Unable to save tasks to {self.tasks_path}: {e}", self.tasks_path) from e

        logger.debug(f"Saved {len(tasks)} tasks to {self.tasks_path}")

    def backup_tasks(self, backup_path: Optional[Path] = None) -> Optional[Path]:
        """Copy the task file into a timestamped backup folder.

        Returns:
            Path of the copy, or None if there was nothing to copy or copying failed
        """
        if not self.tasks_path.exists():
            return None

        if backup_path is None:
            timestamp = now_utc().strftime("%Y-%m-%d_%H-%M-%S")
            backup_dir = self.config.get_backup_path(timestamp)
            backup_path = backup_dir / self.tasks_path.name

        try:
            backup_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(self.tasks_path, backup_path)
        except OSError as e:
            logger.error(f"Error backing up task file {self.tasks_path}: {e}")
            return None

        return backup_path
