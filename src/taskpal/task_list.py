"""Ordered task collection with 1-based user addressing."""

import re
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import InvalidIndexError
from .task import Task


INDEX_TOKEN_RE = re.compile(r"[+-]?[0-9]+")

INVALID_TASK_NUMBER = "Invalid task number. Please refer to your to-do list again."


class TaskList:
    """Mutable, ordered sequence of tasks.

    Indices are 0-based internally. Numbers typed by the user are 1-based and
    go through ``resolve_index`` before any mutation.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = list(tasks) if tasks else []

    def add_task(self, task: Task) -> None:
        self._tasks.append(task)

    def insert_task(self, index: int, task: Task) -> None:
        """Put a task back at a 0-based position."""
        self._tasks.insert(index, task)

    def remove_task(self, index: int) -> Task:
        """Remove and return the task at a 0-based index.

        Raises:
            InvalidIndexError: If the index is outside the list
        """
        self._check_bounds(index)
        return self._tasks.pop(index)

    def get_task(self, index: int) -> Task:
        self._check_bounds(index)
        return self._tasks[index]

    def resolve_index(self, token: Optional[str]) -> int:
        """Translate a 1-based task number typed by the user to a 0-based index.

        Raises:
            InvalidIndexError: If the token is not an integer or out of range
        """
        if token is None or not INDEX_TOKEN_RE.fullmatch(token.strip()):
            raise InvalidIndexError(INVALID_TASK_NUMBER)
        index = int(token) - 1
        self._check_bounds(index)
        return index

    def size(self) -> int:
        return len(self._tasks)

    def get_tasks(self) -> Tuple[Task, ...]:
        """Read-only view of the tasks in list order."""
        return tuple(self._tasks)

    def _check_bounds(self, index: int) -> None:
        # Negative indices would wrap around in Python; they are never valid here.
        if not 0 <= index < len(self._tasks):
            raise InvalidIndexError(INVALID_TASK_NUMBER)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(tuple(self._tasks))
