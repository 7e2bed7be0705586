"""Task data model for taskpal.

Three task variants share the base ``Task`` behaviour: a plain ``Todo``, a
``Deadline`` with a single due date, and an ``Event`` spanning a date range.
"""

from datetime import date
from enum import Enum
from typing import Any, Tuple

from .utils.datetime import (
    DEFAULT_DATE_DISPLAY_FORMAT,
    TaskDate,
    format_task_date,
)


class TaskKind(Enum):
    """Task variants, valued by their storage name."""
    TODO = "todo"
    DEADLINE = "deadline"
    EVENT = "event"


DONE_ICON = "[X] "
NOT_DONE_ICON = "[ ] "


class Task:
    """A description plus a done/not-done flag.

    The description is fixed at construction; only the completion state
    changes afterwards.
    """

    kind: TaskKind = None
    type_tag: str = ""

    def __init__(self, description: str, is_done: bool = False):
        self._description = description
        self.is_done = is_done

    @property
    def description(self) -> str:
        return self._description

    def mark_done(self):
        """Mark the task as done."""
        self.is_done = True

    def mark_undone(self):
        """Mark the task as not done."""
        self.is_done = False

    def status_icon(self) -> str:
        return DONE_ICON if self.is_done else NOT_DONE_ICON

    def render(self, date_format: str = DEFAULT_DATE_DISPLAY_FORMAT) -> str:
        """Render the task as a single display line."""
        return self.status_icon() + self.description

    def _fields(self) -> Tuple[Any, ...]:
        return (self.description, self.is_done)

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self._fields() == other._fields()

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"{type(self).__name__}(description={self.description!r}, is_done={self.is_done})"


class Todo(Task):
    """A task with no timing information."""

    kind = TaskKind.TODO
    type_tag = "[T]"

    def render(self, date_format: str = DEFAULT_DATE_DISPLAY_FORMAT) -> str:
        return self.type_tag + super().render(date_format)


class Deadline(Task):
    """A task due by a given date.

    ``due`` is either a calendar date or, when the user's text could not be
    parsed, that text kept verbatim.
    """

    kind = TaskKind.DEADLINE
    type_tag = "[D]"

    def __init__(self, description: str, due: TaskDate, is_done: bool = False):
        super().__init__(description, is_done)
        self.due = due

    def render(self, date_format: str = DEFAULT_DATE_DISPLAY_FORMAT) -> str:
        due_text = format_task_date(self.due, date_format)
        return f"{self.type_tag}{super().render(date_format)} (by: {due_text})"

    def _fields(self) -> Tuple[Any, ...]:
        return super()._fields() + (self.due,)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Deadline(description={self.description!r}, due={self.due!r}, is_done={self.is_done})"


class Event(Task):
    """A task running from one calendar date to another."""

    kind = TaskKind.EVENT
    type_tag = "[E]"

    def __init__(self, description: str, start: date, end: date, is_done: bool = False):
        super().__init__(description, is_done)
        self.start = start
        self.end = end

    def render(self, date_format: str = DEFAULT_DATE_DISPLAY_FORMAT) -> str:
        start_text = format_task_date(self.start, date_format)
        end_text = format_task_date(self.end, date_format)
        return f"{self.type_tag}{super().render(date_format)} (from: {start_text} to: {end_text})"

    def _fields(self) -> Tuple[Any, ...]:
        return super()._fields() + (self.start, self.end)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return (
            f"Event(description={self.description!r}, start={self.start!r}, "
            f"end={self.end!r}, is_done={self.is_done})"
        )
