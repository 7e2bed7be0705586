"""Command interpreter: turns one line of user input into a task list change.

Each call to ``CommandInterpreter.handle`` processes one line completely:
classify the keyword, validate and parse the arguments, mutate the task
list, save it, and render the outcome. Failures are rendered as messages
and leave the task list as it was.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Optional
from datetime import date

from fuzzywuzzy import fuzz, process

from .display import Display
from .errors import (
    InvalidDateError,
    MalformedCommandError,
    StorageError,
    TaskpalError,
    UnknownCommandError,
)
from .storage import Storage
from .task import Deadline, Event, Task, Todo
from .task_list import TaskList
from .tokenizer import MISSING_DETAILS, second_token, split_command, split_deadline, split_event
from .utils.datetime import parse_task_date


logger = logging.getLogger(__name__)

UNKNOWN_COMMAND = "I'm sorry, I don't understand! Please type your request again."
MISSING_TASK_NUMBER = "Please specify the task number!"
MISSING_DELETE_NUMBER = "Please specify which task number you want to remove!"
EVENT_DATES = "Invalid input format for event. Please provide valid dates."

SUGGESTION_CUTOFF = 70


class CommandResult(Enum):
    """What the read loop should do after a command."""
    CONTINUE = "continue"
    TERMINATE = "terminate"


class CommandInterpreter:
    """Interprets command lines against a shared task list."""

    def __init__(self, task_list: TaskList, storage: Storage, display: Display,
                 date_parser: Callable[[str], Optional[date]] = parse_task_date):
        self.task_list = task_list
        self.storage = storage
        self.display = display
        self.date_parser = date_parser
        self._handlers: Dict[str, Callable[[str, str], CommandResult]] = {
            "list": self._list,
            "bye": self._bye,
            "mark": self._mark,
            "unmark": self._unmark,
            "todo": self._todo,
            "deadline": self._deadline,
            "event": self._event,
            "delete": self._delete,
            "help": self._help,
        }

    @property
    def keywords(self):
        return list(self._handlers)

    def handle(self, line: str) -> CommandResult:
        """Process one line of input and report whether to keep reading."""
        keyword, remainder = split_command(line)
        handler = self._handlers.get(keyword)
        try:
            if handler is None:
                raise self._unknown_command(keyword)
            return handler(line, remainder)
        except TaskpalError as e:
            logger.debug(f"Rejected command {line!r}: {type(e).__name__}: {e}")
            self.display.show_error(str(e))
            return CommandResult.CONTINUE

    def _unknown_command(self, keyword: str) -> UnknownCommandError:
        suggestions = []
        if keyword:
            matches = process.extractBests(keyword, self.keywords, scorer=fuzz.ratio,
                                           score_cutoff=SUGGESTION_CUTOFF, limit=2)
            suggestions = [match[0] for match in matches]
        return UnknownCommandError(UNKNOWN_COMMAND, suggestions)

    def _save(self, undo: Callable[[], None]) -> None:
        """Persist the whole list, undoing the in-memory change if that fails."""
        try:
            self.storage.save_tasks(self.task_list.get_tasks())
        except StorageError:
            logger.error("Save failed; reverting the last change")
            undo()
            raise

    # -------------------- commands --------------------

    def _list(self, line: str, remainder: str) -> CommandResult:
        self.display.show_task_list(self.task_list.get_tasks())
        return CommandResult.CONTINUE

    def _bye(self, line: str, remainder: str) -> CommandResult:
        try:
            self.storage.save_tasks(self.task_list.get_tasks())
        except StorageError as e:
            self.display.show_error(str(e))
        self.display.show_farewell()
        return CommandResult.TERMINATE

    def _help(self, line: str, remainder: str) -> CommandResult:
        self.display.show_help()
        return CommandResult.CONTINUE

    def _mark(self, line: str, remainder: str) -> CommandResult:
        task = self._addressed_task(line)
        was_done = task.is_done
        task.mark_done()
        self._save(lambda: _restore_done(task, was_done))
        self.display.show_marked_done(task)
        return CommandResult.CONTINUE

    def _unmark(self, line: str, remainder: str) -> CommandResult:
        task = self._addressed_task(line)
        was_done = task.is_done
        task.mark_undone()
        self._save(lambda: _restore_done(task, was_done))
        self.display.show_unmarked(task)
        return CommandResult.CONTINUE

    def _addressed_task(self, line: str) -> Task:
        token = second_token(line)
        if token is None:
            raise MalformedCommandError(MISSING_TASK_NUMBER)
        return self.task_list.get_task(self.task_list.resolve_index(token))

    def _todo(self, line: str, remainder: str) -> CommandResult:
        if not remainder:
            raise MalformedCommandError(MISSING_DETAILS)
        return self._add(Todo(remainder))

    def _deadline(self, line: str, remainder: str) -> CommandResult:
        if not remainder:
            raise MalformedCommandError(MISSING_DETAILS)
        description, date_text = split_deadline(remainder)
        due = self.date_parser(date_text)
        if due is None:
            # Deadlines keep unparseable text as-is instead of rejecting it.
            logger.debug(f"Keeping deadline date as text: {date_text!r}")
            return self._add(Deadline(description, date_text))
        return self._add(Deadline(description, due))

    def _event(self, line: str, remainder: str) -> CommandResult:
        if not remainder:
            raise MalformedCommandError(MISSING_DETAILS)
        description, start_text, end_text = split_event(remainder)
        start = self.date_parser(start_text)
        if start is None:
            raise InvalidDateError(EVENT_DATES)
        end = self.date_parser(end_text)
        if end is None:
            raise InvalidDateError(EVENT_DATES)
        return self._add(Event(description, start, end))

    def _add(self, task: Task) -> CommandResult:
        self.task_list.add_task(task)
        self._save(lambda: self.task_list.remove_task(self.task_list.size() - 1))
        self.display.show_task_added(task, self.task_list.size())
        return CommandResult.CONTINUE

    def _delete(self, line: str, remainder: str) -> CommandResult:
        token = second_token(line)
        if token is None:
            raise MalformedCommandError(MISSING_DELETE_NUMBER)
        index = self.task_list.resolve_index(token)
        removed = self.task_list.remove_task(index)
        self._save(lambda: self.task_list.insert_task(index, removed))
        self.display.show_task_removed(removed, self.task_list.size())
        return CommandResult.CONTINUE


def _restore_done(task: Task, was_done: bool) -> None:
    if was_done:
        task.mark_done()
    else:
        task.mark_undone()
