"""Exceptions raised while interpreting commands and persisting tasks.

Every exception carries the message shown to the user; the interpreter
catches them and hands the message to the display.
"""

from pathlib import Path
from typing import List, Optional


class TaskpalError(Exception):
    """Base exception for taskpal operations."""
    pass


class MalformedCommandError(TaskpalError):
    """A required delimiter, argument or description is missing."""
    pass


class InvalidIndexError(TaskpalError):
    """A task number is not numeric or outside the current list."""
    pass


class InvalidDateError(TaskpalError):
    """Date text matches none of the accepted formats."""
    pass


class UnknownCommandError(TaskpalError):
    """The command keyword is not one we know.

    The message offers the closest known keyword when there is one.
    """

    def __init__(self, message: str, suggestions: Optional[List[str]] = None):
        self.suggestions = suggestions or []
        if self.suggestions:
            message = f"{message} Did you mean '{self.suggestions[0]}'?"
        super().__init__(message)


class StorageError(TaskpalError):
    """Reading or writing the task file failed."""
    
    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        super().__init__(message)
