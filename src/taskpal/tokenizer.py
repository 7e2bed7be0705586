"""Splitting rules for command lines.

A command is a keyword followed by free text. Deadlines and events carry
their dates after literal delimiters (``/by``, ``/from``, ``/to``); each
delimiter splits on its first occurrence, and matching is case-sensitive.
A description that itself contains a delimiter is therefore split there.
"""

from typing import Optional, Tuple

from .errors import MalformedCommandError


BY_DELIMITER = "/by"
FROM_DELIMITER = "/from"
TO_DELIMITER = "/to"

MISSING_DETAILS = "Please complete your request by specifying the details of the task!"
DEADLINE_FORMAT = "Invalid input format for deadline. Please provide a valid date/time."
EVENT_FORMAT = "Invalid input format for event. Please provide valid date/time."


def split_command(line: str) -> Tuple[str, str]:
    """Split a line into a lower-cased keyword and the stripped remainder."""
    parts = line.strip().split(None, 1)
    if not parts:
        return "", ""
    keyword = parts[0].lower()
    remainder = parts[1].strip() if len(parts) > 1 else ""
    return keyword, remainder


def second_token(line: str) -> Optional[str]:
    """Return the second whitespace-separated token of a line, if any."""
    tokens = line.split()
    if len(tokens) < 2:
        return None
    return tokens[1]


def split_once(text: str, delimiter: str) -> Optional[Tuple[str, str]]:
    """Split on the first occurrence of ``delimiter``; None if it is absent."""
    before, found, after = text.partition(delimiter)
    if not found:
        return None
    return before.strip(), after.strip()


def split_deadline(remainder: str) -> Tuple[str, str]:
    """Split ``<description> /by <date>`` into description and date text.

    Only non-empty date text reaches the raw-text fallback: ``deadline x /by``
    names no date at all and is a malformed command, not an unparseable date.

    Raises:
        MalformedCommandError: If ``/by`` is missing or either part is empty
    """
    parts = split_once(remainder, BY_DELIMITER)
    if parts is None:
        raise MalformedCommandError(DEADLINE_FORMAT)
    description, date_text = parts
    if not description:
        raise MalformedCommandError(MISSING_DETAILS)
    if not date_text:
        raise MalformedCommandError(DEADLINE_FORMAT)
    return description, date_text


def split_event(remainder: str) -> Tuple[str, str, str]:
    """Split ``<description> /from <date> /to <date>`` into its three parts.

    ``/to`` is looked for only after ``/from``.

    Raises:
        MalformedCommandError: If a delimiter is missing or any part is empty
    """
    head = split_once(remainder, FROM_DELIMITER)
    if head is None:
        raise MalformedCommandError(EVENT_FORMAT)
    description, tail = head
    span = split_once(tail, TO_DELIMITER)
    if span is None:
        raise MalformedCommandError(EVENT_FORMAT)
    start_text, end_text = span
    if not description:
        raise MalformedCommandError(MISSING_DETAILS)
    if not start_text or not end_text:
        raise MalformedCommandError(EVENT_FORMAT)
    return description, start_text, end_text
