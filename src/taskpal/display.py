"""Console output for taskpal.

Task renderings contain square brackets (``[T][ ]``) and user text, so they
are always printed as ``rich.text.Text`` and never parsed as markup.
"""

from typing import Optional, Sequence

from rich.console import Console
from rich.text import Text

from .task import Task
from .theme import get_themed_console, show_startup_banner
from .utils.datetime import DEFAULT_DATE_DISPLAY_FORMAT


HELP_LINES = (
    ("list", "Show all tasks"),
    ("todo <description>", "Add a to-do"),
    ("deadline <description> /by <date>", "Add a deadline"),
    ("event <description> /from <date> /to <date>", "Add an event"),
    ("mark <n>", "Mark task n as done"),
    ("unmark <n>", "Mark task n as not done"),
    ("delete <n>", "Remove task n"),
    ("help", "Show this help"),
    ("bye", "Save and exit"),
)


def _task_count(count: int) -> str:
    noun = "task" if count == 1 else "tasks"
    return f"Now you have {count} {noun} in the list."


class Display:
    """Renders task lists, confirmations and errors to a rich console."""

    def __init__(self, console: Optional[Console] = None,
                 date_format: str = DEFAULT_DATE_DISPLAY_FORMAT):
        self.console = console or get_themed_console()
        self.date_format = date_format

    def _task_text(self, task: Task) -> Text:
        style = "task_done" if task.is_done else "task_pending"
        return Text(task.render(self.date_format), style=style)

    def show_welcome(self, show_banner: bool = True) -> None:
        if show_banner:
            show_startup_banner(self.console)
        self.console.print("Hello! What can I do for you?", style="header")
        self.print_line()

    def show_task_list(self, tasks: Sequence[Task]) -> None:
        if not tasks:
            self.console.print("Your list is empty.", style="muted")
        else:
            self.console.print("Here are the tasks in your list:", style="header")
            for number, task in enumerate(tasks, start=1):
                self.console.print(Text.assemble(f"{number}.", self._task_text(task)))
        self.print_line()

    def show_marked_done(self, task: Task) -> None:
        self.console.print("Nice! I've marked this task as done:", style="success")
        self.console.print(Text.assemble("  ", self._task_text(task)))
        self.print_line()

    def show_unmarked(self, task: Task) -> None:
        self.console.print("OK, I've marked this task as not done yet:", style="success")
        self.console.print(Text.assemble("  ", self._task_text(task)))
        self.print_line()

    def show_task_added(self, task: Task, count: int) -> None:
        self.console.print("Got it. I've added this task:", style="success")
        self.console.print(Text.assemble("  ", self._task_text(task)))
        self.console.print(_task_count(count))
        self.print_line()

    def show_task_removed(self, task: Task, count: int) -> None:
        self.console.print("Noted. I've removed this task:", style="success")
        self.console.print(Text.assemble("  ", self._task_text(task)))
        self.console.print(_task_count(count))
        self.print_line()

    def show_error(self, message: str) -> None:
        self.console.print(Text(message, style="error"))
        self.print_line()

    def show_help(self) -> None:
        self.console.print("Commands:", style="header")
        width = max(len(usage) for usage, _ in HELP_LINES)
        for usage, summary in HELP_LINES:
            self.console.print(Text.assemble("  ", (usage.ljust(width), "primary"), "  ", summary))
        self.console.print(
            "Dates: M/d/yyyy HHmm (12/2/2019 1800) or yyyy-MM-dd (2019-12-02)",
            style="muted",
        )
        self.print_line()

    def show_farewell(self) -> None:
        self.console.print("Bye. Hope to see you again soon!", style="header")
        self.print_line()

    def print_line(self) -> None:
        self.console.rule(style="border")
