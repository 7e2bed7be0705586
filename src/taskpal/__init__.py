"""taskpal - a command-line assistant for to-dos, deadlines and events."""

__version__ = "0.1.0"
__author__ = "taskpal Team"

from .task import Task, Todo, Deadline, Event, TaskKind
from .task_list import TaskList

__all__ = ["Task", "Todo", "Deadline", "Event", "TaskKind", "TaskList", "__version__"]
