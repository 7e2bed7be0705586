"""Command-line entry point and read loop for taskpal."""

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from . import __version__
from .config import ConfigModel, load_config
from .display import Display
from .interpreter import CommandInterpreter, CommandResult
from .storage import Storage
from .task_list import TaskList
from .theme import get_themed_console


logger = logging.getLogger(__name__)


def configure_logging(config: ConfigModel, verbose: bool) -> None:
    """Send log records to stderr at the configured level."""
    level = logging.DEBUG if verbose else getattr(logging, str(config.log_level).upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logging.getLogger("taskpal").setLevel(level)


def run_loop(interpreter: CommandInterpreter, console: Console, prompt: str = "> ") -> None:
    """Read and handle lines until a command asks to stop.

    End of input and Ctrl-C are treated as ``bye`` so the list is saved on
    the way out.
    """
    while True:
        try:
            line = console.input(prompt)
        except (EOFError, KeyboardInterrupt):
            console.print()
            interpreter.handle("bye")
            return
        if interpreter.handle(line) is CommandResult.TERMINATE:
            return


@click.command()
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Path to config file")
@click.option("--data-dir", type=click.Path(file_okay=False, path_type=Path),
              help="Directory holding the task file (overrides config)")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--no-banner", is_flag=True, help="Skip the startup banner")
@click.version_option(__version__, prog_name="taskpal")
def main(config_path: Optional[Path], data_dir: Optional[Path], verbose: bool, no_banner: bool):
    """taskpal - keep track of to-dos, deadlines and events."""
    if config_path is None and data_dir is not None:
        config_path = data_dir / "config.yaml"

    config = load_config(config_path)
    if data_dir is not None:
        config.data_dir = str(data_dir)
        config.backup_dir = str(data_dir / "backups")

    configure_logging(config, verbose)

    storage = Storage(config)
    task_list = TaskList(storage.load_tasks())
    logger.debug(f"Starting with {task_list.size()} tasks from {storage.tasks_path}")

    console = get_themed_console(no_color=config.no_color)
    display = Display(console, date_format=config.date_display_format)
    interpreter = CommandInterpreter(task_list, storage, display)

    display.show_welcome(show_banner=config.show_banner and not no_banner)
    run_loop(interpreter, console, config.prompt)


if __name__ == "__main__":  # pragma: no cover
    main()
