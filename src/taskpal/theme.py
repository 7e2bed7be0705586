"""Theming for taskpal console output."""

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

from . import __version__


# City Lights palette
CITY_LIGHTS_COLORS = {
    'surface_light': '#41505E',
    'primary': '#68D5F3',
    'accent': '#B7C5D3',
    'success': '#8BD649',
    'warning': '#FFD93D',
    'error': '#F78C6C',
    'text_primary': '#B7C5D3',
    'text_muted': '#4F5B66',
    'text_bright': '#FFFFFF',
}

TASKPAL_THEME = Theme({
    'default': f"{CITY_LIGHTS_COLORS['text_primary']}",
    'muted': f"{CITY_LIGHTS_COLORS['text_muted']}",
    'success': f"{CITY_LIGHTS_COLORS['success']} bold",
    'warning': f"{CITY_LIGHTS_COLORS['warning']} bold",
    'error': f"{CITY_LIGHTS_COLORS['error']} bold",
    'primary': f"{CITY_LIGHTS_COLORS['primary']} bold",
    'accent': f"{CITY_LIGHTS_COLORS['accent']}",
    'header': f"{CITY_LIGHTS_COLORS['text_bright']} bold",
    'task_pending': f"{CITY_LIGHTS_COLORS['primary']}",
    'task_done': f"{CITY_LIGHTS_COLORS['success']}",
    'border': f"{CITY_LIGHTS_COLORS['surface_light']}",
})

BANNER = """
 _            _                _
| |_ __ _ ___| | ___ __   __ _| |
| __/ _` / __| |/ / '_ \\ / _` | |
| || (_| \\__ \\   <| |_) | (_| | |
 \\__\\__,_|___/_|\\_\\ .__/ \\__,_|_|
                  |_|
"""


def get_themed_console(no_color: bool = False) -> Console:
    """Get a console instance with the taskpal theme applied."""
    return Console(theme=TASKPAL_THEME, no_color=no_color, highlight=False)


def show_startup_banner(console: Console) -> None:
    """Display the startup banner."""
    title_text = Text(BANNER, style="primary")
    banner_panel = Panel(
        Align.center(title_text),
        title="[header]Welcome to[/header]",
        subtitle=f"[muted]v{__version__}  -  type 'help' for commands[/muted]",
        border_style="border",
        padding=(0, 2),
    )
    console.print(banner_panel)
