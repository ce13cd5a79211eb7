"""Rich Console factory and theme for accountdesk output.

Consoles render to a StringIO buffer so formatting stays a pure
``format_result() -> str``. In non-TTY environments (tests, pipes)
Rich drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DESK_THEME = Theme(
    {
        "desk.ok": "bold green",
        "desk.error": "bold red",
        "desk.op": "bold cyan",
        "desk.key": "dim",
        "desk.route": "bold blue",
        "toast.success": "green",
        "toast.error": "red",
        "toast.warning": "yellow",
        "toast.info": "blue",
    }
)

TOAST_ICONS: dict[str, str] = {
    "success": "✔",
    "error": "✖",
    "warning": "!",
    "info": "i",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=DESK_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 100,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_severity(severity: str) -> str:
    return f"toast.{severity}" if severity in TOAST_ICONS else ""
