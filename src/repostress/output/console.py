"""Rich Console factory and theme for repostress output.

Consoles render into a StringIO buffer so renderers keep a
``ServiceResult -> str`` contract. Off a TTY (tests, pipes) Rich drops
color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

REPOSTRESS_THEME = Theme(
    {
        "rs.ok": "bold green",
        "rs.error": "bold red",
        "rs.warning": "bold yellow",
        "rs.op": "bold cyan",
        "rs.key": "dim",
        "rs.path": "bold blue",
        "rs.type.gallery": "yellow",
        "rs.type.handle": "dim",
        "rs.type.asset": "green",
        "rs.type.resource": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=REPOSTRESS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_type(node_type: str) -> str:
    """Rich style name for a node type ("" when unstyled)."""
    style = f"rs.type.{node_type}"
    return style if style in REPOSTRESS_THEME.styles else ""
