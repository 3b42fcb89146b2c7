"""Rich consoles for vendorctl output.

Everything renders into an in-memory buffer; callers decide which stream
the text goes to.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

VENDOR_THEME = Theme(
    {
        "vendor.ok": "bold green",
        "vendor.error": "bold red",
        "vendor.warning": "bold yellow",
        "vendor.op": "bold cyan",
        "vendor.key": "dim",
        "vendor.id": "bold blue",
        "vendor.count": "magenta",
        "vendor.header": "bold",
    }
)

DEFAULT_WIDTH = 120


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Buffered console using the vendor theme."""
    return Console(
        file=StringIO(),
        theme=VENDOR_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def status_text(ok: bool, op: str) -> Text:
    """``OK  op`` / ``ERROR  op`` headline, styled by outcome."""
    label = "OK" if ok else "ERROR"
    text = Text(label, style="vendor.ok" if ok else "vendor.error")
    text.append(f"  {op}", style="vendor.op")
    return text
