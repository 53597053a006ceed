"""Terminal output abstraction: palette, styled writes and line redraw."""

from __future__ import annotations

import ctypes
import sys
from dataclasses import dataclass
from typing import Any, TextIO

from rich.console import Console
from rich.theme import Theme

from create_kapp.errors import TerminalInitError

# Cursor to start of previous line, then clear to end of line.
ERASE_LINE = "\033[F\033[K"

_STD_OUTPUT_HANDLE = -11
_ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004


@dataclass(frozen=True)
class PaletteTheme:
    """
    The five display styles used for every line create-kapp prints.

    Values are rich style definitions; they are exposed to markup under the
    attribute names, e.g. ``[error]× failed[/]``.
    """

    info: str = "bright_cyan"
    success: str = "bright_green"
    error: str = "bright_red"
    primary: str = "bright_white"
    muted: str = "bold bright_black"

    def as_rich_theme(self) -> Theme:
        return Theme(
            {
                "info": self.info,
                "success": self.success,
                "error": self.error,
                "primary": self.primary,
                "muted": self.muted,
            }
        )


DEFAULT_PALETTE = PaletteTheme()


def initialize(kernel32: Any = None) -> None:
    """Enable ANSI escape interpretation on Windows consoles.

    Does nothing on other platforms, or when stdout is redirected and there is
    no console to configure.

    Raises:
        TerminalInitError: The console refused virtual terminal processing.
    """
    if kernel32 is None:
        if sys.platform != "win32":
            return
        kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]

    handle = kernel32.GetStdHandle(_STD_OUTPUT_HANDLE)
    mode = ctypes.c_uint32()
    if not kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
        return
    if not kernel32.SetConsoleMode(handle, mode.value | _ENABLE_VIRTUAL_TERMINAL_PROCESSING):
        raise TerminalInitError("Could not enable ANSI colour support on this console.")


class Terminal:
    """Line-oriented styled output plus blocking line input."""

    def __init__(
        self,
        palette: PaletteTheme = DEFAULT_PALETTE,
        *,
        file: TextIO | None = None,
        force_terminal: bool | None = None,
    ) -> None:
        self.palette = palette
        self.console = Console(
            file=file,
            theme=palette.as_rich_theme(),
            force_terminal=force_terminal,
            highlight=False,
        )

    def write(self, markup: str) -> None:
        """Print *markup* without a trailing newline."""
        self.console.print(markup, end="")

    def write_line(self, markup: str = "") -> None:
        self.console.print(markup)

    def read(self) -> str:
        return input()

    def erase_line(self) -> None:
        """Remove the line the cursor just left, i.e. the echoed input line."""
        self.console.file.write(ERASE_LINE)
        self.console.file.flush()
