"""Status line renderer.

Progress messages overwrite each other on a single terminal line until the
first message that must stay visible (a result, a debug line, a fatal
error). From then on every message is appended on its own line. The switch
is one-way.

Example:
    renderer = StatusLineRenderer(debug=args.debug)
    renderer.info(renderer.tag("Scanning repo:"), " ", renderer.value(name))
    renderer.println(url)
"""

from __future__ import annotations

import sys
import threading
from enum import Enum, IntEnum
from typing import IO

from rich.console import Console
from rich.text import Text

# Move to a fresh line, step back up and erase it.
CLEAR_LINE = "\n\x1b[1A\x1b[K"

INFO_PREFIX = "[INFO]: "
DEBUG_PREFIX = "[DEBUG]: "
FATAL_PREFIX = "[FATAL]: "


class RenderMode(Enum):
    """Whether messages overwrite the current line or append new ones."""

    SINGLE_LINE = "single_line"
    MULTI_LINE = "multi_line"


class OnDisable(IntEnum):
    """What to do with the current line when leaving single line mode."""

    NONE = 0
    NEW_LINE = 1
    CLEAR_LINE = 2


def is_terminal(stream: IO[str]) -> bool:
    """Return True if ``stream`` is attached to a TTY."""
    return getattr(stream, "isatty", lambda: False)()


class StatusLineRenderer:
    """Writes progress to stderr and results to stdout.

    Owns its render mode and the lock that guards it; one instance is
    shared by every call site in a run.
    """

    def __init__(
        self,
        out: IO[str] | None = None,
        err: IO[str] | None = None,
        debug: bool = False,
    ):
        """Initialize the renderer.

        Args:
            out: Primary stream for results (default: sys.stdout)
            err: Diagnostic stream for progress and errors (default: sys.stderr)
            debug: Emit debug messages
        """
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.debug_enabled = debug

        self._lock = threading.Lock()
        self._mode = RenderMode.SINGLE_LINE

        # Piped or redirected stderr gets neither colour nor line erasure.
        self.color = is_terminal(self.err)
        self._out_console = self._console(self.out)
        self._err_console = self._console(self.err)
        if not self.color:
            self.disable_single_line_mode(OnDisable.NEW_LINE)

    # --------------------------------------------------------
    # Public API - Mode
    # --------------------------------------------------------

    @property
    def mode(self) -> RenderMode:
        return self._mode

    @property
    def single_line(self) -> bool:
        return self._mode is RenderMode.SINGLE_LINE

    def disable_single_line_mode(self, behavior: OnDisable = OnDisable.NONE) -> None:
        """Make every later message keep its own line.

        Does nothing if single line mode is already off.

        Args:
            behavior: Erase the current diagnostic line, or end it with a
                newline, on the way out
        """
        with self._lock:
            if self._mode is RenderMode.MULTI_LINE:
                return

            self._mode = RenderMode.MULTI_LINE
            if behavior == OnDisable.CLEAR_LINE:
                self._clear_line(self.err)
            elif behavior == OnDisable.NEW_LINE:
                self._write(self.err, "\n")

    # --------------------------------------------------------
    # Public API - Messages
    # --------------------------------------------------------

    def println(self, *parts: str | Text) -> None:
        """Write a result line to stdout. Always leaves single line mode."""
        self.disable_single_line_mode(OnDisable.CLEAR_LINE)
        self._println(self._out_console, "", *parts)

    def info(self, *parts: str | Text) -> None:
        """Write progress to stderr. In single line mode it replaces the last message."""
        self._println(self._err_console, INFO_PREFIX, *parts)

    def debug(self, *parts: str | Text) -> None:
        """Write a debug line to stderr, if debug output is on.

        Debug messages are only useful when all of them stay visible, so
        this always leaves single line mode.
        """
        if not self.debug_enabled:
            return

        self.disable_single_line_mode(OnDisable.NEW_LINE)
        self._println(self._err_console, DEBUG_PREFIX, *parts)

    def fatal(self, *parts: str | Text, code: int = 1) -> None:
        """Write an error to stderr and exit.

        Leaves single line mode first so the progress line that preceded
        the failure stays on screen.

        Raises:
            SystemExit: Always, with ``code``
        """
        self.disable_single_line_mode(OnDisable.NEW_LINE)
        self._println(self._err_console, FATAL_PREFIX, *parts)
        sys.exit(code)

    # --------------------------------------------------------
    # Public API - Styling
    # --------------------------------------------------------

    @staticmethod
    def tag(text: str) -> Text:
        return Text(text, style="cyan")

    @staticmethod
    def value(text: str) -> Text:
        return Text(text, style="yellow")

    # --------------------------------------------------------
    # Private Methods
    # --------------------------------------------------------

    def _console(self, stream: IO[str]) -> Console:
        return Console(
            file=stream,
            color_system="auto" if self.color else None,
            force_terminal=self.color and is_terminal(stream),
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )

    def _println(self, console: Console, prefix: str, *parts: str | Text) -> None:
        message = Text.assemble(prefix, *(p if isinstance(p, Text) else str(p) for p in parts))
        with self._lock:
            single_line = self._mode is RenderMode.SINGLE_LINE
            if single_line:
                self._clear_line(console.file)
            console.print(message, end="" if single_line else "\n")

    def _clear_line(self, stream: IO[str]) -> None:
        if not is_terminal(stream):
            return
        self._write(stream, CLEAR_LINE)

    @staticmethod
    def _write(stream: IO[str], text: str) -> None:
        stream.write(text)
        stream.flush()
