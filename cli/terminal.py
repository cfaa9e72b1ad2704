"""Curses session lifecycle and interrupt handling for the dashboard."""

from __future__ import annotations

import curses
import logging
import signal
from contextlib import contextmanager
from types import FrameType, TracebackType
from typing import Any, Iterator, Optional, Type

from services.renderer import Palette

logger = logging.getLogger(__name__)

_LABEL_PAIR = 1
_FILL_PAIR = 2


class Interrupted(Exception):
    """Raised from the signal handler so teardown runs on the normal unwind path."""

    def __init__(self, signum: int) -> None:
        super().__init__(f"Got signal {signum}")
        self.signum = signum


@contextmanager
def interrupt_handler(signum: int = signal.SIGINT) -> Iterator[None]:
    def _raise_interrupted(received: int, _frame: Optional[FrameType]) -> None:
        logger.info("interrupt received", extra={"signal": received})
        raise Interrupted(received)

    previous = signal.signal(signum, _raise_interrupted)
    try:
        yield
    finally:
        signal.signal(signum, previous)


class TerminalSession:
    """Owns the curses screen between ``__enter__`` and ``close``."""

    def __init__(self) -> None:
        self.screen: Any = None
        self.palette = Palette()

    def open(self) -> Any:
        self.screen = curses.initscr()
        self.screen.keypad(True)
        curses.nonl()
        curses.cbreak()
        curses.noecho()
        if curses.has_colors():
            curses.start_color()
            curses.init_pair(_LABEL_PAIR, curses.COLOR_CYAN, curses.COLOR_BLACK)
            curses.init_pair(_FILL_PAIR, curses.COLOR_WHITE, curses.COLOR_BLACK)
            self.palette = Palette(
                label=curses.color_pair(_LABEL_PAIR),
                fill=curses.color_pair(_FILL_PAIR),
            )
        return self.screen

    def wait_for_key(self) -> int:
        return self.screen.getch()

    def close(self) -> None:
        """Restore the terminal; safe to call more than once."""
        if self.screen is None:
            return
        self.screen = None
        curses.endwin()

    def __enter__(self) -> "TerminalSession":
        try:
            self.open()
        except BaseException:
            # an interrupt can land between initscr and the end of setup
            self.close()
            raise
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()
