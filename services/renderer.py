"""Curses drawing of the static axis panel and per-frame battery bars."""

from __future__ import annotations

import curses
import logging
from dataclasses import dataclass
from typing import Any

from models.display import LEFT_OFFSET
from models.records import Frame
from services.geometry import BarGeometry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Palette:
    """Curses attributes for the two styled regions of the panel."""

    label: int = 0
    fill: int = 0


class FrameRenderer:
    """Draws frames onto a curses window (or anything with the same methods)."""

    def __init__(self, screen: Any, geometry: BarGeometry, palette: Palette | None = None) -> None:
        self.screen = screen
        self.geometry = geometry
        self.palette = palette or Palette()

    def draw_static_panel(self) -> None:
        """Draw the voltage axis and captions, which never change for a config."""
        geometry = self.geometry
        caption = self.palette.label | curses.A_BOLD
        self._put(0, LEFT_OFFSET - 6, "Volts:", caption)
        for level in range(0, geometry.config.levels + 1, 2):
            self._put(
                geometry.vertical_cell(level),
                LEFT_OFFSET - 6,
                f"{geometry.level_voltage(level):5.2f}",
                self.palette.label,
            )
        self._put(geometry.label_row, 1, "Battery:", caption)
        self._park_cursor()
        self.screen.refresh()

    def render(self, frame: Frame) -> None:
        self._draw_index_labels(frame.battery_count)
        self._draw_bars(frame)
        self._park_cursor()
        self.screen.refresh()

    def _draw_index_labels(self, battery_count: int) -> None:
        row = self.geometry.label_row
        for index in range(battery_count):
            self._put(row, self.geometry.horizontal_cell(index, 0), f"{index + 1:2d}", self.palette.label)

    def _draw_bars(self, frame: Frame) -> None:
        geometry = self.geometry
        levels = geometry.config.levels
        blank = " " * geometry.config.bar_width
        fill = self.palette.fill | curses.A_REVERSE
        for index, voltage in enumerate(frame):
            current = geometry.filled_levels(voltage)
            column = geometry.horizontal_cell(index, 0)
            for level in range(current):
                self._put(geometry.vertical_cell(level), column, blank, fill)
            # no back buffer: cells above the bar may hold an older, taller reading
            for level in range(current, levels + 1):
                self._put(geometry.vertical_cell(level), column, blank, curses.A_NORMAL)

    def _park_cursor(self) -> None:
        try:
            self.screen.move(self.geometry.status_row, 0)
        except curses.error:
            logger.debug("status line is off screen", extra={"reason": "move"})

    def _put(self, row: int, column: int, text: str, attr: int) -> None:
        try:
            self.screen.addstr(row, column, text, attr)
        except curses.error:
            # Writing the bottom-right cell, or past a small terminal's edge.
            logger.debug(
                "cell outside terminal at %s,%s", row, column, extra={"reason": "addstr"}
            )
