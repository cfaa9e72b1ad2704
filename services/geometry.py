"""Mapping of battery indices, levels and voltages onto screen cells."""

from __future__ import annotations

from models.display import BOTTOM_OFFSET, LEFT_OFFSET, DisplayConfig


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    half = 0.5 if value > 0 else -0.5
    return int(value + half)


class BarGeometry:
    """Pure coordinate and scale functions derived from a display config."""

    def __init__(self, config: DisplayConfig) -> None:
        self.config = config

    def vertical_cell(self, level_from_bottom: int) -> int:
        """Row of ``level_from_bottom``; negative levels address the label and status rows."""
        return self.config.screen_height - BOTTOM_OFFSET - level_from_bottom

    def horizontal_cell(self, bar_index: int, column_offset: int = 0) -> int:
        step = self.config.space_between_bars + self.config.bar_width
        return 1 + LEFT_OFFSET + step * bar_index + column_offset

    def clamp(self, voltage: int) -> int:
        return min(max(voltage, self.config.volts_min), self.config.volts_max)

    def filled_levels(self, voltage: int) -> int:
        clamped = self.clamp(voltage)
        return 1 + round_half_away((clamped - self.config.volts_min) / self.config.volts_step)

    def level_voltage(self, level: int) -> float:
        """Voltage in volts represented by ``level``, for axis labels."""
        return (self.config.volts_min + level * self.config.volts_step) / 10.0

    @property
    def status_row(self) -> int:
        return self.vertical_cell(-2)

    @property
    def label_row(self) -> int:
        return self.vertical_cell(-1)
