"""Resolved display configuration for the battery panel."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

BOTTOM_OFFSET = 3
LEFT_OFFSET = 10


class DisplayConfig(BaseModel):
    """Immutable geometry, voltage range and pacing for one monitor session.

    Voltages are stored in tenths of a volt, the frame interval in
    microseconds.
    """

    model_config = ConfigDict(frozen=True)

    screen_height: int = Field(default=24, description="Screen height, in lines.")
    bar_width: int = Field(default=3, ge=1)
    space_between_bars: int = Field(default=3, ge=0)
    volts_min: int = Field(default=80, ge=0)
    volts_max: int = Field(default=150, ge=0)
    max_line_length: int = Field(
        default=512, ge=2, description="Read buffer size; lines are cut at one less."
    )
    frame_interval_micros: int = Field(default=0, ge=0)
    output_path: Optional[Path] = None

    @model_validator(mode="after")
    def _check_ranges(self) -> "DisplayConfig":
        if self.volts_max <= self.volts_min:
            raise ValueError(
                f"volts_max ({self.volts_max}) must be greater than volts_min ({self.volts_min})"
            )
        if self.screen_height - 1 - BOTTOM_OFFSET <= 0:
            raise ValueError(
                f"screen_height {self.screen_height} leaves no room for bars; "
                f"use at least {BOTTOM_OFFSET + 2}"
            )
        return self

    @property
    def levels(self) -> int:
        """Number of vertical levels above the bottom one."""
        return self.screen_height - 1 - BOTTOM_OFFSET

    @property
    def volts_step(self) -> float:
        return (self.volts_max - self.volts_min) / self.levels

    @property
    def frame_interval_seconds(self) -> float:
        return self.frame_interval_micros / 1_000_000
