from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Optional, TypeVar

import typer
from pydantic import ValidationError

from models.display import DisplayConfig
from services.geometry import round_half_away

DEFAULT_SCREEN_HEIGHT = 24
DEFAULT_BAR_WIDTH = 3
DEFAULT_SPACE_BETWEEN_BARS = 3
DEFAULT_VOLTS_MIN = 8.0
DEFAULT_VOLTS_MAX = 15.0
DEFAULT_MAX_LINE_LENGTH = 512
DEFAULT_FRAME_INTERVAL_MS = 0

_SCREEN_HEIGHT_ENV = "BATTMON_SCREEN_HEIGHT"
_BAR_WIDTH_ENV = "BATTMON_BAR_WIDTH"
_SPACE_BETWEEN_BARS_ENV = "BATTMON_SPACE_BETWEEN_BARS"
_VOLTS_MIN_ENV = "BATTMON_VOLTS_MIN"
_VOLTS_MAX_ENV = "BATTMON_VOLTS_MAX"
_MAX_LINE_LENGTH_ENV = "BATTMON_MAX_LINE_LENGTH"
_FRAME_INTERVAL_ENV = "BATTMON_FRAME_INTERVAL_MS"
_OUTPUT_FILE_ENV = "BATTMON_OUTPUT_FILE"

T = TypeVar("T", int, float)


def _read_number(name: str, parse: Callable[[str], T], default: T) -> T:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        return parse(candidate)
    except ValueError:
        return default


def _read_path(name: str) -> Optional[Path]:
    value = os.getenv(name)
    if value is None:
        return None
    candidate = value.strip()
    return Path(candidate) if candidate else None


def volts_to_tenths(volts: float) -> int:
    return round_half_away(volts * 10)


def load_config(
    screen_height: Optional[int] = None,
    bar_width: Optional[int] = None,
    space_between_bars: Optional[int] = None,
    volts_min: Optional[float] = None,
    volts_max: Optional[float] = None,
    max_line_length: Optional[int] = None,
    frame_interval_ms: Optional[int] = None,
    output_file: Optional[Path] = None,
) -> DisplayConfig:
    """Resolve overrides, then environment, then defaults into a display config."""
    if screen_height is None:
        screen_height = _read_number(_SCREEN_HEIGHT_ENV, int, DEFAULT_SCREEN_HEIGHT)
    if bar_width is None:
        bar_width = _read_number(_BAR_WIDTH_ENV, int, DEFAULT_BAR_WIDTH)
    if space_between_bars is None:
        space_between_bars = _read_number(_SPACE_BETWEEN_BARS_ENV, int, DEFAULT_SPACE_BETWEEN_BARS)
    if volts_min is None:
        volts_min = _read_number(_VOLTS_MIN_ENV, float, DEFAULT_VOLTS_MIN)
    if volts_max is None:
        volts_max = _read_number(_VOLTS_MAX_ENV, float, DEFAULT_VOLTS_MAX)
    if max_line_length is None:
        max_line_length = _read_number(_MAX_LINE_LENGTH_ENV, int, DEFAULT_MAX_LINE_LENGTH)
    if frame_interval_ms is None:
        frame_interval_ms = _read_number(_FRAME_INTERVAL_ENV, int, DEFAULT_FRAME_INTERVAL_MS)
    if output_file is None:
        output_file = _read_path(_OUTPUT_FILE_ENV)

    try:
        return DisplayConfig(
            screen_height=screen_height,
            bar_width=bar_width,
            space_between_bars=space_between_bars,
            volts_min=volts_to_tenths(volts_min),
            volts_max=volts_to_tenths(volts_max),
            max_line_length=max_line_length,
            frame_interval_micros=1000 * frame_interval_ms,
            output_path=output_file,
        )
    except ValidationError as exc:
        problems = "; ".join(error["msg"] for error in exc.errors())
        raise typer.BadParameter(f"Invalid display settings: {problems}") from exc
