from __future__ import annotations

from typing import Any, Iterable

import typer

from models.display import DisplayConfig
from services.errors import MonitorError
from services.geometry import BarGeometry
from services.tail import TailSummary


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_readings(readings: list[int], config: DisplayConfig) -> None:
    geometry = BarGeometry(config)
    echo_heading("Readings")
    if not readings:
        typer.echo("No battery zone found.")
        return
    for index, voltage in enumerate(readings, start=1):
        clamped = geometry.clamp(voltage)
        note = "" if clamped == voltage else f" (clamped to {clamped / 10:.1f} V)"
        typer.echo(
            f"  - battery {index:2d}: {voltage / 10:5.1f} V, "
            f"{geometry.filled_levels(voltage)}/{config.levels + 1} levels{note}"
        )


def render_summary(summary: TailSummary) -> None:
    echo_heading("Session")
    echo_key_values(
        [
            ("frames_rendered", summary.frames_rendered),
            ("lines_skipped", summary.lines_skipped),
            ("cycles", summary.cycles),
        ]
    )


def render_fatal(error: MonitorError) -> None:
    typer.secho(str(error), fg=typer.colors.RED, err=True)
