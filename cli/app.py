from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from cli.config import load_config
from cli.render import render_fatal, render_readings, render_summary
from cli.terminal import Interrupted, TerminalSession, interrupt_handler
from logging_config import configure_logging
from services.errors import MonitorError
from services.geometry import BarGeometry
from services.renderer import FrameRenderer
from services.sanitizer import sanitize
from services.tail import TailLoop
from services.tokenizer import extract_voltages
from storage.passthrough_log import PassThroughLog


@dataclass
class CLIState:
    log_level: Optional[str]


app = typer.Typer(
    help="Live terminal bar chart of battery voltages read from a data file.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _screen_height_option() -> Optional[int]:
    return typer.Option(None, "--screen-height", help="Screen height, in lines.")


def _volts_min_option() -> Optional[float]:
    return typer.Option(None, "--volts-min", help="Lowest voltage shown, in volts.")


def _volts_max_option() -> Optional[float]:
    return typer.Option(None, "--volts-max", help="Highest voltage shown, in volts.")


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Diagnostics log level (defaults to LOG_LEVEL env or WARNING).",
    ),
) -> None:
    """Entry point for the CLI."""
    ctx.obj = CLIState(log_level=log_level.upper() if log_level else None)


@app.command("watch")
def watch_command(
    ctx: typer.Context,
    source: Path = typer.Argument(..., dir_okay=False, help="Data file to display."),
    screen_height: Optional[int] = _screen_height_option(),
    bar_width: Optional[int] = typer.Option(
        None, "--bar-width", help="Voltage bar width, in columns."
    ),
    space_between_bars: Optional[int] = typer.Option(
        None, "--space-between-bars", help="Space between voltage bars, in columns."
    ),
    volts_min: Optional[float] = _volts_min_option(),
    volts_max: Optional[float] = _volts_max_option(),
    max_line_length: Optional[int] = typer.Option(
        None, "--max-line-length", help="Max length of a line read from the data file, in bytes."
    ),
    frame_interval: Optional[int] = typer.Option(
        None, "--frame-interval", help="Pause after each frame, in milliseconds."
    ),
    output_file: Optional[Path] = typer.Option(
        None,
        "--output-file",
        dir_okay=False,
        help=(
            "Append accepted input lines to this file. With --follow the whole "
            "source is appended again on every pass."
        ),
    ),
    follow: bool = typer.Option(
        True,
        "--follow/--no-follow",
        help="Reopen the data file at its end to pick up new lines.",
    ),
) -> None:
    """Draw battery voltages from SOURCE, one frame per valid line."""
    state = _get_state(ctx)
    config = load_config(
        screen_height=screen_height,
        bar_width=bar_width,
        space_between_bars=space_between_bars,
        volts_min=volts_min,
        volts_max=volts_max,
        max_line_length=max_line_length,
        frame_interval_ms=frame_interval,
        output_file=output_file,
    )
    configure_logging(state.log_level)

    try:
        with ExitStack() as stack:
            stack.enter_context(interrupt_handler())
            passthrough = (
                stack.enter_context(PassThroughLog(config.output_path))
                if config.output_path is not None
                else None
            )
            session = stack.enter_context(TerminalSession())
            renderer = FrameRenderer(session.screen, BarGeometry(config), session.palette)
            renderer.draw_static_panel()
            loop = TailLoop(source, config, renderer, passthrough=passthrough, follow=follow)
            summary = loop.run()
            if not follow:
                session.wait_for_key()
    except Interrupted as exc:
        typer.echo(str(exc))
        return
    except MonitorError as exc:
        render_fatal(exc)
        raise typer.Exit(code=1)

    render_summary(summary)


@app.command("parse")
def parse_command(
    line: str = typer.Argument(..., help="One record, e.g. 'ID7,B,121,119,H,0'."),
    screen_height: Optional[int] = _screen_height_option(),
    volts_min: Optional[float] = _volts_min_option(),
    volts_max: Optional[float] = _volts_max_option(),
) -> None:
    """Show the readings and bar heights a single record would produce."""
    config = load_config(screen_height=screen_height, volts_min=volts_min, volts_max=volts_max)
    clean, ok = sanitize(line)
    if not ok:
        typer.secho(
            "Line is empty or contains characters outside [0-9A-Z,].",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)
    render_readings(extract_voltages(clean), config)
