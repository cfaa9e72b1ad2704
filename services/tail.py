"""Reopen-on-EOF tailing loop that feeds parsed frames to a renderer."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Protocol, TextIO

from models.display import DisplayConfig
from models.records import Frame
from services.errors import SourceOpenError, SourceReadError
from services.sanitizer import sanitize
from services.tokenizer import read_frame
from storage.passthrough_log import PassThroughLog

logger = logging.getLogger(__name__)


class FrameSink(Protocol):
    def render(self, frame: Frame) -> None: ...


class TailState(str, Enum):
    opening = "opening"
    reading = "reading"
    end_of_file = "end_of_file"
    stopped = "stopped"


@dataclass
class TailSummary:
    """Counters for one run of the loop."""

    frames_rendered: int = 0
    lines_skipped: int = 0
    cycles: int = 0


class TailLoop:
    """Repeatedly reads ``source`` from the start, rendering one frame per valid line.

    With ``follow`` the source is reopened as soon as it is exhausted, so
    appended lines are picked up on the next pass. Without it the loop ends
    after the first pass.
    """

    def __init__(
        self,
        source: Path,
        config: DisplayConfig,
        renderer: FrameSink,
        passthrough: Optional[PassThroughLog] = None,
        follow: bool = True,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.source = source
        self.config = config
        self.renderer = renderer
        self.passthrough = passthrough
        self.follow = follow
        self._sleep = sleep
        self._stop_requested = False
        self.state = TailState.opening
        self.summary = TailSummary()

    def stop(self) -> None:
        """Ask the loop to return at the next line boundary."""
        self._stop_requested = True

    def run(self, max_cycles: Optional[int] = None) -> TailSummary:
        """Run until stopped, until ``max_cycles`` passes complete, or until a fatal error."""
        self._stop_requested = False
        self.summary = TailSummary()
        while not self._stop_requested:
            self.state = TailState.opening
            with self._open_source() as handle:
                self.state = TailState.reading
                self._read_all(handle)
            if self._stop_requested:
                break
            self.state = TailState.end_of_file
            self.summary.cycles += 1
            logger.debug(
                "end of file, reopening",
                extra={
                    "source_path": str(self.source),
                    "cycle": self.summary.cycles,
                    "frames_rendered": self.summary.frames_rendered,
                },
            )
            if not self.follow:
                break
            if max_cycles is not None and self.summary.cycles >= max_cycles:
                break
        self.state = TailState.stopped
        return self.summary

    def process_line(self, raw: str, line_number: Optional[int] = None) -> Optional[Frame]:
        """Sanitize, log, parse and render one raw line; ``None`` if it was skipped."""
        clean, ok = sanitize(raw)
        if not ok:
            self.summary.lines_skipped += 1
            logger.debug(
                "skipping line",
                extra={
                    "line_number": line_number,
                    "reason": "empty" if not clean else "characters outside [0-9A-Z,]",
                },
            )
            return None

        if self.passthrough is not None:
            self.passthrough.append(clean)

        frame = read_frame(clean)
        self.renderer.render(frame)
        self.summary.frames_rendered += 1

        if self.config.frame_interval_micros > 0:
            self._sleep(self.config.frame_interval_seconds)
        return frame

    def _open_source(self) -> TextIO:
        try:
            # latin-1 decodes any byte, leaving stray bytes for the sanitizer to reject
            return self.source.open("r", encoding="latin-1", newline="\n")
        except OSError as exc:
            logger.error(
                "cannot open data source",
                extra={"source_path": str(self.source), "reason": str(exc)},
            )
            raise SourceOpenError(self.source, "Failed to open file") from exc

    def _read_all(self, handle: TextIO) -> None:
        limit = self.config.max_line_length - 1
        line_number = 0
        while not self._stop_requested:
            try:
                raw = handle.readline(limit)
            except OSError as exc:
                logger.error(
                    "read failed before end of file",
                    extra={
                        "source_path": str(self.source),
                        "line_number": line_number + 1,
                        "reason": str(exc),
                    },
                )
                raise SourceReadError(self.source, "Failed to read file") from exc
            if raw == "":
                return
            line_number += 1
            self.process_line(raw, line_number=line_number)
