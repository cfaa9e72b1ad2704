from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType
from typing import Optional, TextIO, Type

from services.errors import OutputOpenError, OutputWriteError

logger = logging.getLogger(__name__)


class PassThroughLog:
    """Append-only copy of every accepted input line."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.lines_written = 0
        try:
            self._handle: Optional[TextIO] = path.open("a", encoding="ascii", newline="\n")
        except OSError as exc:
            logger.error("cannot open output file", extra={"output_path": str(path), "reason": str(exc)})
            raise OutputOpenError(path, "Failed to open file") from exc

    def append(self, line: str) -> None:
        if self._handle is None:
            raise OutputWriteError(self.path, "Output file is closed")
        try:
            self._handle.write(line)
            self._handle.write("\n")
            self._handle.flush()
        except (OSError, UnicodeEncodeError) as exc:
            logger.error("cannot write output file", extra={"output_path": str(self.path), "reason": str(exc)})
            raise OutputWriteError(self.path, "Failed to write to file") from exc
        self.lines_written += 1

    def close(self) -> None:
        if self._handle is None:
            return
        handle, self._handle = self._handle, None
        handle.close()

    def __enter__(self) -> "PassThroughLog":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()
