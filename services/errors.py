"""Fatal conditions raised while monitoring a data source."""

from __future__ import annotations

from pathlib import Path


class MonitorError(Exception):
    """Base class for errors that end a monitoring session."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class SourceOpenError(MonitorError):
    pass


class SourceReadError(MonitorError):
    """Reading failed for a reason other than reaching end of file."""


class OutputOpenError(MonitorError):
    pass


class OutputWriteError(MonitorError):
    pass
