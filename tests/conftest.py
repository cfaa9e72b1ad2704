from __future__ import annotations

from typing import Dict, List, Tuple

import pytest

from models.display import DisplayConfig


class FakeScreen:
    """Records what would be written to a curses window."""

    def __init__(self) -> None:
        self.cells: Dict[Tuple[int, int], Tuple[str, int]] = {}
        self.writes: List[Tuple[int, int, str, int]] = []
        self.cursor: Tuple[int, int] | None = None
        self.refresh_count = 0
        self.keys_read = 0

    def addstr(self, row: int, column: int, text: str, attr: int = 0) -> None:
        self.writes.append((row, column, text, attr))
        for offset, char in enumerate(text):
            self.cells[(row, column + offset)] = (char, attr)

    def move(self, row: int, column: int) -> None:
        self.cursor = (row, column)

    def refresh(self) -> None:
        self.refresh_count += 1

    def getch(self) -> int:
        self.keys_read += 1
        return ord("q")

    def text_at(self, row: int, column: int, length: int) -> str:
        return "".join(self.cells.get((row, column + i), (" ", 0))[0] for i in range(length))

    def attr_at(self, row: int, column: int) -> int:
        return self.cells[(row, column)][1]


@pytest.fixture()
def screen() -> FakeScreen:
    return FakeScreen()


@pytest.fixture()
def config() -> DisplayConfig:
    return DisplayConfig()
