"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple


class ZoneState(str, Enum):
    """Tokenizer position relative to the battery-data zone of one line."""

    outside = "outside"
    inside = "inside"


@dataclass(frozen=True, slots=True)
class Frame:
    """Voltage readings (tenths-volt) parsed from one accepted input line."""

    readings: Tuple[int, ...] = ()

    def __len__(self) -> int:
        return len(self.readings)

    def __iter__(self) -> Iterator[int]:
        return iter(self.readings)

    def __getitem__(self, index: int) -> int:
        return self.readings[index]

    @property
    def battery_count(self) -> int:
        return len(self.readings)
