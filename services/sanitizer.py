"""Whitespace stripping and alphabet checks for raw data lines."""

from __future__ import annotations

import string
from typing import Tuple

WHITESPACE = frozenset(" \t\r\n")
ALLOWED_CHARS = frozenset(string.digits + string.ascii_uppercase + ",")


def sanitize(raw: str) -> Tuple[str, bool]:
    """Strip whitespace from ``raw`` and report whether the rest is a usable record.

    A line is usable when something is left after stripping and every
    remaining character is a digit, an upper-case ASCII letter or a comma.
    """
    clean = "".join(char for char in raw if char not in WHITESPACE)
    if not clean:
        return clean, False
    return clean, all(char in ALLOWED_CHARS for char in clean)
