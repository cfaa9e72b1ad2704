"""Zone-scanning extraction of voltage readings from a sanitized line."""

from __future__ import annotations

import re
from typing import List

from models.records import Frame, ZoneState

ZONE_OPEN = "B"
ZONE_CLOSE = "H"

_LEADING_DIGITS = re.compile(r"\d+")


def parse_reading(token: str) -> int:
    """Parse the leading decimal digits of ``token``; 0 when there are none."""
    match = _LEADING_DIGITS.match(token)
    if match is None:
        return 0
    return int(match.group())


def extract_voltages(clean: str) -> List[int]:
    """Collect the readings found between ``B`` and ``H`` markers.

    For every token the close marker is checked first, then the token is
    captured if a zone is open, then the open marker is checked. Neither
    marker is ever captured, a repeated ``B`` inside an open zone included,
    and capture starts with the token after ``B``.
    Empty tokens are skipped.
    """
    state = ZoneState.outside
    voltages: List[int] = []
    for token in clean.split(","):
        if not token:
            continue
        if token == ZONE_CLOSE:
            state = ZoneState.outside
        if state is ZoneState.inside and token != ZONE_OPEN:
            voltages.append(parse_reading(token))
        if token == ZONE_OPEN:
            state = ZoneState.inside
    return voltages


def read_frame(clean: str) -> Frame:
    return Frame(readings=tuple(extract_voltages(clean)))
