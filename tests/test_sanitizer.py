from __future__ import annotations

import pytest

from services.sanitizer import sanitize


def test_strips_all_whitespace_kinds() -> None:
    assert sanitize(" ID1, B,\t120 ,H\r\n") == ("ID1,B,120,H", True)


def test_keeps_valid_line_unchanged() -> None:
    assert sanitize("X7,B,100,101,H,0") == ("X7,B,100,101,H,0", True)


@pytest.mark.parametrize("raw", ["", "\n", " \t\r\n ", "\r\n"])
def test_empty_after_stripping_is_rejected(raw: str) -> None:
    clean, ok = sanitize(raw)
    assert clean == ""
    assert ok is False


@pytest.mark.parametrize(
    "raw",
    [
        "B,120,h",
        "B,12.0,H",
        "B,-120,H",
        "B;120;H",
        "B,120,H\x00",
        "B,120,H\x1b[0m",
        "B,1é20,H",
        "b,120,H\n",
    ],
)
def test_characters_outside_alphabet_are_rejected(raw: str) -> None:
    _, ok = sanitize(raw)
    assert ok is False


def test_case_is_not_normalized() -> None:
    clean, ok = sanitize("ABC,B,1,H")
    assert ok is True
    assert clean == "ABC,B,1,H"
