from __future__ import annotations

import pytest

from boardsearch.engine.move import (
    InvalidMoveFormat,
    Move,
    parse_move,
    square_to_str,
    str_to_square,
)


def test_parse_e2e4() -> None:
    mv = parse_move("e2e4")
    assert mv == Move(4, 6, 4, 4)
    assert mv.origin == (4, 6)
    assert mv.destination == (4, 4)


def test_format_round_trip() -> None:
    assert Move(4, 6, 4, 4).to_text() == "e2e4"
    assert parse_move("a8h1").to_text() == "a8h1"


def test_corner_squares() -> None:
    assert str_to_square("a8") == (0, 0)
    assert str_to_square("h1") == (7, 7)
    assert square_to_str(0, 0) == "a8"
    assert square_to_str(7, 7) == "h1"


@pytest.mark.parametrize(
    "text",
    [
        "",  # empty
        "e2e",  # too short
        "e2e4q",  # too long
        "i2e4",  # bad origin file
        "e0e4",  # rank below 1
        "e2e9",  # rank above 8
        "E2E4",  # uppercase file
        "e 2e",  # whitespace inside
    ],
)
def test_malformed_text_raises(text: str) -> None:
    with pytest.raises(InvalidMoveFormat):
        parse_move(text)


def test_invalid_move_format_is_value_error() -> None:
    with pytest.raises(ValueError):
        parse_move("zz")


def test_to_text_rejects_out_of_range() -> None:
    with pytest.raises(ValueError):
        Move(0, 0, 8, 0).to_text()
