from __future__ import annotations

import pytest

from boardsearch.engine.board import BoardState, Side
from boardsearch.engine.movegen import SideToMoveGenerator
from boardsearch.engine.perft import perft


def test_perft_startpos_depth_0_1() -> None:
    b = BoardState.startpos()
    assert perft(b, 0) == 1
    assert perft(b, 1) == 188


def test_perft_single_piece() -> None:
    # Lone king in the corner: 3 moves, then 3 or 5 or 8 from each landing square
    b = BoardState.from_layout(
        "K......./......../......../......../......../......../......../........"
    )
    assert perft(b, 1) == 3
    assert perft(b, 2) == 5 + 5 + 8


def test_perft_restores_board() -> None:
    b = BoardState.startpos()
    perft(b, 2)
    assert b == BoardState.startpos()


def test_perft_side_filter_alternates() -> None:
    b = BoardState.startpos()
    assert perft(b, 1, SideToMoveGenerator(), Side.FIRST) == 22
    assert perft(b, 2, SideToMoveGenerator(), Side.FIRST) == 22 * 22


def test_perft_negative_depth_raises() -> None:
    with pytest.raises(ValueError):
        perft(BoardState.startpos(), -1)
