from __future__ import annotations

from typing import List

import pytest

from boardsearch.engine.board import BoardState, Side
from boardsearch.engine.move import Move
from boardsearch.engine.movegen import (
    NeighborhoodMoveGenerator,
    SideToMoveGenerator,
    make_generator,
)


def _moves_from(moves: List[Move], file: int, rank: int) -> List[Move]:
    return [m for m in moves if m.origin == (file, rank)]


@pytest.mark.parametrize(
    "square, expected",
    [
        ((0, 0), 3),  # a8 corner
        ((7, 7), 3),  # h1 corner
        ((3, 0), 5),  # d8 top edge
        ((0, 1), 5),  # a7 left edge
        ((3, 1), 8),  # d7 interior
        ((5, 6), 8),  # f2 interior
    ],
)
def test_neighborhood_counts(square, expected: int) -> None:
    moves = NeighborhoodMoveGenerator().generate(BoardState.startpos())
    from_sq = _moves_from(moves, *square)
    assert len(from_sq) == expected
    for m in from_sq:
        assert max(abs(m.to_file - m.from_file), abs(m.to_rank - m.from_rank)) == 1
        assert 0 <= m.to_file < 8 and 0 <= m.to_rank < 8


def test_startpos_total_and_order() -> None:
    moves = NeighborhoodMoveGenerator().generate(BoardState.startpos())
    assert len(moves) == 188
    assert moves[:3] == [Move(0, 0, 1, 0), Move(0, 0, 0, 1), Move(0, 0, 1, 1)]
    # Only occupied origins
    assert all(m.from_rank in (0, 1, 6, 7) for m in moves)


def test_neighborhood_ignores_side_and_occupancy() -> None:
    b = BoardState.startpos()
    gen = NeighborhoodMoveGenerator()
    assert gen.generate(b, Side.FIRST) == gen.generate(b, Side.SECOND) == gen.generate(b)
    assert Move(0, 0, 1, 0) in gen.generate(b)  # rook onto its own knight


def test_empty_board_has_no_moves() -> None:
    assert NeighborhoodMoveGenerator().generate(BoardState.empty()) == []


def test_side_filter_from_startpos() -> None:
    b = BoardState.startpos()
    gen = SideToMoveGenerator()
    first = gen.generate(b, Side.FIRST)
    # Back rank is boxed in; each pawn may step into rank 3
    assert len(first) == 22
    assert all(b.piece_at(m.from_file, m.from_rank).isupper() for m in first)
    assert all(m.to_rank == 5 for m in first)
    second = gen.generate(b, Side.SECOND)
    assert len(second) == 22
    assert all(m.to_rank == 2 for m in second)


def test_side_filter_allows_captures() -> None:
    b = BoardState.from_layout(
        "......../......../......../......../...Qr.../......../......../........"
    )
    moves = SideToMoveGenerator().generate(b, Side.FIRST)
    assert Move(3, 4, 4, 4) in moves
    assert len(moves) == 8


def test_side_filter_without_side_passes_through() -> None:
    b = BoardState.startpos()
    assert SideToMoveGenerator().generate(b) == NeighborhoodMoveGenerator().generate(b)


def test_make_generator() -> None:
    assert isinstance(make_generator("neighborhood"), NeighborhoodMoveGenerator)
    assert isinstance(make_generator("side"), SideToMoveGenerator)
    with pytest.raises(ValueError):
        make_generator("legal")
