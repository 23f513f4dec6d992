from __future__ import annotations

from typing import List, Optional, Protocol, Tuple

from .board import BoardState, Side, in_bounds, side_of
from .move import Move


# Scan order: dy outer, dx inner; origin excluded
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)
)


class MoveGenerator(Protocol):
    def generate(self, board: BoardState, side: Optional[Side] = None) -> List[Move]:
        ...


class NeighborhoodMoveGenerator:
    """Candidate moves to every in-bounds Chebyshev neighbour of a piece.

    Ignores ``side``, the piece kind and whatever sits on the destination.
    Produces 3 moves from a corner, 5 from an edge and 8 from the interior.
    """

    def generate(self, board: BoardState, side: Optional[Side] = None) -> List[Move]:
        moves: List[Move] = []
        for file, rank, _ in board.occupied():
            for dx, dy in NEIGHBOR_OFFSETS:
                nf, nr = file + dx, rank + dy
                if in_bounds(nf, nr):
                    moves.append(Move(file, rank, nf, nr))
        return moves


class SideToMoveGenerator:
    """Filter another generator down to ``side``'s own pieces.

    Drops moves that would land on a piece of the same side. With
    ``side=None`` the inner generator's moves pass through unchanged.
    """

    def __init__(self, inner: Optional[MoveGenerator] = None) -> None:
        self.inner: MoveGenerator = inner or NeighborhoodMoveGenerator()

    def generate(self, board: BoardState, side: Optional[Side] = None) -> List[Move]:
        moves = self.inner.generate(board, side)
        if side is None:
            return moves
        return [
            m
            for m in moves
            if side_of(board.piece_at(m.from_file, m.from_rank)) is side
            and side_of(board.piece_at(m.to_file, m.to_rank)) is not side
        ]


def make_generator(name: str) -> MoveGenerator:
    """Resolve a generator by its configuration name."""
    if name == "neighborhood":
        return NeighborhoodMoveGenerator()
    if name == "side":
        return SideToMoveGenerator()
    raise ValueError(f"unknown move generator: {name!r}")
