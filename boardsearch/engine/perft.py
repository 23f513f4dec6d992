from __future__ import annotations

from typing import Optional

from .board import BoardState, Side
from .movegen import MoveGenerator, NeighborhoodMoveGenerator


def perft(
    board: BoardState,
    depth: int,
    generator: Optional[MoveGenerator] = None,
    side: Optional[Side] = None,
) -> int:
    """Count leaf nodes of the candidate-move tree of ``board`` at ``depth``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all candidate children's perft(depth-1).

    Moves are applied in place and undone on the way back up, so ``board``
    is unchanged afterwards. ``side`` alternates every ply when given.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1
    gen = generator or NeighborhoodMoveGenerator()

    nodes = 0
    next_side = side.opponent if side is not None else None
    for m in gen.generate(board, side):
        with board.applied(m):
            nodes += perft(board, depth - 1, gen, next_side)
    return nodes
