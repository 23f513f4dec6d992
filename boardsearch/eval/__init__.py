"""Evaluation heuristics for the search floor.

Pure, deterministic, and side-effect free.
"""

from __future__ import annotations

from typing import Dict, Final, Protocol

from boardsearch.engine.board import BoardState, PieceKind, Side, kind_of, side_of


# Material values in centipawns
P_VAL: Final = 100
N_VAL: Final = 320
B_VAL: Final = 330
R_VAL: Final = 500
Q_VAL: Final = 900
K_VAL: Final = 20000

PIECE_VALUES: Final[Dict[PieceKind, int]] = {
    PieceKind.PAWN: P_VAL,
    PieceKind.KNIGHT: N_VAL,
    PieceKind.BISHOP: B_VAL,
    PieceKind.ROOK: R_VAL,
    PieceKind.QUEEN: Q_VAL,
    PieceKind.KING: K_VAL,
}


class Evaluator(Protocol):
    def evaluate(self, board: BoardState) -> int:
        ...


class ZeroEvaluator:
    """Scores every position as 0."""

    def evaluate(self, board: BoardState) -> int:
        return 0


class MaterialEvaluator:
    """Material balance in centipawns from ``perspective``'s point of view."""

    def __init__(self, perspective: Side = Side.FIRST) -> None:
        self.perspective = perspective

    def evaluate(self, board: BoardState) -> int:
        score = 0
        for _, _, cell in board.occupied():
            kind = kind_of(cell)
            if kind is None:
                continue
            value = PIECE_VALUES[kind]
            score += value if side_of(cell) is self.perspective else -value
        return score


def make_evaluator(name: str, perspective: Side = Side.FIRST) -> Evaluator:
    """Resolve an evaluator by its configuration name."""
    if name == "zero":
        return ZeroEvaluator()
    if name == "material":
        return MaterialEvaluator(perspective)
    raise ValueError(f"unknown evaluator: {name!r}")
