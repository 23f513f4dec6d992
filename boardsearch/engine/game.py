from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .board import BoardState, Side
from .move import Move
from .movegen import MoveGenerator, NeighborhoodMoveGenerator


class IllegalMove(ValueError):
    """Raised when a move fails the board's legality gate."""


@dataclass
class Game:
    """Game wrapper around a board with helper operations.

    Responsibility: track board state and side to move, apply and undo moves.
    """

    board: BoardState
    side_to_move: Side = Side.FIRST
    # (move, captured cell) records for undo
    history: List[Tuple[Move, str]] = field(default_factory=list)

    @classmethod
    def new(cls) -> "Game":
        return cls(board=BoardState.startpos())

    @classmethod
    def from_layout(cls, layout: str, side_to_move: Side = Side.FIRST) -> "Game":
        return cls(board=BoardState.from_layout(layout), side_to_move=side_to_move)

    def to_layout(self) -> str:
        return self.board.to_layout()

    def candidate_moves(self, generator: Optional[MoveGenerator] = None) -> List[Move]:
        gen = generator or NeighborhoodMoveGenerator()
        return gen.generate(self.board, self.side_to_move)

    def apply_move(self, move: Move) -> None:
        if not self.board.is_valid_move(move):
            raise IllegalMove("illegal move")
        captured = self.board.piece_at(move.to_file, move.to_rank)
        self.board.apply_move(move)
        self.history.append((move, captured))
        self.side_to_move = self.side_to_move.opponent

    def undo_move(self) -> None:
        if not self.history:
            raise ValueError("no moves to undo")
        move, captured = self.history.pop()
        self.board.undo_move(move, captured)
        self.side_to_move = self.side_to_move.opponent

    def last_move(self) -> Optional[Move]:
        return self.history[-1][0] if self.history else None

    def move_history_text(self) -> List[str]:
        return [m.to_text() for m, _ in self.history]
