from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .move import BOARD_SIZE, Move


STARTING_LAYOUT = (
    "rnbqkbnr/pppppppp/......../......../......../......../PPPPPPPP/RNBQKBNR"
)

EMPTY = "."
PIECE_KINDS = "KQRBNP"
VALID_CELLS = EMPTY + PIECE_KINDS + PIECE_KINDS.lower()


class Side(Enum):
    FIRST = "first"  # uppercase pieces
    SECOND = "second"  # lowercase pieces

    @property
    def opponent(self) -> "Side":
        return Side.SECOND if self is Side.FIRST else Side.FIRST


class PieceKind(Enum):
    KING = "K"
    QUEEN = "Q"
    ROOK = "R"
    BISHOP = "B"
    KNIGHT = "N"
    PAWN = "P"


def side_of(cell: str) -> Optional[Side]:
    if cell == EMPTY:
        return None
    return Side.FIRST if cell.isupper() else Side.SECOND


def kind_of(cell: str) -> Optional[PieceKind]:
    if cell == EMPTY:
        return None
    return PieceKind(cell.upper())


def in_bounds(file: int, rank: int) -> bool:
    return 0 <= file < BOARD_SIZE and 0 <= rank < BOARD_SIZE


@dataclass
class BoardState:
    """Mutable 8x8 grid of single-character cells.

    Notes:
    - ``grid[rank][file]``; rank 0 is rank 8, file 0 is file ``a``.
    - Apply/undo mutate in place. The captured cell is never stored here;
      callers keep it (or use ``applied``) and hand it back to ``undo_move``.
    """

    grid: List[List[str]]

    def __post_init__(self) -> None:
        if len(self.grid) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in self.grid):
            raise ValueError("board must be 8x8")
        # Own the rows so no two coordinates alias each other
        self.grid = [list(row) for row in self.grid]

    @classmethod
    def startpos(cls) -> "BoardState":
        """Create a board initialized to the starting layout."""
        return cls.from_layout(STARTING_LAYOUT)

    @classmethod
    def empty(cls) -> "BoardState":
        return cls([[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)])

    @classmethod
    def from_layout(cls, layout: str) -> "BoardState":
        """Create a board from eight ``/``-separated rows, rank 8 first.

        Args:
            layout (str): e.g. ``"rnbqkbnr/pppppppp/......../.../RNBQKBNR"``.

        Returns:
            BoardState: Board holding the given cells.

        Raises:
            ValueError: If the layout is empty, has the wrong number of rows or
                columns, or contains an unknown cell character.
        """
        if not layout or not isinstance(layout, str):
            raise ValueError("layout must be a non-empty string")
        rows = layout.strip().split("/")
        if len(rows) != BOARD_SIZE:
            raise ValueError("layout must have 8 rows")
        grid: List[List[str]] = []
        for row in rows:
            if len(row) != BOARD_SIZE:
                raise ValueError(f"layout row must have 8 cells: {row!r}")
            for ch in row:
                if ch not in VALID_CELLS:
                    raise ValueError(f"invalid cell in layout: {ch!r}")
            grid.append(list(row))
        return cls(grid)

    def to_layout(self) -> str:
        return "/".join("".join(row) for row in self.grid)

    def copy(self) -> "BoardState":
        return BoardState(self.grid)

    def piece_at(self, file: int, rank: int) -> str:
        return self.grid[rank][file]

    def occupied(self) -> Iterator[Tuple[int, int, str]]:
        """Yield ``(file, rank, cell)`` for non-empty cells in row-major order."""
        for rank, row in enumerate(self.grid):
            for file, cell in enumerate(row):
                if cell != EMPTY:
                    yield file, rank, cell

    def is_valid_move(self, move: Move) -> bool:
        """Bounds and occupancy gate; no piece, turn or check rules."""
        return (
            in_bounds(move.from_file, move.from_rank)
            and in_bounds(move.to_file, move.to_rank)
            and self.grid[move.from_rank][move.from_file] != EMPTY
        )

    def apply_move(self, move: Move) -> None:
        """Move the origin cell onto the destination, overwriting it."""
        self.grid[move.to_rank][move.to_file] = self.grid[move.from_rank][move.from_file]
        self.grid[move.from_rank][move.from_file] = EMPTY

    def undo_move(self, move: Move, captured: str) -> None:
        """Reverse ``apply_move(move)`` given the pre-apply destination cell."""
        self.grid[move.from_rank][move.from_file] = self.grid[move.to_rank][move.to_file]
        self.grid[move.to_rank][move.to_file] = captured

    @contextmanager
    def applied(self, move: Move) -> Iterator[str]:
        """Apply ``move`` for the duration of a ``with`` block.

        Yields the captured cell. The move is undone on every exit path,
        including ``break`` and exceptions.
        """
        captured = self.piece_at(move.to_file, move.to_rank)
        self.apply_move(move)
        try:
            yield captured
        finally:
            self.undo_move(move, captured)
