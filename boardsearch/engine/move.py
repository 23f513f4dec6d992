from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


BOARD_SIZE = 8
FILES = "abcdefgh"
RANKS = "12345678"


class InvalidMoveFormat(ValueError):
    """Raised when move text is not of the form ``<file><rank><file><rank>``."""


@dataclass(frozen=True)
class Move:
    """Engine-internal move representation.

    Attributes:
        from_file (int): Origin file index (0 = file ``a``).
        from_rank (int): Origin row index (0 = rank 8).
        to_file (int): Destination file index.
        to_rank (int): Destination row index.

    Bounds are not enforced here; see ``BoardState.is_valid_move``.
    """

    from_file: int
    from_rank: int
    to_file: int
    to_rank: int

    @property
    def origin(self) -> Tuple[int, int]:
        return self.from_file, self.from_rank

    @property
    def destination(self) -> Tuple[int, int]:
        return self.to_file, self.to_rank

    def to_text(self) -> str:
        """Serialize the move into its 4-character text form.

        Returns:
            str: Move encoded like ``"e2e4"``.

        Raises:
            ValueError: If any coordinate is outside the board.
        """
        return square_to_str(self.from_file, self.from_rank) + square_to_str(
            self.to_file, self.to_rank
        )


def parse_move(text: str) -> Move:
    """Parse a 4-character move string.

    Args:
        text (str): Move such as ``"e2e4"``.

    Returns:
        Move: Parsed move; row 0 corresponds to rank 8.

    Raises:
        InvalidMoveFormat: If the string is not exactly four characters or a
            file/rank character is out of range.
    """
    if not isinstance(text, str) or len(text) != 4:
        raise InvalidMoveFormat(f"invalid move length: {text!r}")
    try:
        from_file, from_rank = str_to_square(text[0:2])
        to_file, to_rank = str_to_square(text[2:4])
    except ValueError as e:
        raise InvalidMoveFormat(f"invalid move: {text!r}") from e
    return Move(from_file, from_rank, to_file, to_rank)


def str_to_square(s: str) -> Tuple[int, int]:
    """Convert algebraic notation into ``(file, row)`` indices.

    Raises:
        ValueError: If ``s`` is not a valid square.
    """
    if len(s) != 2 or s[0] not in FILES or s[1] not in RANKS:
        raise ValueError(f"invalid square: {s!r}")
    return ord(s[0]) - ord("a"), BOARD_SIZE - int(s[1])


def square_to_str(file: int, rank: int) -> str:
    """Convert ``(file, row)`` indices into algebraic notation.

    Raises:
        ValueError: If either index is outside 0..7.
    """
    if not (0 <= file < BOARD_SIZE and 0 <= rank < BOARD_SIZE):
        raise ValueError(f"invalid square: ({file}, {rank})")
    return chr(ord("a") + file) + str(BOARD_SIZE - rank)
