from __future__ import annotations

import logging
import sys
from typing import Callable, Iterable, Iterator, List, Optional

from ...engine.board import BoardState, Side
from ...engine.game import Game, IllegalMove
from ...engine.move import FILES, InvalidMoveFormat, parse_move
from ...search.service import SearchEngine


logger = logging.getLogger(__name__)

Writer = Callable[[str], None]

PROMPT = "Enter your move (e.g., e2e4): "


def render_board(board: BoardState) -> str:
    """Render the grid with file letters above/below and rank numbers beside."""
    header = "  " + " ".join(FILES)
    lines: List[str] = [header]
    for rank, row in enumerate(board.grid):
        n = 8 - rank
        lines.append(f"{n} {' '.join(row)} {n}")
    lines.append(header)
    return "\n".join(lines)


class TurnLoop:
    """Alternate human and engine moves over a text stream.

    Notes:
    - There is no game-over detection; the loop stops on end of input,
      on ``quit``, or when the engine has no candidate move.
    - A rejected human move re-prompts the same side.
    """

    def __init__(
        self,
        game: Game,
        engine: SearchEngine,
        depth: int = 3,
        human_side: Side = Side.FIRST,
    ) -> None:
        self.game = game
        self.engine = engine
        self.depth = depth
        self.human_side = human_side

    def human_turn(self, text: str, write: Writer) -> bool:
        """Try to play ``text`` for the human; return whether the turn advanced."""
        try:
            move = parse_move(text)
            self.game.apply_move(move)
        except (InvalidMoveFormat, IllegalMove):
            write("Invalid move!")
            return False
        return True

    def engine_turn(self, write: Writer) -> bool:
        """Search and play the engine's move; return False if it has none."""
        move = self.engine.find_best_move(self.game.board, self.depth, self.game.side_to_move)
        if move is None:
            write("AI has no move")
            return False
        self.game.apply_move(move)
        logger.info("engine move", extra={"move": move.to_text(), "depth": self.depth})
        write(f"AI move: {move.to_text()}")
        return True

    def run(self, lines: Iterable[str], write: Writer, prompt: Optional[Writer] = None) -> None:
        """Drive the game from ``lines``; moves are whitespace-separated tokens.

        Blank lines are skipped and several moves on one line are played in turn.
        """
        ask = prompt or write
        source: Iterator[str] = _tokens(lines)
        while True:
            write(render_board(self.game.board))
            if self.game.side_to_move is self.human_side:
                ask(PROMPT)
                text = next(source, None)
                if text is None or text == "quit":
                    return
                self.human_turn(text, write)
            elif not self.engine_turn(write):
                return


def _tokens(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        yield from line.split()


def _default_writer(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def _default_prompt(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def run_turn_loop(engine: SearchEngine, depth: int = 3) -> None:
    loop = TurnLoop(Game.new(), engine, depth=depth, human_side=Side.FIRST)
    loop.run(sys.stdin, _default_writer, _default_prompt)
