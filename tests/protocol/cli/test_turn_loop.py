from __future__ import annotations

from typing import List

from boardsearch.engine.board import BoardState, Side
from boardsearch.engine.game import Game
from boardsearch.protocol.cli.loop import PROMPT, TurnLoop, render_board
from boardsearch.search.service import SearchEngine


def capture_writer(buf: List[str]):
    def _w(line: str) -> None:
        buf.append(line)

    return _w


def test_render_startpos() -> None:
    lines = render_board(BoardState.startpos()).splitlines()
    assert lines[0] == "  a b c d e f g h"
    assert lines[1] == "8 r n b q k b n r 8"
    assert lines[3] == "6 . . . . . . . . 6"
    assert lines[8] == "1 R N B Q K B N R 1"
    assert lines[9] == lines[0]
    assert len(lines) == 10


def test_human_then_engine_move() -> None:
    game = Game.new()
    loop = TurnLoop(game, SearchEngine(), depth=1)
    out: List[str] = []
    loop.run(["e2e4\n"], capture_writer(out))

    assert out.count(PROMPT) == 2
    # Zero evaluation keeps the first generated move
    assert "AI move: a8b8" in out
    assert game.move_history_text() == ["e2e4", "a8b8"]
    assert game.side_to_move is Side.FIRST


def test_invalid_input_reprompts_same_side() -> None:
    game = Game.new()
    loop = TurnLoop(game, SearchEngine(), depth=1)
    out: List[str] = []
    loop.run(["zz", "e3e4", "quit", "e2e4"], capture_writer(out))

    assert out.count("Invalid move!") == 2
    assert not any(line.startswith("AI move:") for line in out)
    assert game.history == []
    assert game.side_to_move is Side.FIRST


def test_engine_without_moves_stops() -> None:
    game = Game(board=BoardState.empty(), side_to_move=Side.SECOND)
    out: List[str] = []
    TurnLoop(game, SearchEngine(), depth=1).run([], capture_writer(out))
    assert out[-1] == "AI has no move"


def test_separate_prompt_writer() -> None:
    out: List[str] = []
    prompts: List[str] = []
    TurnLoop(Game.new(), SearchEngine(), depth=1).run(
        [], capture_writer(out), capture_writer(prompts)
    )
    assert prompts == [PROMPT]
    assert PROMPT not in out


def test_blank_lines_are_skipped() -> None:
    game = Game.new()
    out: List[str] = []
    TurnLoop(game, SearchEngine(), depth=1).run(["\n", "   \n", "e2e4\n"], capture_writer(out))
    assert "Invalid move!" not in out
    assert out.count(PROMPT) == 2
    assert game.move_history_text() == ["e2e4", "a8b8"]


def test_several_moves_on_one_line_play_in_turn() -> None:
    game = Game.new()
    out: List[str] = []
    TurnLoop(game, SearchEngine(), depth=1).run(["e2e4 d2d4\n"], capture_writer(out))
    assert "Invalid move!" not in out
    assert game.move_history_text() == ["e2e4", "a8b8", "d2d4", "b8a8"]
