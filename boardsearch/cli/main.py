from __future__ import annotations

import argparse
import logging
import time
from typing import List, Optional

import uvicorn

from boardsearch.config import load_config
from boardsearch.engine.board import BoardState, Side
from boardsearch.engine.movegen import make_generator
from boardsearch.engine.perft import perft
from boardsearch.protocol.cli.loop import run_turn_loop


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="boardsearch", description="Alpha-beta board search")
    parser.add_argument("--config", type=str, default=None, help="Path to a TOML config file")
    sub = parser.add_subparsers(dest="command", required=True)

    play = sub.add_parser("play", help="Play against the engine on stdin/stdout")
    play.add_argument("--depth", type=int, default=None, help="Search depth in plies")

    sub.add_parser("serve", help="Run the HTTP API")

    p = sub.add_parser("perft", help="Count candidate-move tree leaves")
    p.add_argument("--layout", type=str, default=None, help="Board layout (default: start)")
    p.add_argument("--depth", type=int, default=2, help="Perft depth (default: 2)")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    cfg = load_config(args.config)
    logging.basicConfig(level=cfg.log_level)

    if args.command == "play":
        depth = args.depth or cfg.search.depth
        # The engine answers the human, so it scores from the second side's view
        run_turn_loop(cfg.make_engine(perspective=Side.SECOND), depth=depth)
    elif args.command == "serve":
        uvicorn.run(
            "boardsearch.protocol.http.app:create_app",
            factory=True,
            host=cfg.server.host,
            port=cfg.server.port,
        )
    elif args.command == "perft":
        board = BoardState.from_layout(args.layout) if args.layout else BoardState.startpos()
        start = time.perf_counter()
        nodes = perft(board, args.depth, make_generator(cfg.search.generator))
        dt = time.perf_counter() - start
        print(
            f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}"
        )


if __name__ == "__main__":
    main()
