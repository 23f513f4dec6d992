#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import json
import os
import platform
import sys
import time
from typing import Any, Dict, List

# Ensure repo root (which contains `boardsearch/`) is importable when running directly
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from boardsearch.engine.board import BoardState, Side
from boardsearch.engine.movegen import make_generator
from boardsearch.eval import make_evaluator
from boardsearch.search.service import SearchEngine


def bench_depth(
    board: BoardState, depth: int, *, generator: str, evaluator: str, pruning: bool
) -> Dict[str, Any]:
    engine = SearchEngine(
        make_generator(generator),
        make_evaluator(evaluator, Side.FIRST),
        enable_pruning=pruning,
    )
    before = board.to_layout()
    res = engine.search(board, depth, Side.FIRST)
    if board.to_layout() != before:
        raise SystemExit("board was not restored after search")
    return {
        "depth": depth,
        "pruning": pruning,
        "best_move": res.best_move.to_text() if res.best_move else None,
        "score": res.score,
        "nodes": res.nodes,
        "time_ms": res.time_ms,
        "nps": int(res.nodes * 1000 / max(1, res.time_ms)),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Measure search nodes and time per depth")
    parser.add_argument("--layout", type=str, default=None, help="Board layout (default: start)")
    parser.add_argument("--max-depth", type=int, default=2, help="Deepest search to run")
    parser.add_argument("--generator", default="neighborhood", help="neighborhood | side")
    parser.add_argument("--evaluator", default="material", help="zero | material")
    parser.add_argument(
        "--compare", action="store_true", help="Also run without alpha-beta cutoffs"
    )
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    args = parser.parse_args()

    board = BoardState.from_layout(args.layout) if args.layout else BoardState.startpos()
    results: List[Dict[str, Any]] = []
    t0 = time.perf_counter()
    for depth in range(1, max(1, args.max_depth) + 1):
        modes = (True, False) if args.compare else (True,)
        for pruning in modes:
            res = bench_depth(
                board, depth, generator=args.generator, evaluator=args.evaluator, pruning=pruning
            )
            results.append(res)
            sys.stderr.write(
                f"depth={depth} pruning={pruning} nodes={res['nodes']} time={res['time_ms']}ms "
                f"best={res['best_move']}\n"
            )
            sys.stderr.flush()

    payload = {
        "meta": {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "python": sys.version.split()[0],
            "platform": platform.platform(),
            "layout": board.to_layout(),
            "generator": args.generator,
            "evaluator": args.evaluator,
        },
        "results": results,
        "summary": {"total_time_ms": int((time.perf_counter() - t0) * 1000)},
    }
    print(json.dumps(payload, indent=2 if args.pretty else None))


if __name__ == "__main__":
    main()
