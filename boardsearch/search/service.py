from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

from boardsearch.engine.board import BoardState, Side
from boardsearch.engine.move import Move
from boardsearch.engine.movegen import MoveGenerator, NeighborhoodMoveGenerator
from boardsearch.eval import Evaluator, ZeroEvaluator


logger = logging.getLogger(__name__)

# Evaluator scores must stay strictly inside (-INF, INF)
INF = 1_000_000_000


@dataclass
class SearchResult:
    best_move: Optional[Move]
    score: Optional[int]
    nodes: int
    depth: int
    time_ms: int


class SearchEngine:
    """Fixed-depth minimax with alpha-beta pruning.

    Notes:
    - Move order is the generator's enumeration order; no ordering heuristic.
    - Every root move is searched with a fresh full window, so pruning only
      happens inside each root branch.
    - The board is mutated in place and restored through ``BoardState.applied``.
    """

    def __init__(
        self,
        generator: Optional[MoveGenerator] = None,
        evaluator: Optional[Evaluator] = None,
        *,
        enable_pruning: bool = True,
    ) -> None:
        self.generator: MoveGenerator = generator or NeighborhoodMoveGenerator()
        self.evaluator: Evaluator = evaluator or ZeroEvaluator()
        self.enable_pruning = enable_pruning
        self.nodes = 0

    def minimax(
        self,
        board: BoardState,
        depth: int,
        alpha: int,
        beta: int,
        maximizing: bool,
        side: Optional[Side] = None,
    ) -> int:
        if depth < 0:
            raise ValueError("depth must be >= 0")
        self.nodes += 1
        if depth == 0:
            return self.evaluator.evaluate(board)

        next_side = side.opponent if side is not None else None
        best = -INF if maximizing else INF
        for m in self.generator.generate(board, side):
            with board.applied(m):
                val = self.minimax(board, depth - 1, alpha, beta, not maximizing, next_side)
            if maximizing:
                best = max(best, val)
                alpha = max(alpha, val)
            else:
                best = min(best, val)
                beta = min(beta, val)
            if self.enable_pruning and beta <= alpha:
                break
        return best

    def find_best_move(
        self, board: BoardState, depth: int, side: Optional[Side] = None
    ) -> Optional[Move]:
        """Return the root move with the strictly greatest minimax value.

        Ties keep the first move in generator order. Returns ``None`` when
        the generator yields nothing.

        Raises:
            ValueError: If ``depth`` is less than 1.
        """
        if depth < 1:
            raise ValueError("depth must be >= 1")
        best_move, _ = self._search_root(board, depth, side)
        return best_move

    def search(self, board: BoardState, depth: int, side: Optional[Side] = None) -> SearchResult:
        if depth < 1:
            raise ValueError("depth must be >= 1")
        self.nodes = 0
        start = time.perf_counter()
        best_move, best_value = self._search_root(board, depth, side)
        time_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(
            "search done",
            extra={
                "depth": depth,
                "nodes": self.nodes,
                "time_ms": time_ms,
                "best_move": best_move.to_text() if best_move else None,
            },
        )
        return SearchResult(
            best_move=best_move,
            score=best_value if best_move is not None else None,
            nodes=self.nodes,
            depth=depth,
            time_ms=time_ms,
        )

    def _search_root(
        self, board: BoardState, depth: int, side: Optional[Side]
    ) -> tuple[Optional[Move], int]:
        next_side = side.opponent if side is not None else None
        best_move: Optional[Move] = None
        best_value = -INF
        for m in self.generator.generate(board, side):
            with board.applied(m):
                value = self.minimax(board, depth - 1, -INF, INF, False, next_side)
            # Strict ">" keeps the first of equally scored moves
            if best_move is None or value > best_value:
                best_move = m
                best_value = value
        return best_move, best_value
