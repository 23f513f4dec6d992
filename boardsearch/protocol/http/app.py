from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore
from ..cli.loop import render_board
from ...config import Config, load_config
from ...engine.board import BoardState, Side
from ...engine.game import Game, IllegalMove
from ...engine.move import InvalidMoveFormat, parse_move
from ...engine.movegen import make_generator
from ...engine.perft import perft as perft_nodes


logger = logging.getLogger(__name__)

MAX_SEARCH_DEPTH = 3
MAX_PERFT_DEPTH = 2


class CreateGameResponse(BaseModel):
    game_id: str
    layout: str


class SetPositionRequest(BaseModel):
    layout: str = Field(..., description="Eight '/'-separated rows, rank 8 first")
    side_to_move: Side = Side.FIRST


class MoveRequest(BaseModel):
    move: str = Field(..., description="Move text, e.g. e2e4")


class SearchRequest(BaseModel):
    depth: Optional[int] = Field(default=None, ge=1, le=MAX_SEARCH_DEPTH)


class SearchResponse(BaseModel):
    best_move: Optional[str]
    score: Optional[int]
    nodes: int
    depth: int
    time_ms: int


class PerftRequest(BaseModel):
    layout: Optional[str] = None
    depth: int = Field(default=1, ge=0, le=MAX_PERFT_DEPTH)


class GameState(BaseModel):
    game_id: str
    layout: str
    board: str
    side_to_move: Side
    candidate_moves: list[str]
    last_move: Optional[str]
    move_history: list[str]


def create_app(config: Optional[Config] = None) -> FastAPI:
    cfg = config or load_config()
    app = FastAPI(title="Board Search API", version="0.1.0")

    logging.basicConfig(level=cfg.log_level)

    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore()
    generator = make_generator(cfg.search.generator)

    def game_state(game_id: str, game: Game) -> GameState:
        last = game.last_move()
        return GameState(
            game_id=game_id,
            layout=game.to_layout(),
            board=render_board(game.board),
            side_to_move=game.side_to_move,
            candidate_moves=[m.to_text() for m in game.candidate_moves(generator)],
            last_move=last.to_text() if last else None,
            move_history=game.move_history_text(),
        )

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game() -> CreateGameResponse:
        game = Game.new()
        game_id = store.create(game)
        logger.info("game created", extra={"game_id": game_id})
        return CreateGameResponse(game_id=game_id, layout=game.to_layout())

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        return game_state(game_id, _require_game(store, game_id))

    @app.delete("/api/games/{game_id}")
    async def delete_game(game_id: str) -> Dict[str, str]:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return {"status": "deleted"}

    @app.post("/api/games/{game_id}/position", response_model=GameState)
    async def set_position(game_id: str, req: SetPositionRequest) -> GameState:
        _require_game(store, game_id)
        try:
            game = Game.from_layout(req.layout, req.side_to_move)
        except ValueError:
            raise HTTPException(status_code=400, detail="invalid layout")
        store.replace(game_id, game)
        return game_state(game_id, game)

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    async def make_move(game_id: str, req: MoveRequest) -> GameState:
        game = _require_game(store, game_id)
        try:
            move = parse_move(req.move.strip())
        except InvalidMoveFormat:
            raise HTTPException(status_code=400, detail="invalid move format")
        try:
            game.apply_move(move)
        except IllegalMove:
            raise HTTPException(status_code=400, detail="illegal move")
        return game_state(game_id, game)

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    async def undo(game_id: str) -> GameState:
        game = _require_game(store, game_id)
        try:
            game.undo_move()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return game_state(game_id, game)

    @app.post("/api/games/{game_id}/search", response_model=SearchResponse)
    async def search(game_id: str, req: SearchRequest) -> SearchResponse:
        game = _require_game(store, game_id)
        engine = cfg.make_engine(perspective=game.side_to_move)
        depth = req.depth or min(cfg.search.depth, MAX_SEARCH_DEPTH)
        res = engine.search(game.board, depth, game.side_to_move)
        return SearchResponse(
            best_move=res.best_move.to_text() if res.best_move else None,
            score=res.score,
            nodes=res.nodes,
            depth=res.depth,
            time_ms=res.time_ms,
        )

    @app.post("/api/perft")
    async def perft(req: PerftRequest) -> Dict[str, int]:
        try:
            board = BoardState.from_layout(req.layout) if req.layout else BoardState.startpos()
        except ValueError:
            raise HTTPException(status_code=400, detail="invalid layout")
        return {"nodes": perft_nodes(board, req.depth, generator)}

    return app


def _require_game(store: InMemorySessionStore, game_id: str) -> Game:
    game = store.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game
