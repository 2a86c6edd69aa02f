from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field
from starlette.concurrency import run_in_threadpool

from .error import EXCEPTION_HANDLERS
from .logging_middleware import RequestIDLoggingMiddleware
from .session import GameSession, InMemorySessionStore
from ...config import Settings
from ...engine.game import Game, GameStatus, Listener
from ...engine.move import MoveRecord
from ...engine.notation import format_move
from ...engine.piece import Color, PieceType, Square
from ...search.levels import get_level, list_levels
from ...search.service import SearchResult, SearchService


logger = logging.getLogger(__name__)


class SquareModel(BaseModel):
    row: int = Field(..., ge=0, le=7)
    col: int = Field(..., ge=0, le=7)

    def to_square(self) -> Square:
        return Square(self.row, self.col)

    @classmethod
    def of(cls, sq: Square) -> "SquareModel":
        return cls(row=sq.row, col=sq.col)


class PieceModel(BaseModel):
    type: PieceType
    color: Color


class LevelModel(BaseModel):
    key: str
    name: str
    elo: str
    depth: int
    randomness: float


class CreateGameRequest(BaseModel):
    level: Optional[str] = Field(default=None, description="Difficulty preset key")
    human_color: Optional[Color] = Field(default=None, description="Side the human plays")


class CreateGameResponse(BaseModel):
    game_id: str
    level: LevelModel
    human_color: Color
    ai_color: Color


class MoveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_sq: SquareModel = Field(..., alias="from")
    to_sq: SquareModel = Field(..., alias="to")


class UndoRequest(BaseModel):
    plies: Optional[int] = Field(default=None, ge=1, description="Raw plies to undo")


class LastMove(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_sq: SquareModel = Field(..., alias="from")
    to_sq: SquareModel = Field(..., alias="to")
    notation: str


class GameState(BaseModel):
    game_id: str
    turn: Color
    board: List[List[Optional[PieceModel]]]
    status: GameStatus
    in_check: bool
    checkmate: bool
    stalemate: bool
    winner: Optional[Color]
    level: str
    human_color: Color
    ai_color: Color
    captured: Dict[str, List[PieceType]]
    move_history: List[str]
    last_move: Optional[LastMove]


class LegalMovesResponse(BaseModel):
    square: SquareModel
    moves: List[SquareModel]


class AIMoveResponse(BaseModel):
    move: Optional[LastMove]
    score: Optional[int]
    randomized: bool
    nodes: int
    time_ms: int
    state: GameState


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(title="Kingside Chess API", version="0.1.0")

    # Basic logging setup
    logging.basicConfig(level=settings.log_level.upper())

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    for exc_type, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_type, handler)

    store = InMemorySessionStore()
    app.state.settings = settings
    app.state.store = store

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/levels", response_model=List[LevelModel])
    async def levels() -> List[LevelModel]:
        return [_level_model(lv.key) for lv in list_levels()]

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game(req: Optional[CreateGameRequest] = None) -> CreateGameResponse:
        req = req or CreateGameRequest()
        try:
            level = get_level(req.level or settings.default_level)
        except KeyError:
            raise HTTPException(status_code=400, detail=f"unknown level: {req.level}")
        ai_color = req.human_color.opponent if req.human_color else settings.ai_color
        game = Game.new()
        session = GameSession(
            game=game, level=level, ai_color=ai_color, rng=random.Random(settings.seed)
        )
        game_id = store.create(session)
        game.add_listener(_event_logger(game_id))
        logger.info(
            "game created",
            extra={"game_id": game_id, "level": level.key, "ai_color": ai_color.value},
        )
        return CreateGameResponse(
            game_id=game_id,
            level=_level_model(level.key),
            human_color=session.human_color,
            ai_color=ai_color,
        )

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    def get_state(game_id: str) -> GameState:
        session = _require_session(store, game_id)
        with session.lock:
            return _game_state(game_id, session)

    @app.get("/api/games/{game_id}/moves", response_model=LegalMovesResponse)
    def get_moves(
        game_id: str,
        row: int = Query(..., ge=0, le=7),
        col: int = Query(..., ge=0, le=7),
    ) -> LegalMovesResponse:
        session = _require_session(store, game_id)
        sq = Square(row, col)
        with session.lock:
            moves = session.game.get_legal_moves(sq)
        return LegalMovesResponse(
            square=SquareModel.of(sq), moves=[SquareModel.of(m) for m in moves]
        )

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    def make_move(game_id: str, req: MoveRequest) -> GameState:
        session = _require_session(store, game_id)
        with session.lock:
            if session.game.turn is not session.human_color:
                raise HTTPException(status_code=409, detail="not the human player's turn")
            # IllegalMoveError is rendered as 400 by the error handlers
            session.game.apply_move(req.from_sq.to_square(), req.to_sq.to_square())
            return _game_state(game_id, session)

    @app.post("/api/games/{game_id}/ai-move", response_model=AIMoveResponse)
    async def ai_move(game_id: str) -> AIMoveResponse:
        session = _require_session(store, game_id)
        service = SearchService(rng=session.rng)

        def play() -> tuple[SearchResult, Optional[MoveRecord], GameState]:
            with session.lock:
                if session.game.turn is not session.ai_color:
                    raise HTTPException(status_code=409, detail="not the AI's turn")
                result = service.search(
                    session.game.board,
                    session.level.depth,
                    session.level.randomness,
                    session.ai_color,
                )
                record = None
                if result.best_move is not None:
                    record = session.game.apply_move(
                        result.best_move.from_sq, result.best_move.to_sq
                    )
                return result, record, _game_state(game_id, session)

        # Search is CPU-bound; keep it off the event loop
        result, record, state = await run_in_threadpool(play)
        logger.info(
            "ai move",
            extra={
                "game_id": game_id,
                "move": format_move(record) if record else None,
                "nodes": result.nodes,
                "time_ms": result.time_ms,
                "randomized": result.randomized,
            },
        )
        return AIMoveResponse(
            move=_last_move(record),
            score=result.score,
            randomized=result.randomized,
            nodes=result.nodes,
            time_ms=result.time_ms,
            state=state,
        )

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    def undo(game_id: str, req: Optional[UndoRequest] = None) -> GameState:
        session = _require_session(store, game_id)
        with session.lock:
            game = session.game
            if not game.history:
                raise HTTPException(status_code=400, detail="no moves to undo")
            if req is not None and req.plies is not None:
                for _ in range(req.plies):
                    if game.undo_last_move() is None:
                        break
            else:
                game.undo_turn(session.ai_color)
            return _game_state(game_id, session)

    @app.post("/api/games/{game_id}/reset", response_model=GameState)
    def reset(game_id: str) -> GameState:
        session = _require_session(store, game_id)
        with session.lock:
            session.game.reset()
            session.rng.seed(settings.seed)
            return _game_state(game_id, session)

    @app.delete("/api/games/{game_id}")
    async def delete_game(game_id: str) -> Dict[str, bool]:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return {"deleted": True}

    return app


def _require_session(store: InMemorySessionStore, game_id: str) -> GameSession:
    session = store.get(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail="game not found")
    return session


def _event_logger(game_id: str) -> Listener:
    def _log(event: str, record: Optional[MoveRecord]) -> None:
        logger.debug(
            "game event",
            extra={
                "game_id": game_id,
                "event": event,
                "move": format_move(record) if record else None,
            },
        )

    return _log


def _level_model(key: str) -> LevelModel:
    lv = get_level(key)
    return LevelModel(
        key=lv.key, name=lv.name, elo=lv.elo, depth=lv.depth, randomness=lv.randomness
    )


def _last_move(record: Optional[MoveRecord]) -> Optional[LastMove]:
    if record is None:
        return None
    return LastMove(
        from_sq=SquareModel.of(record.from_sq),
        to_sq=SquareModel.of(record.to_sq),
        notation=format_move(record),
    )


def _game_state(game_id: str, session: GameSession) -> GameState:
    game = session.game
    status = game.status()
    board = [
        [None if p is None else PieceModel(type=p.piece_type, color=p.color) for p in row]
        for row in game.board.grid
    ]
    return GameState(
        game_id=game_id,
        turn=game.turn,
        board=board,
        status=status,
        in_check=status in (GameStatus.CHECK, GameStatus.CHECKMATE),
        checkmate=status is GameStatus.CHECKMATE,
        stalemate=status is GameStatus.STALEMATE,
        winner=game.turn.opponent if status is GameStatus.CHECKMATE else None,
        level=session.level.key,
        human_color=session.human_color,
        ai_color=session.ai_color,
        captured={c.value: list(types) for c, types in game.captured.items()},
        move_history=game.notation_history(),
        last_move=_last_move(game.history[-1]) if game.history else None,
    )
