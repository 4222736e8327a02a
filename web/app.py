"""
FastAPI web application for the chess opponent.

Two ways to play against the computer:

- ``POST /api/move`` is stateless: the client sends a FEN and a difficulty,
  the server answers with the computer's move and the resulting FEN.
- ``/api/games`` keeps an in-memory game per room. The server holds the
  authoritative board, refuses moves while the computer is thinking, and
  drops results that went stale because the room was reset for a rematch.

Architecture notes:
- Sync endpoints (not async): FastAPI runs sync handlers in a thread pool,
  which is the right place for a CPU-bound search.
- Rooms live in process memory only. Persistence and broadcasting positions
  to other participants belong to the hosting application.
"""

import logging
import threading
import uuid

import chess
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from opponent.rules import game_status
from opponent.selector import Difficulty, get_best_move
from opponent.session import (
    GameOverError,
    GameSession,
    NotYourTurnError,
    SessionBusyError,
)

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

app = FastAPI(title="Chess Opponent", version="1.0.0")

_games: dict[str, GameSession] = {}
_games_lock = threading.Lock()


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


def _parse_difficulty(value: str) -> str:
    # Raises ValueError, which pydantic reports as a validation error.
    return Difficulty.parse(value).value


class MoveRequest(BaseModel):
    """
    Stateless request for the computer's move.

    Fields:
        fen: Full FEN of the current position. The computer plays the side
             to move.
        difficulty: Tier name or client label ("Beginner", "Easy", ...).
    """

    fen: str
    difficulty: str = Difficulty.SHALLOW.value

    @field_validator("difficulty")
    @classmethod
    def check_difficulty(cls, v: str) -> str:
        return _parse_difficulty(v)


class MoveResponse(BaseModel):
    """
    The computer's reply.

    Fields:
        move: Move in UCI notation (e.g. "e7e5", "a2a1q").
        fen: FEN after the move is applied.
        score: Evaluation in material points, White positive. None for the
               random tier.
        depth: Plies searched (0 for the random tier).
        nodes: Positions visited.
        status: Game status after the move.
    """

    move: str
    fen: str
    score: int | None
    depth: int
    nodes: int
    status: str


class NewGameRequest(BaseModel):
    difficulty: str = Difficulty.SHALLOW.value
    engine_color: str = "black"
    fen: str | None = None

    @field_validator("difficulty")
    @classmethod
    def check_difficulty(cls, v: str) -> str:
        return _parse_difficulty(v)

    @field_validator("engine_color")
    @classmethod
    def check_color(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("white", "black"):
            raise ValueError("engine_color must be 'white' or 'black'")
        return v


class HumanMoveRequest(BaseModel):
    move: str  # UCI format e.g. "e2e4"


class ResetRequest(BaseModel):
    fen: str | None = None


class GameResponse(BaseModel):
    """
    Snapshot of a room.

    Fields:
        game_id: Room identifier.
        fen: Current position.
        turn: "white" or "black".
        engine_color: Side played by the computer.
        difficulty: Tier used by the computer.
        legal_moves: Legal moves in UCI notation.
        status: "active", "Checkmate! ... wins.", "Draw!" or "Game Over.".
        generation: Incremented on every rematch.
        engine_move: The computer's reply to the last request, if any.
    """

    game_id: str
    fen: str
    turn: str
    engine_color: str
    difficulty: str
    legal_moves: list[str]
    status: str
    generation: int
    engine_move: str | None = None


def _color_name(color: chess.Color) -> str:
    return "white" if color == chess.WHITE else "black"


def _snapshot(game_id: str, session: GameSession, engine_move: chess.Move | None = None) -> GameResponse:
    board = session.board
    return GameResponse(
        game_id=game_id,
        fen=board.fen(),
        turn=_color_name(board.turn),
        engine_color=_color_name(session.engine_color),
        difficulty=session.difficulty.value,
        legal_moves=[m.uci() for m in board.legal_moves],
        status=session.status(),
        generation=session.generation,
        engine_move=engine_move.uci() if engine_move else None,
    )


def _get_game(game_id: str) -> GameSession:
    with _games_lock:
        session = _games.get(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown game: {game_id}")
    return session


def _engine_reply(game_id: str, session: GameSession) -> chess.Move | None:
    try:
        return session.play_engine_turn()
    except SessionBusyError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except Exception as exc:
        _log.exception("Engine search failed for game=%s fen=%s", game_id, session.board.fen())
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc


# ---------------------------------------------------------------------------
# Stateless move endpoint
# ---------------------------------------------------------------------------


@app.post("/api/move", response_model=MoveResponse)
def api_move(request: MoveRequest) -> MoveResponse:
    """
    Compute the computer's move for the given position.

    Raises:
        HTTPException 400: Malformed FEN or game already over.
        HTTPException 500: Engine failure or no move returned.
    """
    try:
        board = chess.Board(request.fen)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {exc}") from exc

    if board.is_game_over():
        raise HTTPException(
            status_code=400,
            detail=f"Game is already over: {game_status(board)}",
        )

    try:
        result = get_best_move(board, request.difficulty)
    except Exception as exc:
        _log.exception("Engine search failed for FEN=%s", request.fen)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    if result.move is None:
        raise HTTPException(status_code=500, detail="Engine returned no move")

    _log.info(
        "Move=%s score=%s depth=%d nodes=%d difficulty=%s fen=%s",
        result.move.uci(),
        result.score,
        result.depth,
        result.nodes,
        request.difficulty,
        request.fen[:40],
    )

    board.push(result.move)
    return MoveResponse(
        move=result.move.uci(),
        fen=board.fen(),
        score=result.score,
        depth=result.depth,
        nodes=result.nodes,
        status=game_status(board),
    )


# ---------------------------------------------------------------------------
# Rooms
# ---------------------------------------------------------------------------


@app.post("/api/games", response_model=GameResponse)
def create_game(request: NewGameRequest) -> GameResponse:
    """Open a room. If the computer has the first move, it plays it now."""
    engine_color = chess.WHITE if request.engine_color == "white" else chess.BLACK
    try:
        session = GameSession(request.difficulty, engine_color=engine_color, fen=request.fen)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {exc}") from exc

    game_id = uuid.uuid4().hex
    with _games_lock:
        _games[game_id] = session
    _log.info("Created game=%s difficulty=%s engine=%s", game_id, request.difficulty, request.engine_color)

    engine_move = _engine_reply(game_id, session)
    return _snapshot(game_id, session, engine_move)


@app.get("/api/games/{game_id}", response_model=GameResponse)
def get_game(game_id: str) -> GameResponse:
    return _snapshot(game_id, _get_game(game_id))


@app.post("/api/games/{game_id}/move", response_model=GameResponse)
def play_move(game_id: str, request: HumanMoveRequest) -> GameResponse:
    """
    Play the human's move, then the computer's reply.

    Raises:
        HTTPException 400: Malformed or illegal move, wrong turn, game over.
        HTTPException 404: Unknown room.
        HTTPException 409: The computer is still thinking.
    """
    session = _get_game(game_id)
    try:
        session.push_human_move(request.move)
    except SessionBusyError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except (GameOverError, NotYourTurnError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except chess.InvalidMoveError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid UCI move: {request.move}") from exc
    except chess.IllegalMoveError as exc:
        raise HTTPException(status_code=400, detail=f"Illegal move: {request.move}") from exc

    engine_move = _engine_reply(game_id, session)
    return _snapshot(game_id, session, engine_move)


@app.post("/api/games/{game_id}/reset", response_model=GameResponse)
def reset_game(game_id: str, request: ResetRequest = ResetRequest()) -> GameResponse:
    """Rematch: restart the room. A search still running for it is discarded."""
    session = _get_game(game_id)
    try:
        session.reset(request.fen)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {exc}") from exc

    engine_move = _engine_reply(game_id, session)
    return _snapshot(game_id, session, engine_move)
