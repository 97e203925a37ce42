"""FastAPI REST interface for the game."""

import threading

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional

from parlour.config import CONFIG
from parlour.core.pieces import Move, Position
from parlour.main import Game, GameMode

app = FastAPI(title=CONFIG.ui.engine_name, version="1.0.0")

# Shared game instance.
game = Game()
_game_lock = threading.Lock()


class FenRequest(BaseModel):
    fen: str


class MoveRequest(BaseModel):
    move: str  # square names e.g. "e2e4"


class SearchRequest(BaseModel):
    difficulty: Optional[int] = None
    commit: bool = False


class ModeRequest(BaseModel):
    mode: GameMode
    difficulty: Optional[int] = None


def _parse_move(text: str):
    text = text.strip()
    if len(text) != 4:
        raise HTTPException(status_code=400, detail=f"Invalid move: {text}")
    try:
        return Position.parse(text[:2]), Position.parse(text[2:])
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid move: {text}")


def _move_json(move: Move):
    if move.is_null:
        return None
    return {"uci": move.uci(), "notation": move.notation(), "capture": move.is_capture}


def _state():
    stats = game.stats()
    return {
        "fen": game.get_fen(),
        "turn": game.side_to_move().value,
        "mode": game.mode.value,
        "difficulty": game.difficulty,
        "difficulty_name": game.difficulty_name,
        "legal_moves": [m.uci() for m in game.all_legal_moves()],
        "history": game.move_list(),
        "stats": {
            "total_moves": stats.total_moves,
            "current_turn": stats.current_turn,
            "white_captures": stats.white_captures,
            "black_captures": stats.black_captures,
        },
    }


@app.get("/board")
def get_board():
    with _game_lock:
        return _state()


@app.post("/position")
def set_position(req: FenRequest):
    with _game_lock:
        try:
            game.set_fen(req.fen)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"Invalid FEN: {e}")
        return {"fen": game.get_fen()}


@app.post("/move")
def make_move(req: MoveRequest):
    from_sq, to_sq = _parse_move(req.move)
    with _game_lock:
        if game.is_ai_turn():
            raise HTTPException(status_code=409, detail="It is the engine's turn")
        if not game.play(from_sq, to_sq):
            raise HTTPException(status_code=400, detail=f"Illegal move: {req.move}")
        return {"fen": game.get_fen(), "move": _move_json(game.history_snapshot()[-1])}


@app.post("/undo")
def undo_move():
    with _game_lock:
        move = game.undo()
        return {"fen": game.get_fen(), "undone": _move_json(move) if move else None}


@app.post("/search")
def search_move(req: SearchRequest = SearchRequest()):
    with _game_lock:
        if req.commit and game.side_to_move() != Game.AI_COLOR:
            raise HTTPException(status_code=409, detail="The engine only plays Black")
        try:
            move = game.select_move(req.difficulty)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        if req.commit and not move.is_null:
            game.board.commit(move)
        return {"move": _move_json(move), "fen": game.get_fen()}


@app.post("/mode")
def set_mode(req: ModeRequest):
    with _game_lock:
        try:
            if req.difficulty is not None:
                game.set_difficulty(req.difficulty)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        game.set_mode(req.mode)
        return _state()


@app.post("/reset")
def reset_board():
    with _game_lock:
        game.reset()
        return {"fen": game.get_fen()}
