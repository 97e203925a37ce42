"""Game facade: the only surface a presentation layer needs."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from parlour.config import CONFIG, DIFFICULTY_NAMES
from parlour.core.board import Board
from parlour.core.movegen import all_legal_moves, legal_destinations
from parlour.core.pieces import Color, Move, NO_SELECTION, NULL_MOVE, Piece, Position
from parlour.core.rules import is_legal
from parlour.core.search import SearchEngine, check_difficulty

logger = logging.getLogger(__name__)


class GameMode(str, Enum):
    LOCAL = "local"
    AI = "ai"


@dataclass(frozen=True)
class GameStats:
    total_moves: int
    current_turn: int
    white_captures: int
    black_captures: int


class Game:
    """One game of chess between two humans or a human (White) and the engine (Black)."""

    AI_COLOR = Color.BLACK

    def __init__(self, mode: Optional[GameMode] = None, difficulty: Optional[int] = None,
                 engine: Optional[SearchEngine] = None, fen: Optional[str] = None):
        self.board = Board(fen)
        self.mode = GameMode(mode or CONFIG.ui.default_mode)
        self.engine = engine or SearchEngine()
        self.difficulty = check_difficulty(self.engine.difficulty if difficulty is None else difficulty)
        self.selected: Position = NO_SELECTION

    # -- state changes ------------------------------------------------------

    def reset(self):
        self.board.reset()
        self.selected = NO_SELECTION

    def set_mode(self, mode: GameMode):
        """Switch between local and engine play; always starts a new game."""
        self.mode = GameMode(mode)
        self.reset()

    def set_difficulty(self, difficulty: int):
        self.difficulty = check_difficulty(difficulty)

    def commit(self, from_sq: Position, to_sq: Position) -> Move:
        """Play from_sq -> to_sq unconditionally; callers check legality first."""
        move = self.board.make_move(from_sq, to_sq)
        self.board.commit(move)
        logger.debug("Committed %s", move)
        return move

    def play(self, from_sq: Position, to_sq: Position) -> bool:
        """Commit the move if it is legal for the side to move. Returns True if played."""
        if not Position(*from_sq).on_board:
            return False
        if self.board.piece_at(from_sq).color != self.board.side_to_move:
            return False
        if not is_legal(self.board, from_sq, to_sq):
            return False
        self.commit(from_sq, to_sq)
        return True

    def undo(self) -> Optional[Move]:
        move = self.board.undo()
        self.selected = NO_SELECTION
        if move is not None:
            logger.debug("Undid %s", move)
        return move

    # -- engine -------------------------------------------------------------

    def is_ai_turn(self) -> bool:
        return self.mode == GameMode.AI and self.board.side_to_move == self.AI_COLOR

    def select_move(self, difficulty: Optional[int] = None) -> Move:
        """The engine's choice for Black; NULL_MOVE when Black cannot move."""
        return self.engine.select_move(
            self.board, self.difficulty if difficulty is None else difficulty, self.AI_COLOR)

    def ai_move(self) -> Move:
        """Let the engine play Black's turn in AI mode and return what it played."""
        if not self.is_ai_turn():
            return NULL_MOVE
        move = self.select_move()
        if not move.is_null:
            self.board.commit(move)
            logger.debug("Engine committed %s", move)
        return move

    # -- click handling -------------------------------------------------------

    def select(self, pos: Position) -> Optional[Move]:
        """Feed a clicked square into the selection state machine.

        Returns the move if the click completed one.
        """
        pos = Position(*pos)
        if self.is_ai_turn() or not pos.on_board:
            return None
        piece = self.board.piece_at(pos)
        own_piece = not piece.is_empty and piece.color == self.board.side_to_move

        if self.selected == NO_SELECTION:
            if own_piece:
                self.selected = pos
            return None
        if pos == self.selected:
            self.selected = NO_SELECTION
            return None
        if is_legal(self.board, self.selected, pos):
            move = self.commit(self.selected, pos)
            self.selected = NO_SELECTION
            return move
        self.selected = pos if own_piece else NO_SELECTION
        return None

    def highlights(self) -> List[Position]:
        """Legal destinations for the selected piece."""
        if self.selected == NO_SELECTION:
            return []
        return legal_destinations(self.board, self.selected)

    # -- inspection ----------------------------------------------------------

    def is_legal(self, from_sq: Position, to_sq: Position) -> bool:
        return is_legal(self.board, from_sq, to_sq)

    def all_legal_moves(self, color: Optional[Color] = None) -> List[Move]:
        return all_legal_moves(self.board, color or self.board.side_to_move)

    def piece_at(self, pos: Position) -> Piece:
        return self.board.piece_at(pos)

    def side_to_move(self) -> Color:
        return self.board.side_to_move

    def history_snapshot(self) -> Tuple[Move, ...]:
        return self.board.history_snapshot()

    def move_list(self) -> List[str]:
        return [move.notation() for move in self.board.history]

    @property
    def difficulty_name(self) -> str:
        return DIFFICULTY_NAMES[self.difficulty]

    def stats(self) -> GameStats:
        history = self.board.history
        white = sum(1 for m in history if m.is_capture and m.piece.color == Color.WHITE)
        black = sum(1 for m in history if m.is_capture and m.piece.color == Color.BLACK)
        return GameStats(
            total_moves=len(history),
            current_turn=len(history) // 2 + 1,
            white_captures=white,
            black_captures=black,
        )

    def get_fen(self) -> str:
        return self.board.get_fen()

    def set_fen(self, fen: str):
        self.board.set_fen(fen)
        self.selected = NO_SELECTION
