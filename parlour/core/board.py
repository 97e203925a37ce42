"""Mutable 8x8 board with a game history and make/unmake for search."""

from contextlib import contextmanager
from typing import List, Optional, Tuple

import chess

from .pieces import (
    EMPTY, Color, Kind, Move, Piece, Position,
    from_chess_square, to_chess_square,
)

BACK_RANK = (Kind.ROOK, Kind.KNIGHT, Kind.BISHOP, Kind.QUEEN,
             Kind.KING, Kind.BISHOP, Kind.KNIGHT, Kind.ROOK)


class Board:
    def __init__(self, fen: Optional[str] = None):
        """Initialize from FEN or the standard starting position."""
        self.grid: List[List[Piece]] = [[EMPTY] * 8 for _ in range(8)]
        self.side_to_move = Color.WHITE
        self.history: List[Move] = []
        if fen:
            self.set_fen(fen)
        else:
            self.reset()

    def reset(self):
        """Reset to the initial position and clear the history."""
        for row in range(8):
            for col in range(8):
                self.grid[row][col] = EMPTY
        for col in range(8):
            self.grid[1][col] = Piece(Kind.PAWN, Color.BLACK)
            self.grid[6][col] = Piece(Kind.PAWN, Color.WHITE)
            self.grid[0][col] = Piece(BACK_RANK[col], Color.BLACK)
            self.grid[7][col] = Piece(BACK_RANK[col], Color.WHITE)
        self.side_to_move = Color.WHITE
        self.history.clear()

    def clear(self, side_to_move: Color = Color.WHITE):
        """Empty every square; used to set up test and study positions."""
        for row in range(8):
            for col in range(8):
                self.grid[row][col] = EMPTY
        self.side_to_move = side_to_move
        self.history.clear()

    def piece_at(self, pos: Position) -> Piece:
        """Piece on pos; EMPTY for off-board squares such as NO_SELECTION."""
        if not (0 <= pos[0] < 8 and 0 <= pos[1] < 8):
            return EMPTY
        return self.grid[pos[0]][pos[1]]

    def set_piece(self, pos: Position, piece: Piece):
        self.grid[pos[0]][pos[1]] = piece

    def make_move(self, from_sq: Position, to_sq: Position) -> Move:
        """Build the reversible record for from_sq -> to_sq without playing it."""
        from_sq, to_sq = Position(*from_sq), Position(*to_sq)
        return Move(from_sq, to_sq, self.piece_at(from_sq), self.piece_at(to_sq))

    # -- game moves -------------------------------------------------------

    def commit(self, move: Move):
        """Play a move for real. No legality check is done here."""
        self.apply_speculative(move)
        self.history.append(move)

    def undo(self) -> Optional[Move]:
        """Take back the last committed move; no-op on an empty history."""
        if not self.history:
            return None
        move = self.history.pop()
        self.revert_speculative(move)
        return move

    # -- search make/unmake -------------------------------------------------

    def apply_speculative(self, move: Move):
        self.grid[move.to_sq.row][move.to_sq.col] = self.grid[move.from_sq.row][move.from_sq.col]
        self.grid[move.from_sq.row][move.from_sq.col] = EMPTY
        self.side_to_move = self.side_to_move.opponent

    def revert_speculative(self, move: Move):
        self.grid[move.from_sq.row][move.from_sq.col] = move.piece
        self.grid[move.to_sq.row][move.to_sq.col] = move.captured
        self.side_to_move = self.side_to_move.opponent

    @contextmanager
    def speculative(self, move: Move):
        """Apply a move for the duration of the block; always reverted on exit."""
        self.apply_speculative(move)
        try:
            yield self
        finally:
            self.revert_speculative(move)

    # -- inspection -------------------------------------------------------

    def history_snapshot(self) -> Tuple[Move, ...]:
        return tuple(self.history)

    def snapshot(self) -> Tuple[Tuple[Piece, ...], ...]:
        """Immutable copy of the grid, for equality checks."""
        return tuple(tuple(row) for row in self.grid)

    def copy(self) -> "Board":
        other = Board.__new__(Board)
        other.grid = [list(row) for row in self.grid]
        other.side_to_move = self.side_to_move
        other.history = list(self.history)
        return other

    def pieces(self, color: Color):
        """Yield (position, piece) for every piece of a color in row-major order."""
        for row in range(8):
            for col in range(8):
                piece = self.grid[row][col]
                if piece.color == color and not piece.is_empty:
                    yield Position(row, col), piece

    # -- FEN --------------------------------------------------------------

    def set_fen(self, fen: str):
        """Load placement and side to move from a FEN string. Raises ValueError."""
        parsed = chess.Board(fen)
        self.clear(Color.WHITE if parsed.turn == chess.WHITE else Color.BLACK)
        for square, p in parsed.piece_map().items():
            self.set_piece(from_chess_square(square), Piece.from_symbol(p.symbol()))

    def get_fen(self) -> str:
        """FEN of the current position; castling and en passant are always '-'."""
        out = chess.Board.empty()
        for row in range(8):
            for col in range(8):
                piece = self.grid[row][col]
                if not piece.is_empty:
                    out.set_piece_at(to_chess_square(Position(row, col)),
                                     chess.Piece.from_symbol(piece.symbol()))
        out.turn = chess.WHITE if self.side_to_move == Color.WHITE else chess.BLACK
        out.fullmove_number = len(self.history) // 2 + 1
        return out.fen()

    def __str__(self):
        lines = []
        for row in range(8):
            lines.append(" ".join(self.grid[row][col].symbol() for col in range(8)))
        return "\n".join(lines)

    def unicode(self) -> str:
        lines = []
        for row in range(8):
            cells = " ".join(self.grid[row][col].unicode_symbol() for col in range(8))
            lines.append(f"{8 - row} {cells}")
        lines.append("  a b c d e f g h")
        return "\n".join(lines)

    def print_board(self):
        """Print ASCII representation."""
        print(self)
