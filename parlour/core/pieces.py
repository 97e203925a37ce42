"""Value types shared by the board, rules and search: pieces, squares and moves."""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

import chess


class Kind(str, Enum):
    NONE = "none"
    PAWN = "pawn"
    ROOK = "rook"
    KNIGHT = "knight"
    BISHOP = "bishop"
    QUEEN = "queen"
    KING = "king"


class Color(str, Enum):
    NONE = "none"
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        if self == Color.WHITE:
            return Color.BLACK
        if self == Color.BLACK:
            return Color.WHITE
        return Color.NONE


# python-chess piece symbols, uppercase for White
_SYMBOLS = {
    Kind.PAWN: "p", Kind.ROOK: "r", Kind.KNIGHT: "n",
    Kind.BISHOP: "b", Kind.QUEEN: "q", Kind.KING: "k",
}
_KINDS_BY_SYMBOL = {v: k for k, v in _SYMBOLS.items()}

_UNICODE = {
    Color.WHITE: {Kind.PAWN: "♙", Kind.ROOK: "♖", Kind.KNIGHT: "♘",
                  Kind.BISHOP: "♗", Kind.QUEEN: "♕", Kind.KING: "♔"},
    Color.BLACK: {Kind.PAWN: "♟", Kind.ROOK: "♜", Kind.KNIGHT: "♞",
                  Kind.BISHOP: "♝", Kind.QUEEN: "♛", Kind.KING: "♚"},
}


@dataclass(frozen=True)
class Piece:
    kind: Kind = Kind.NONE
    color: Color = Color.NONE

    @property
    def is_empty(self) -> bool:
        return self.kind == Kind.NONE

    def symbol(self) -> str:
        """FEN-style letter, '.' for an empty slot."""
        if self.is_empty:
            return "."
        s = _SYMBOLS[self.kind]
        return s.upper() if self.color == Color.WHITE else s

    def unicode_symbol(self) -> str:
        if self.is_empty:
            return " "
        return _UNICODE[self.color][self.kind]

    @classmethod
    def from_symbol(cls, symbol: str) -> "Piece":
        kind = _KINDS_BY_SYMBOL.get(symbol.lower())
        if kind is None:
            raise ValueError(f"Unknown piece symbol: {symbol!r}")
        return cls(kind, Color.WHITE if symbol.isupper() else Color.BLACK)


EMPTY = Piece()


class Position(NamedTuple):
    row: int
    col: int

    @property
    def on_board(self) -> bool:
        return 0 <= self.row < 8 and 0 <= self.col < 8

    def name(self) -> str:
        """Algebraic name; row 0 is rank 8, col 0 is file a."""
        return chess.square_name(to_chess_square(self))

    @classmethod
    def parse(cls, name: str) -> "Position":
        """Parse 'e2' style names. Raises ValueError on garbage."""
        return from_chess_square(chess.parse_square(name.strip().lower()))


NO_SELECTION = Position(-1, -1)


def to_chess_square(pos: Position) -> int:
    return chess.square(pos.col, 7 - pos.row)


def from_chess_square(square: int) -> Position:
    return Position(7 - chess.square_rank(square), chess.square_file(square))


@dataclass(frozen=True)
class Move:
    """A reversible move record; holds the pre-move contents of both squares."""
    from_sq: Position = NO_SELECTION
    to_sq: Position = NO_SELECTION
    piece: Piece = EMPTY
    captured: Piece = EMPTY

    @property
    def is_null(self) -> bool:
        return self.from_sq == NO_SELECTION

    @property
    def is_capture(self) -> bool:
        return not self.captured.is_empty

    def uci(self) -> str:
        if self.is_null:
            return "0000"
        return self.from_sq.name() + self.to_sq.name()

    def notation(self) -> str:
        """Move-list text such as 'pawne2-e4'."""
        if self.is_null:
            return "-"
        return f"{self.piece.kind.value}{self.from_sq.name()}-{self.to_sq.name()}"

    def __str__(self):
        return self.notation()


NULL_MOVE = Move()
