"""Pseudo-legal move rules, one function per piece kind.

A move is legal when the mover's geometry allows it and the destination
does not hold a piece of the mover's own color. Whether the mover's king
is left attacked is not considered, and there is no castling, en passant
or promotion.
"""

from typing import Callable, Dict

from .board import Board
from .pieces import Color, Kind, Piece, Position

# Starting rank and forward direction per pawn color
PAWN_START_ROW = {Color.WHITE: 6, Color.BLACK: 1}
PAWN_DIRECTION = {Color.WHITE: -1, Color.BLACK: 1}


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def is_path_clear(board: Board, from_sq: Position, to_sq: Position) -> bool:
    """True if every square strictly between the endpoints is empty."""
    row_step = _sign(to_sq[0] - from_sq[0])
    col_step = _sign(to_sq[1] - from_sq[1])
    row, col = from_sq[0] + row_step, from_sq[1] + col_step
    while (row, col) != (to_sq[0], to_sq[1]):
        if not board.grid[row][col].is_empty:
            return False
        row += row_step
        col += col_step
    return True


def _pawn(board: Board, piece: Piece, from_sq, to_sq, d_row: int, d_col: int) -> bool:
    direction = PAWN_DIRECTION[piece.color]
    target = board.grid[to_sq[0]][to_sq[1]]
    if d_col == 0:
        if d_row == direction and target.is_empty:
            return True
        if (d_row == 2 * direction and target.is_empty
                and from_sq[0] == PAWN_START_ROW[piece.color]):
            return board.grid[from_sq[0] + direction][from_sq[1]].is_empty
        return False
    return abs(d_col) == 1 and d_row == direction and not target.is_empty


def _rook(board: Board, piece: Piece, from_sq, to_sq, d_row: int, d_col: int) -> bool:
    return (d_row == 0 or d_col == 0) and is_path_clear(board, from_sq, to_sq)


def _bishop(board: Board, piece: Piece, from_sq, to_sq, d_row: int, d_col: int) -> bool:
    return abs(d_row) == abs(d_col) and is_path_clear(board, from_sq, to_sq)


def _queen(board: Board, piece: Piece, from_sq, to_sq, d_row: int, d_col: int) -> bool:
    straight = d_row == 0 or d_col == 0
    diagonal = abs(d_row) == abs(d_col)
    return (straight or diagonal) and is_path_clear(board, from_sq, to_sq)


def _king(board: Board, piece: Piece, from_sq, to_sq, d_row: int, d_col: int) -> bool:
    return abs(d_row) <= 1 and abs(d_col) <= 1


def _knight(board: Board, piece: Piece, from_sq, to_sq, d_row: int, d_col: int) -> bool:
    return (abs(d_row), abs(d_col)) in ((2, 1), (1, 2))


RuleFn = Callable[[Board, Piece, Position, Position, int, int], bool]

RULES: Dict[Kind, RuleFn] = {
    Kind.PAWN: _pawn,
    Kind.ROOK: _rook,
    Kind.KNIGHT: _knight,
    Kind.BISHOP: _bishop,
    Kind.QUEEN: _queen,
    Kind.KING: _king,
}


def _on_board(pos) -> bool:
    return 0 <= pos[0] < 8 and 0 <= pos[1] < 8


def is_legal(board: Board, from_sq: Position, to_sq: Position) -> bool:
    """Check whether the piece on from_sq may move to to_sq.

    Out-of-range squares, an empty source and a destination holding a
    piece of the same color are rejected before the per-kind rule runs.
    Because a piece shares its own color, a move onto the source square
    itself is always rejected, including for the king.
    """
    if not (_on_board(from_sq) and _on_board(to_sq)):
        return False
    piece = board.grid[from_sq[0]][from_sq[1]]
    target = board.grid[to_sq[0]][to_sq[1]]
    if target.color == piece.color:
        return False
    if piece.is_empty:
        return False
    rule = RULES.get(piece.kind)
    if rule is None:
        return False
    return rule(board, piece, from_sq, to_sq, to_sq[0] - from_sq[0], to_sq[1] - from_sq[1])
