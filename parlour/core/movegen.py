"""Brute-force move enumeration."""

from typing import List

from .board import Board
from .pieces import Color, Move, Position
from .rules import is_legal

SQUARES = [Position(row, col) for row in range(8) for col in range(8)]


def all_legal_moves(board: Board, color: Color) -> List[Move]:
    """Every legal move for color, sources then destinations in row-major order."""
    moves = []
    for from_sq, piece in board.pieces(color):
        for to_sq in SQUARES:
            if is_legal(board, from_sq, to_sq):
                moves.append(Move(from_sq, to_sq, piece, board.grid[to_sq.row][to_sq.col]))
    return moves


def legal_destinations(board: Board, from_sq: Position) -> List[Position]:
    """Squares the piece on from_sq may move to, for highlighting."""
    return [to_sq for to_sq in SQUARES if is_legal(board, from_sq, to_sq)]
