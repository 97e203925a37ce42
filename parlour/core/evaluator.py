"""Static material and positional evaluator."""

from parlour.config import CONFIG
from .board import Board
from .pieces import Color, Kind


class Evaluator:
    def __init__(self, cfg=None):
        self.cfg = cfg or CONFIG.eval

    def piece_value(self, kind: Kind) -> int:
        return self.cfg.piece_values.get(kind.name, 0)

    def evaluate(self, board: Board) -> int:
        """Return static eval, positive favors White."""
        score = 0
        for row in range(8):
            for col in range(8):
                piece = board.grid[row][col]
                if piece.is_empty:
                    continue
                value = self.piece_value(piece.kind)

                if self.cfg.use_positional:
                    if piece.kind == Kind.PAWN:
                        # Reward advancing toward the far rank.
                        value += (6 - row) if piece.color == Color.WHITE else (row - 1)
                    elif piece.kind in (Kind.KNIGHT, Kind.BISHOP):
                        # Manhattan distance from the center is always a whole number.
                        center_distance = int(abs(3.5 - row) + abs(3.5 - col))
                        value += 7 - center_distance

                score += value if piece.color == Color.WHITE else -value
        return score
