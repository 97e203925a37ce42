import logging
import random
import threading
import time
from typing import Callable, Optional

from parlour.config import CONFIG
from parlour.core.board import Board
from parlour.core.evaluator import Evaluator
from parlour.core.movegen import all_legal_moves
from parlour.core.pieces import Color, Move, NULL_MOVE
from parlour.core.utils import format_search_info

logger = logging.getLogger(__name__)

INF = 10000
NO_MOVES_SCORE = 1000

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 3


class SearchCancelled(Exception):
    """Raised inside the search tree once stop() has been requested."""


def check_difficulty(difficulty: int) -> int:
    if difficulty not in range(MIN_DIFFICULTY, MAX_DIFFICULTY + 1):
        raise ValueError(f"difficulty must be {MIN_DIFFICULTY}..{MAX_DIFFICULTY}, got {difficulty!r}")
    return difficulty


class SearchEngine:
    def __init__(self, evaluator: Optional[Evaluator] = None, difficulty: Optional[int] = None,
                 seed: Optional[int] = None):
        self.evaluator = evaluator or Evaluator()
        self.difficulty = check_difficulty(CONFIG.search.difficulty if difficulty is None else difficulty)
        self.noise_scale = CONFIG.search.noise_scale
        self.rng = random.Random(seed if seed is not None else CONFIG.search.seed)

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.nodes = 0

    def minimax(self, board: Board, depth: int, maximizing_white: bool,
                alpha: int = -INF, beta: int = INF, prune: bool = True) -> int:
        """Depth-limited minimax score of the position, positive favors White.

        The side to move is given by maximizing_white, not by the board.
        With prune=False every sibling is searched; the returned value is
        the same either way.
        """
        self.nodes += 1
        if self._stop_event.is_set():
            raise SearchCancelled()
        if depth == 0:
            return self.evaluator.evaluate(board)

        moves = all_legal_moves(board, Color.WHITE if maximizing_white else Color.BLACK)
        if not moves:
            return -NO_MOVES_SCORE if maximizing_white else NO_MOVES_SCORE

        if maximizing_white:
            max_eval = -INF
            for move in moves:
                with board.speculative(move):
                    score = self.minimax(board, depth - 1, False, alpha, beta, prune)
                max_eval = max(max_eval, score)
                alpha = max(alpha, score)
                if prune and beta <= alpha:
                    break
            return max_eval

        min_eval = INF
        for move in moves:
            with board.speculative(move):
                score = self.minimax(board, depth - 1, True, alpha, beta, prune)
            min_eval = min(min_eval, score)
            beta = min(beta, score)
            if prune and beta <= alpha:
                break
        return min_eval

    def select_move(self, board: Board, difficulty: Optional[int] = None,
                    color: Color = Color.BLACK) -> Move:
        """Pick a move for color, or NULL_MOVE when it has none.

        Black keeps the candidate with the lowest score and White the
        highest. Below Hard each candidate's score is perturbed by up to
        (3 - difficulty) * noise_scale; ties go to the first candidate seen.
        """
        self._stop_event.clear()
        return self._select(board, difficulty, color)

    def _select(self, board: Board, difficulty: Optional[int], color: Color) -> Move:
        difficulty = check_difficulty(self.difficulty if difficulty is None else difficulty)
        self.nodes = 0
        start_time = time.time()

        moves = all_legal_moves(board, color)
        if not moves:
            logger.info("No legal moves for %s", color.value)
            return NULL_MOVE

        noise = (MAX_DIFFICULTY - difficulty) * self.noise_scale
        minimizing = color == Color.BLACK
        best_move = moves[0]
        best_value = INF if minimizing else -INF

        for move in moves:
            with board.speculative(move):
                value = self.minimax(board, difficulty, maximizing_white=minimizing)
            if noise > 0:
                value = int(value + self.rng.uniform(-1.0, 1.0) * noise)
            if (value < best_value) if minimizing else (value > best_value):
                best_value = value
                best_move = move

        logger.info(format_search_info(difficulty, best_value, self.nodes,
                                       time.time() - start_time, best_move, len(moves)))
        return best_move

    def start_search(self, board: Board, difficulty: Optional[int] = None,
                     callback: Optional[Callable[[Move], None]] = None,
                     color: Color = Color.BLACK):
        """Search a copy of board on a worker thread and hand the move to callback."""
        if self._thread and self._thread.is_alive():
            return
        difficulty = check_difficulty(self.difficulty if difficulty is None else difficulty)
        self._stop_event.clear()
        search_board = board.copy()

        def worker():
            try:
                move = self._select(search_board, difficulty, color)
            except SearchCancelled:
                logger.info("Search cancelled after %d nodes", self.nodes)
                move = NULL_MOVE
            if callback:
                callback(move)

        self._thread = threading.Thread(target=worker, daemon=True)
        self._thread.start()

    def is_searching(self) -> bool:
        return bool(self._thread and self._thread.is_alive())

    def wait(self, timeout: Optional[float] = None):
        if self._thread:
            self._thread.join(timeout=timeout)

    def stop(self):
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=0.2)
