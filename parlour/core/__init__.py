"""Core engine components: board, rules, move generation, evaluator and search."""

from .board import Board
from .evaluator import Evaluator
from .movegen import all_legal_moves
from .pieces import Color, Kind, Move, NO_SELECTION, NULL_MOVE, Piece, Position
from .rules import is_legal, is_path_clear
from .search import SearchCancelled, SearchEngine
