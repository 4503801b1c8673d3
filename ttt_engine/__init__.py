"""
TicTacToe Engine
================
Outcome detection and a computer opponent for 3x3 TicTacToe.

Board cells are numbered 0-8 in row-major order; each holds None or a Mark.
"""

__version__ = "1.0.0"

from .errors import InvalidInput, InvalidBoard
from .config import EngineConfig
from .board import Mark, new_board, empty_cells, render_board
from .win_checker import Outcome, WinChecker, detect_outcome
from .move_validator import MoveValidator, ValidationResult
from .ai_player import AIPlayer, Difficulty, select_move
from .game_state import GameState, Move
from .worker import MoveRequest, MoveWorker
