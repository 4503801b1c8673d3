"""
Move validator for TicTacToe.
Checks a proposed move before the caller applies it.
"""

from dataclasses import dataclass
from typing import List, Optional

from .board import Board, empty_cells
from .config import EngineConfig
from .win_checker import WinChecker


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules:
    1. Game must not be over
    2. Index must be on the board (0-8)
    3. Can only place on empty cells

    An illegal move is a normal answer here, not an exception. Only a
    malformed board raises (InvalidBoard).
    """

    def __init__(self, win_checker: Optional[WinChecker] = None):
        self.win_checker = win_checker or WinChecker()

    def validate_move(self, board: Board, index: int) -> ValidationResult:
        """
        Validate a move.

        Args:
            board: Current board.
            index: Cell to place a mark on (0-8).

        Returns:
            ValidationResult with is_valid and error_message.
        """
        if self.win_checker.detect_outcome(board).is_over:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        if isinstance(index, bool) or not isinstance(index, int):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position {index!r}. Must be an integer."
            )

        if not (0 <= index < EngineConfig.CELL_COUNT):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position {index}. Must be 0-{EngineConfig.CELL_COUNT - 1}."
            )

        if board[index] is not None:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by {board[index].value}"
            )

        return ValidationResult(is_valid=True)

    def get_valid_moves(self, board: Board) -> List[int]:
        """
        Get all valid moves.

        Returns:
            List of empty cell indices, or [] if the game is over.
        """
        if self.win_checker.detect_outcome(board).is_over:
            return []

        return empty_cells(board)
