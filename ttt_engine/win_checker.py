"""
Win checker for TicTacToe.
Checks if a player has won or if the game is a draw.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .board import Board, Mark, validate_board


Line = Tuple[int, int, int]


@dataclass(frozen=True)
class Outcome:
    """
    Result of looking at a board.

    winner and is_draw are never both set: a full board with a
    completed line is a win, not a draw.
    """
    winner: Optional[Mark] = None
    is_draw: bool = False
    winning_line: Optional[Line] = None

    @property
    def is_over(self) -> bool:
        return self.winner is not None or self.is_draw


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 cells of the same mark in a row
    (horizontally, vertically, or diagonally)
    """

    # All possible winning lines, as board indices.
    # Order matters: the first complete line found is the one reported.
    WINNING_LINES: Tuple[Line, ...] = (
        # Rows
        (0, 1, 2),
        (3, 4, 5),
        (6, 7, 8),
        # Columns
        (0, 3, 6),
        (1, 4, 7),
        (2, 5, 8),
        # Diagonals
        (0, 4, 8),
        (2, 4, 6),
    )

    def check_winner(self, board: Board) -> Optional[Mark]:
        """
        Check if there's a winner.

        Args:
            board: The game board (assumed valid).

        Returns:
            The winning Mark, or None if no winner yet.
        """
        line = self.get_winning_line(board)
        return board[line[0]] if line is not None else None

    def get_winning_line(self, board: Board) -> Optional[Line]:
        """
        Get the winning line if there is one.

        Returns:
            The first complete line in WINNING_LINES order, or None.
        """
        for line in self.WINNING_LINES:
            a, b, c = line
            if board[a] is not None and board[a] == board[b] == board[c]:
                return line
        return None

    def check_draw(self, board: Board) -> bool:
        """
        Check if the game is a draw: all cells filled AND no winner.
        """
        if self.check_winner(board) is not None:
            return False
        return all(cell is not None for cell in board)

    def detect_outcome(self, board: Board) -> Outcome:
        """
        Work out the outcome of a board.

        Args:
            board: The game board.

        Returns:
            Outcome with winner (if any) and draw flag.

        Raises:
            InvalidBoard: if the board is malformed.
        """
        validate_board(board)

        line = self.get_winning_line(board)
        if line is not None:
            return Outcome(winner=board[line[0]], is_draw=False, winning_line=line)

        return Outcome(winner=None, is_draw=all(cell is not None for cell in board))


_default_checker = WinChecker()


def detect_outcome(board: Board) -> Outcome:
    """Module-level shortcut for WinChecker().detect_outcome(board)."""
    return _default_checker.detect_outcome(board)
