"""
Game state management for TicTacToe.
Tracks the board, current player, and move history for one game.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .board import Cell, Mark, new_board
from .move_validator import MoveValidator
from .win_checker import Outcome, WinChecker

logger = logging.getLogger(__name__)


@dataclass
class Move:
    """
    A move in the game.
    """
    player: Mark            # Who made the move
    index: int              # Cell (0-8)
    move_number: int        # Which move this is in the game (0-8)


@dataclass
class GameState:
    """
    The complete state of one TicTacToe game.

    Tracks:
    - The 9-cell board
    - Current player
    - Move history
    - Game outcome (ongoing, won, draw)
    """

    board: List[Cell] = field(default_factory=new_board)
    current_player: Mark = Mark.X
    moves: List[Move] = field(default_factory=list)
    outcome: Outcome = field(default_factory=Outcome)

    @property
    def is_game_over(self) -> bool:
        return self.outcome.is_over

    def make_move(self, index: int) -> bool:
        """
        Place the current player's mark at the given cell.

        Args:
            index: Cell index (0-8).

        Returns:
            True if move was successful, False otherwise.
        """
        result = MoveValidator().validate_move(self.board, index)
        if not result.is_valid:
            logger.info("Rejected move %r: %s", index, result.error_message)
            return False

        self.board[index] = self.current_player
        self.moves.append(Move(
            player=self.current_player,
            index=index,
            move_number=len(self.moves)
        ))

        self.outcome = WinChecker().detect_outcome(self.board)
        self.current_player = self.current_player.opposite()

        return True

    def reset(self, first_player: Mark = Mark.X):
        """Start a new game on the same object."""
        self.board = new_board()
        self.current_player = first_player
        self.moves = []
        self.outcome = Outcome()

    def copy(self) -> "GameState":
        """Create a copy that shares nothing mutable with this one."""
        return GameState(
            board=list(self.board),
            current_player=self.current_player,
            moves=list(self.moves),
            outcome=self.outcome
        )
