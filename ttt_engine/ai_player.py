"""
AI player for TicTacToe.
Picks a move for the computer at one of three difficulty levels.

- EASY:   random moves, with a light preference for center and corners
- MEDIUM: mostly optimal, sometimes a different move that is still safe
- HARD:   full Minimax, never loses
"""

import logging
from enum import Enum
from typing import List, Optional

import numpy as np

from .board import Board, Mark, empty_cells, place, validate_board, validate_symbols
from .config import EngineConfig
from .errors import InvalidInput
from .win_checker import WinChecker

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """AI difficulty levels."""
    EASY = 1      # Random moves
    MEDIUM = 2    # Some strategy
    HARD = 3      # Full minimax


class AIPlayer:
    """
    An AI that plays TicTacToe.

    On HARD it uses the Minimax algorithm and will always play
    optimally - it will win if possible, block the opponent if
    needed, and never lose (at worst, draw).

    The random source is injected so tests can seed it. Anything with
    numpy Generator's random() and integers(n) methods works.
    """

    def __init__(
        self,
        player: Mark = Mark.O,
        opponent: Optional[Mark] = None,
        difficulty: Difficulty = Difficulty.HARD,
        config: Optional[EngineConfig] = None,
        rng: Optional[np.random.Generator] = None
    ):
        """
        Initialize the AI player.

        Args:
            player: Which mark the AI plays (default: O)
            opponent: The opponent's mark (default: the other one)
            difficulty: Default difficulty for select_move()
            config: Engine settings
            rng: Random source for EASY / MEDIUM
        """
        if opponent is None and isinstance(player, Mark):
            opponent = player.opposite()
        validate_symbols(player, opponent)

        self.player = player
        self.opponent = opponent
        self.difficulty = difficulty
        self.config = config or EngineConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.win_checker = WinChecker()

        # Keep track of how many positions we've evaluated (for debugging)
        self.moves_evaluated = 0

    def select_move(self, board: Board, difficulty: Optional[Difficulty] = None) -> Optional[int]:
        """
        Choose the next move.

        Args:
            board: Current board.
            difficulty: Overrides the player's default difficulty.

        Returns:
            Cell index (0-8), or None if the game is already over.

        Raises:
            InvalidBoard: if the board is malformed.
            InvalidInput: if the difficulty is not a Difficulty.
        """
        validate_board(board)
        difficulty = difficulty or self.difficulty
        if not isinstance(difficulty, Difficulty):
            raise InvalidInput(f"Unknown difficulty: {difficulty!r}")

        if self.win_checker.detect_outcome(board).is_over:
            return None

        if difficulty == Difficulty.EASY:
            move = self._get_easy_move(board)
        elif difficulty == Difficulty.MEDIUM:
            move = self._get_medium_move(board)
        else:
            move = self.get_best_move(board)

        logger.debug("%s (%s) plays %s", self.player.value, difficulty.name, move)
        return move

    def get_best_move(self, board: Board) -> Optional[int]:
        """
        Get the best move for the current position.

        Ties go to the lowest index: a later move only replaces the
        current best if it scores strictly higher.

        Args:
            board: Current board.

        Returns:
            Index of best move, or None if no moves available.
        """
        self.moves_evaluated = 0

        if self.win_checker.check_winner(board) is not None:
            return None

        valid_moves = empty_cells(board)

        if not valid_moves:
            return None

        # Special case: if only one move, just take it
        if len(valid_moves) == 1:
            return valid_moves[0]

        best_score = float('-inf')
        best_move = valid_moves[0]

        for index in valid_moves:
            new_board = place(board, index, self.player)

            # Alpha is the best score so far; a worse branch may be cut short
            # but can never come back strictly higher than it.
            score = self._minimax(new_board, depth=1, is_maximizing=False, alpha=best_score)

            if score > best_score:
                best_score = score
                best_move = index

        logger.debug(
            "AI evaluated %d positions. Best move: %d (score: %s)",
            self.moves_evaluated, best_move, best_score
        )

        return best_move

    def _minimax(
        self,
        board: Board,
        depth: int,
        is_maximizing: bool,
        alpha: float = float('-inf'),
        beta: float = float('inf')
    ) -> float:
        """
        Minimax algorithm with alpha-beta pruning.

        Args:
            board: Position to evaluate (never modified).
            depth: Plies played since the root.
            is_maximizing: True if it's the AI's turn.
            alpha: Alpha value for pruning.
            beta: Beta value for pruning.

        Returns:
            The score of the position from the AI's point of view.
        """
        self.moves_evaluated += 1

        # Check terminal states
        winner = self.win_checker.check_winner(board)

        if winner == self.player:
            return self.config.WIN_SCORE - depth  # Win (prefer faster wins)
        elif winner == self.opponent:
            return depth - self.config.WIN_SCORE  # Loss (prefer slower losses)

        valid_moves = empty_cells(board)

        if not valid_moves:
            return 0  # Draw

        if is_maximizing:
            max_score = float('-inf')
            for index in valid_moves:
                new_board = place(board, index, self.player)
                score = self._minimax(new_board, depth + 1, False, alpha, beta)
                max_score = max(max_score, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break  # Prune
            return max_score
        else:
            min_score = float('inf')
            for index in valid_moves:
                new_board = place(board, index, self.opponent)
                score = self._minimax(new_board, depth + 1, True, alpha, beta)
                min_score = min(min_score, score)
                beta = min(beta, score)
                if beta <= alpha:
                    break  # Prune
            return min_score

    def non_losing_moves(self, board: Board) -> List[int]:
        """
        Moves the opponent cannot punish with an immediate win.

        Only looks one reply ahead, so a move that loses to a two-move
        plan still counts as safe.

        Returns:
            Indices (ascending) that either win on the spot or leave the
            opponent no winning reply.
        """
        safe = []

        for index in empty_cells(board):
            after = place(board, index, self.player)

            if self.win_checker.check_winner(after) == self.player:
                safe.append(index)
                continue

            opponent_wins = any(
                self.win_checker.check_winner(place(after, reply, self.opponent)) == self.opponent
                for reply in empty_cells(after)
            )
            if not opponent_wins:
                safe.append(index)

        return safe

    def _get_easy_move(self, board: Board) -> int:
        """Random move, sometimes steered to center / corners."""
        valid_moves = empty_cells(board)
        strong = [index for index in self.config.STRONG_CELLS if board[index] is None]

        if strong and self.rng.random() < self.config.EASY_BIAS_PROBABILITY:
            return self._choice(strong)

        return self._choice(valid_moves)

    def _get_medium_move(self, board: Board) -> int:
        """Optimal move most of the time, otherwise another safe move."""
        best_move = self.get_best_move(board)

        if self.rng.random() < self.config.MEDIUM_OPTIMAL_PROBABILITY:
            return best_move

        safe = self.non_losing_moves(board)
        alternatives = [index for index in safe if index != best_move]

        if alternatives:
            logger.debug("Medium AI deviates from %d, picking from %s", best_move, alternatives)
            return self._choice(alternatives)
        if safe:
            return self._choice(safe)

        return self._choice(empty_cells(board))

    def _choice(self, cells: List[int]) -> int:
        """Pick one cell uniformly at random."""
        return cells[int(self.rng.integers(len(cells)))]


def select_move(
    board: Board,
    ai_symbol: Mark,
    human_symbol: Mark,
    difficulty: Difficulty = Difficulty.HARD,
    rng: Optional[np.random.Generator] = None
) -> Optional[int]:
    """
    Pick the AI's next move.

    Args:
        board: Current board (9 cells of None / Mark).
        ai_symbol: Mark the AI plays.
        human_symbol: Mark the opponent plays.
        difficulty: EASY, MEDIUM or HARD.
        rng: Random source for EASY / MEDIUM.

    Returns:
        Cell index (0-8), or None if the game is over.

    Raises:
        InvalidInput: bad board or symbols, checked before any search.
    """
    validate_board(board)
    validate_symbols(ai_symbol, human_symbol)

    ai = AIPlayer(ai_symbol, human_symbol, difficulty=difficulty, rng=rng)
    return ai.select_move(board)
