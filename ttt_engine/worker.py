"""
Background move worker.

The AI search is synchronous. A UI that wants to stay responsive while
the AI "thinks" hands the request to a MoveWorker and gets a Future back.
Requests carry a snapshot of the board; if the board has changed by the
time the answer arrives, the caller should throw the answer away.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from .ai_player import Difficulty, select_move
from .board import Board, Cell, Mark, validate_board, validate_symbols

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveRequest:
    """A submitted move request and the board it was computed for."""
    board: Tuple[Cell, ...]
    ai_symbol: Mark
    human_symbol: Mark
    difficulty: Difficulty
    future: Future

    def is_stale(self, current_board: Board) -> bool:
        """True if the caller's board no longer matches the snapshot."""
        return tuple(current_board) != self.board


class MoveWorker:
    """
    Runs select_move() on a single background thread.

    Usage:
        with MoveWorker() as worker:
            request = worker.submit(board, Mark.O, Mark.X, Difficulty.HARD)
            move = request.future.result()
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="ttt-ai")
        self._pending: Optional[MoveRequest] = None

    def submit(
        self,
        board: Board,
        ai_symbol: Mark,
        human_symbol: Mark,
        difficulty: Difficulty = Difficulty.HARD,
        callback: Optional[Callable[[Optional[int]], None]] = None
    ) -> MoveRequest:
        """
        Queue a move computation.

        Input is checked here, so InvalidInput is raised to the caller
        right away instead of surfacing later through the future.

        Args:
            board: Current board (copied before the call returns).
            ai_symbol: Mark the AI plays.
            human_symbol: Mark the opponent plays.
            difficulty: EASY, MEDIUM or HARD.
            callback: Called once with the move (or None) when done.
                Not called if the request fails or is cancelled.

        Returns:
            The MoveRequest holding the board snapshot and the Future.
        """
        validate_board(board)
        validate_symbols(ai_symbol, human_symbol)

        snapshot = tuple(board)
        future = self._executor.submit(
            select_move, snapshot, ai_symbol, human_symbol, difficulty, self.rng
        )

        if callback is not None:
            def _deliver(done: Future):
                if done.cancelled() or done.exception() is not None:
                    return
                callback(done.result())
            future.add_done_callback(_deliver)

        request = MoveRequest(snapshot, ai_symbol, human_symbol, difficulty, future)
        self._pending = request
        logger.debug("Submitted %s move request for %s", difficulty.name, ai_symbol.value)
        return request

    def cancel_pending(self) -> bool:
        """
        Cancel the latest request if it has not started yet.

        Returns:
            True if it was cancelled. A running request cannot be
            stopped; check MoveRequest.is_stale() on its result instead.
        """
        if self._pending is None:
            return False
        cancelled = self._pending.future.cancel()
        self._pending = None
        return cancelled

    def shutdown(self, wait: bool = True):
        """Stop the worker thread."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "MoveWorker":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
