"""
Tests for the AI opponent and the background move worker.

Random tiers are checked with a seeded numpy Generator (for frequency
properties) and a ScriptedRandom stub (for exact branch coverage).

Run with pytest, or directly: python test_ai_player.py
"""

import functools
import sys
import threading

import numpy as np
import pytest

from ttt_engine import (
    AIPlayer,
    Difficulty,
    InvalidBoard,
    InvalidInput,
    Mark,
    MoveWorker,
    WinChecker,
    detect_outcome,
    new_board,
    select_move,
)
from ttt_engine.board import place

X, O, _ = Mark.X, Mark.O, None


class ScriptedRandom:
    """Stand-in for numpy's Generator that replays fixed answers."""

    def __init__(self, randoms=(), picks=()):
        self.randoms = list(randoms)
        self.picks = list(picks)

    def random(self):
        return self.randoms.pop(0)

    def integers(self, high):
        pick = self.picks.pop(0)
        assert 0 <= pick < high
        return pick


def play_out(x_player: AIPlayer, o_player: AIPlayer, board=None):
    """Play a full game between two AIs and return the final outcome."""
    board = list(board) if board is not None else new_board()
    players = {X: x_player, O: o_player}
    turn = X if board.count(X) == board.count(O) else O

    while not detect_outcome(board).is_over:
        move = players[turn].select_move(board)
        assert board[move] is None
        board[move] = turn
        turn = turn.opposite()

    return detect_outcome(board)


# ==================== HARD ====================

def test_hard_takes_immediate_win_over_block():
    board = [X, X, _, O, O, _, _, _, _]
    assert select_move(board, X, O, Difficulty.HARD) == 2
    assert select_move(board, O, X, Difficulty.HARD) == 5


def test_hard_blocks_opponent_win():
    board = [X, X, _, _, O, _, _, _, _]
    assert select_move(board, O, X, Difficulty.HARD) == 2


def test_hard_ties_go_to_lowest_index():
    # Every opening move draws under perfect play
    assert select_move(new_board(), X, O, Difficulty.HARD) == 0


def test_hard_prefers_faster_win():
    # O wins at once on 6 (score 9) rather than dragging the game out
    board = [O, X, X, O, _, _, _, X, _]
    assert select_move(board, O, X, Difficulty.HARD) == 6


def test_hard_vs_hard_draws():
    outcome = play_out(AIPlayer(X), AIPlayer(O))
    assert outcome.winner is None
    assert outcome.is_draw


def count_losses(ai: AIPlayer, board, turn, seen) -> int:
    """Walk every opponent reply against the AI; count games the AI loses."""
    key = (tuple(board), turn)
    if key in seen:
        return 0
    seen.add(key)

    outcome = detect_outcome(board)
    if outcome.is_over:
        return int(outcome.winner == ai.opponent)

    if turn == ai.player:
        replies = [ai.get_best_move(board)]
    else:
        replies = [index for index, cell in enumerate(board) if cell is None]

    return sum(
        count_losses(ai, place(board, index, turn), turn.opposite(), seen)
        for index in replies
    )


@pytest.mark.parametrize("mark", [X, O])
def test_hard_never_loses_against_any_opponent(mark):
    assert count_losses(AIPlayer(mark), new_board(), X, set()) == 0


@functools.lru_cache(maxsize=None)
def plain_minimax(board, turn, player, depth):
    """Unpruned minimax score, same scoring as the engine."""
    winner = WinChecker().check_winner(board)
    if winner == player:
        return 10 - depth
    if winner == player.opposite():
        return depth - 10

    moves = [index for index, cell in enumerate(board) if cell is None]
    if not moves:
        return 0

    scores = [
        plain_minimax(tuple(place(board, index, turn)), turn.opposite(), player, depth + 1)
        for index in moves
    ]
    return max(scores) if turn == player else min(scores)


def plain_best_move(board, player):
    """Lowest-index move with the strictly highest unpruned score."""
    best_score, best_move = float('-inf'), None
    for index, cell in enumerate(board):
        if cell is not None:
            continue
        score = plain_minimax(tuple(place(board, index, player)), player.opposite(), player, 1)
        if score > best_score:
            best_score, best_move = score, index
    return best_move


def reachable_positions():
    """Every non-terminal position reachable from the empty board, with side to move."""
    found = {}
    stack = [(tuple(new_board()), X)]
    while stack:
        board, turn = stack.pop()
        if board in found or detect_outcome(board).is_over:
            continue
        found[board] = turn
        for index, cell in enumerate(board):
            if cell is None:
                stack.append((tuple(place(board, index, turn)), turn.opposite()))
    return found


def test_pruned_search_matches_plain_minimax_everywhere():
    positions = reachable_positions()
    assert len(positions) == 4520

    players = {X: AIPlayer(X), O: AIPlayer(O)}
    for board, turn in positions.items():
        assert players[turn].get_best_move(board) == plain_best_move(board, turn), board


def test_hard_counts_evaluated_positions():
    ai = AIPlayer(O)
    ai.get_best_move([X, _, _, _, _, _, _, _, _])
    assert ai.moves_evaluated > 0


# ==================== EASY ====================

def test_easy_prefers_center_and_corners_but_reaches_every_cell():
    ai = AIPlayer(X, difficulty=Difficulty.EASY, rng=np.random.default_rng(1234))
    counts = [0] * 9
    for _trial in range(4000):
        counts[ai.select_move(new_board())] += 1

    strong = sum(counts[i] for i in (0, 2, 4, 6, 8))
    edges = sum(counts[i] for i in (1, 3, 5, 7))
    assert strong > edges
    assert all(count > 0 for count in counts)


def test_easy_bias_branch_picks_from_strong_cells():
    ai = AIPlayer(X, difficulty=Difficulty.EASY, rng=ScriptedRandom(randoms=[0.1], picks=[0]))
    assert ai.select_move(new_board()) == 4


def test_easy_uniform_branch_picks_any_empty_cell():
    ai = AIPlayer(X, difficulty=Difficulty.EASY, rng=ScriptedRandom(randoms=[0.5], picks=[1]))
    assert ai.select_move(new_board()) == 1


def test_easy_falls_back_when_strong_cells_taken():
    board = [X, _, O, _, X, _, O, _, O]
    ai = AIPlayer(X, difficulty=Difficulty.EASY, rng=ScriptedRandom(randoms=[0.1], picks=[2]))
    assert ai.select_move(board) == 5


# ==================== MEDIUM ====================

def test_medium_plays_best_move_most_of_the_time():
    board = [X, X, _, O, O, _, _, _, _]
    ai = AIPlayer(X, difficulty=Difficulty.MEDIUM, rng=ScriptedRandom(randoms=[0.5]))
    assert ai.select_move(board) == 2


def test_medium_deviation_skips_best_move():
    # Best is 0; every opening move is safe, so pick from 1..8
    ai = AIPlayer(X, difficulty=Difficulty.MEDIUM, rng=ScriptedRandom(randoms=[0.9], picks=[3]))
    assert ai.select_move(new_board()) == 4


def test_medium_deviation_keeps_only_safe_move():
    # Blocking at 2 is the only safe move, so it is played even on a deviation
    board = [X, X, _, _, O, _, _, _, _]
    ai = AIPlayer(O, difficulty=Difficulty.MEDIUM, rng=ScriptedRandom(randoms=[0.9], picks=[0]))
    assert ai.select_move(board) == 2


def test_medium_deviation_with_no_safe_move_picks_any_cell():
    # X threatens both 2 and 6; whatever O does, X wins next move
    board = [X, X, _, X, O, _, _, _, O]
    ai = AIPlayer(O, difficulty=Difficulty.MEDIUM, rng=ScriptedRandom(randoms=[0.9], picks=[3]))
    assert ai.select_move(board) == 7


def test_medium_always_returns_legal_move():
    ai = AIPlayer(O, difficulty=Difficulty.MEDIUM, rng=np.random.default_rng(99))
    board = [X, _, _, _, _, _, _, _, _]
    for _trial in range(50):
        move = ai.select_move(board)
        assert move is not None
        assert board[move] is None


def test_non_losing_moves():
    ai = AIPlayer(O)
    assert ai.non_losing_moves([X, X, _, X, O, _, _, _, O]) == []
    # Winning at 2 is safe; everything else lets X win at 2 or 5
    assert ai.non_losing_moves([O, O, _, X, X, _, X, _, _]) == [2]
    assert ai.non_losing_moves(new_board()) == list(range(9))


# ==================== FINISHED GAMES / BAD INPUT ====================

@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_no_move_on_finished_game(difficulty):
    won = [X, X, X, O, O, _, _, _, _]
    drawn = [X, O, X, X, O, O, O, X, X]
    assert select_move(won, O, X, difficulty) is None
    assert select_move(drawn, O, X, difficulty) is None


def test_same_symbols_rejected():
    with pytest.raises(InvalidInput):
        select_move(new_board(), X, X, Difficulty.HARD)


def test_non_mark_symbols_rejected():
    with pytest.raises(InvalidInput):
        select_move(new_board(), "X", O, Difficulty.HARD)
    with pytest.raises(InvalidInput):
        AIPlayer("X")


def test_bad_board_rejected_before_search():
    with pytest.raises(InvalidBoard):
        select_move([_] * 8, X, O, Difficulty.HARD)


def test_unknown_difficulty_rejected():
    with pytest.raises(InvalidInput):
        AIPlayer(X).select_move(new_board(), difficulty="impossible")


def test_unknown_difficulty_rejected_on_finished_game():
    won = [X, X, X, O, O, _, _, _, _]
    with pytest.raises(InvalidInput):
        select_move(won, X, O, "bogus")


def test_select_move_does_not_modify_board():
    board = [X, _, _, _, O, _, _, _, _]
    snapshot = list(board)
    select_move(board, X, O, Difficulty.HARD)
    assert board == snapshot


# ==================== WORKER ====================

def test_worker_returns_move_through_future_and_callback():
    received = []
    delivered = threading.Event()

    def on_move(move):
        received.append(move)
        delivered.set()

    with MoveWorker() as worker:
        request = worker.submit([X, X, _, _, O, _, _, _, _], O, X, Difficulty.HARD, callback=on_move)
        assert request.future.result(timeout=10) == 2
        assert delivered.wait(timeout=10)

    assert received == [2]


def test_worker_snapshot_detects_stale_board():
    board = [X, _, _, _, _, _, _, _, _]
    with MoveWorker() as worker:
        request = worker.submit(board, O, X, Difficulty.HARD)
        request.future.result(timeout=10)

    assert not request.is_stale(board)
    board[8] = X
    assert request.is_stale(board)


def test_worker_rejects_bad_input_immediately():
    with MoveWorker() as worker:
        with pytest.raises(InvalidInput):
            worker.submit(new_board(), O, O)
        assert worker.cancel_pending() is False


def run_all_tests():
    """Run all tests."""
    print("="*60)
    print("   TicTacToe Engine - AI Tests")
    print("="*60)
    return pytest.main([__file__, "-q"])


if __name__ == "__main__":
    sys.exit(run_all_tests())
