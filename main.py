"""
Console TicTacToe against the computer.

This script ties together:
- Game state (board, turns, history)
- The AI opponent (run through a background MoveWorker)
- Outcome detection after every move

Run this script to play TicTacToe in the terminal!
"""

import argparse
from typing import List, Optional

import numpy as np

from ttt_engine import (
    Difficulty,
    GameState,
    InvalidInput,
    Mark,
    MoveValidator,
    MoveWorker,
    render_board,
)
from ttt_engine.logging_setup import setup_logging


class ConsoleGame:
    """
    One game of TicTacToe in the terminal.

    Game flow:
    1. Human moves first unless --ai-first; --human picks the mark
    2. Human types a cell number 1-9
    3. AI answers through the worker
    4. Repeat until someone wins or it's a draw
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.HARD,
        human: Mark = Mark.X,
        ai_first: bool = False,
        seed: Optional[int] = None
    ):
        self.difficulty = difficulty
        self.human_player = human
        self.ai_player = human.opposite()

        first_player = self.ai_player if ai_first else self.human_player
        self.game_state = GameState(current_player=first_player)
        self.validator = MoveValidator()
        self.worker = MoveWorker(rng=np.random.default_rng(seed))

    def play(self):
        """Play until the game is over or the human quits."""
        print("\n" + "="*40)
        print(f"   You: {self.human_player.value}   AI: {self.ai_player.value}")
        print(f"   Difficulty: {self.difficulty.name}")
        print("="*40)

        try:
            while not self.game_state.is_game_over:
                print("\n" + render_board(self.game_state.board))

                if self.game_state.current_player == self.ai_player:
                    self._ai_turn()
                elif not self._human_turn():
                    print("\nGame abandoned.")
                    return
        finally:
            self.worker.shutdown()

        self._announce_result()

    def _ai_turn(self):
        """Ask the worker for a move and apply it."""
        print("\nAI is thinking...")
        request = self.worker.submit(
            self.game_state.board,
            self.ai_player,
            self.human_player,
            self.difficulty
        )
        move = request.future.result()

        if move is None or request.is_stale(self.game_state.board):
            return

        self.game_state.make_move(move)
        print(f"AI plays {move + 1}")

    def _human_turn(self) -> bool:
        """
        Read one move from the human.

        Returns:
            False if the human wants to quit.
        """
        while True:
            text = input(f"\nYour move ({self.human_player.value}), 1-9 or q: ").strip().lower()

            if text in ("q", "quit", "exit"):
                return False

            try:
                index = int(text) - 1
            except ValueError:
                print("Please type a number from 1 to 9.")
                continue

            if not 0 <= index <= 8:
                print("Please type a number from 1 to 9.")
                continue

            try:
                result = self.validator.validate_move(self.game_state.board, index)
            except InvalidInput as e:
                print(f"ERROR: {e}")
                return False

            if not result.is_valid:
                print(result.error_message)
                continue

            self.game_state.make_move(index)
            return True

    def _announce_result(self):
        """Print the final board and who won."""
        print("\n" + render_board(self.game_state.board))

        winner = self.game_state.outcome.winner
        if winner == self.human_player:
            print("\n🎉 Congratulations! You won!")
        elif winner == self.ai_player:
            print("\n🤖 AI wins! Better luck next time!")
        else:
            print("\n🤝 It's a draw! Good game!")

        print("\n" + "="*40)


def build_parser() -> argparse.ArgumentParser:
    """Command-line options for the console game."""
    parser = argparse.ArgumentParser(description="TicTacToe vs. the computer")
    parser.add_argument(
        "--difficulty",
        type=str.lower,
        choices=[d.name.lower() for d in Difficulty],
        default="hard",
        help="AI difficulty level"
    )
    parser.add_argument(
        "--ai-first",
        action="store_true",
        help="Let the AI make the first move"
    )
    parser.add_argument(
        "--human",
        type=str.lower,
        choices=[m.value.lower() for m in Mark],
        default="x",
        help="Mark you play (the AI gets the other one)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the AI's random choices (easy / medium)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show engine debug logging"
    )
    return parser


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    setup_logging("DEBUG" if args.verbose else None)

    game = ConsoleGame(
        difficulty=Difficulty[args.difficulty.upper()],
        human=Mark(args.human.upper()),
        ai_first=args.ai_first,
        seed=args.seed
    )

    try:
        game.play()
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()
