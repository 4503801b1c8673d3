"""
Board representation for TicTacToe.

A board is a flat sequence of 9 cells in row-major order:

     0 | 1 | 2
    ---+---+---
     3 | 4 | 5
    ---+---+---
     6 | 7 | 8

Each cell is None (empty) or a Mark.
"""

from enum import Enum
from typing import List, Optional, Sequence

from .config import EngineConfig
from .errors import InvalidBoard, InvalidInput


class Mark(Enum):
    """The two player symbols."""
    X = "X"
    O = "O"

    def opposite(self) -> "Mark":
        """Get the other mark."""
        return Mark.O if self == Mark.X else Mark.X


Cell = Optional[Mark]
Board = Sequence[Cell]


def new_board() -> List[Cell]:
    """Create an empty board."""
    return [None] * EngineConfig.CELL_COUNT


def validate_board(board: Board) -> None:
    """
    Reject anything that is not a 9-cell sequence of None / Mark.

    Raises:
        InvalidBoard: if the board is malformed.
    """
    if not isinstance(board, (list, tuple)):
        raise InvalidBoard(f"Board must be a list or tuple, got {type(board).__name__}")

    if len(board) != EngineConfig.CELL_COUNT:
        raise InvalidBoard(
            f"Board must have {EngineConfig.CELL_COUNT} cells, got {len(board)}"
        )

    for index, cell in enumerate(board):
        if cell is not None and not isinstance(cell, Mark):
            raise InvalidBoard(f"Cell {index} holds {cell!r}, expected None or a Mark")


def validate_symbols(ai_symbol: Mark, human_symbol: Mark) -> None:
    """
    Check that the two player symbols are distinct Marks.

    Raises:
        InvalidInput: if either symbol is not a Mark, or both are the same.
    """
    for name, symbol in (("ai_symbol", ai_symbol), ("human_symbol", human_symbol)):
        if not isinstance(symbol, Mark):
            raise InvalidInput(f"{name} must be a Mark, got {symbol!r}")

    if ai_symbol == human_symbol:
        raise InvalidInput(f"AI and human cannot both play {ai_symbol.value}")


def empty_cells(board: Board) -> List[int]:
    """Indices of all empty cells, in ascending order."""
    return [index for index, cell in enumerate(board) if cell is None]


def place(board: Board, index: int, mark: Mark) -> List[Cell]:
    """Return a copy of the board with mark placed at index."""
    new = list(board)
    new[index] = mark
    return new


def render_board(board: Board) -> str:
    """Text picture of the board; empty cells show their 1-9 number."""
    rows = []
    for row in range(EngineConfig.BOARD_SIZE):
        cells = []
        for col in range(EngineConfig.BOARD_SIZE):
            index = row * EngineConfig.BOARD_SIZE + col
            cell = board[index]
            cells.append(cell.value if cell is not None else str(index + 1))
        rows.append(" " + " | ".join(cells))
    return "\n---+---+---\n".join(rows)
