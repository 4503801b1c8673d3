"""
Errors raised by the TicTacToe engine.
"""


class InvalidInput(ValueError):
    """Raised when a caller passes a malformed board or bad player symbols."""


class InvalidBoard(InvalidInput):
    """The board is not a 9-cell sequence of None / Mark values."""
