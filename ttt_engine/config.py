"""
Engine configuration for TicTacToe.
All the tunable values for the AI opponent and logging.

The difficulty numbers are product choices: change them only if you
want the AI to "feel" different.
"""

import os


class EngineConfig:
    """
    Configuration class for engine settings.
    """

    # ==================== BOARD SETTINGS ====================
    BOARD_SIZE = 3
    CELL_COUNT = BOARD_SIZE * BOARD_SIZE  # 9 cells, row-major

    CENTER = 4
    CORNERS = (0, 2, 6, 8)

    # Cells the Easy AI likes to grab (center first, then corners)
    STRONG_CELLS = (CENTER,) + CORNERS

    # ==================== DIFFICULTY SETTINGS ====================
    # Easy: chance to pick from STRONG_CELLS instead of any empty cell
    EASY_BIAS_PROBABILITY = 0.3

    # Medium: chance to play the optimal (Hard) move
    MEDIUM_OPTIMAL_PROBABILITY = 0.7

    # ==================== SEARCH SETTINGS ====================
    # Terminal score for a win; depth is subtracted so faster wins score higher
    WIN_SCORE = 10

    # ==================== LOGGING ====================
    LOG_LEVEL = os.getenv("TTT_LOG_LEVEL", "WARNING").upper()
    LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
