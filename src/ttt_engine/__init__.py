"""ttt_engine package.

Tic-tac-toe rules evaluation, computer move selection (random, heuristic and
minimax), a game session for front ends, and a simple CLI.

Convenience imports are exposed for common workflows.
"""

from .arena import run_matches
from .errors import BoardFormatError, EngineError, InvalidMoveError, InvalidStateError
from .game_basics import WINNING_LINES, GameResult, Player, empty_board, evaluate
from .move_selector import Difficulty, select_move
from .session import GameSession, Scoreboard
from .settings import SessionConfig
from .solver import best_move, minimax

__all__ = [
    "evaluate",
    "select_move",
    "best_move",
    "minimax",
    "run_matches",
    "empty_board",
    "WINNING_LINES",
    "GameResult",
    "Player",
    "Difficulty",
    "GameSession",
    "Scoreboard",
    "SessionConfig",
    "EngineError",
    "InvalidMoveError",
    "InvalidStateError",
    "BoardFormatError",
]
