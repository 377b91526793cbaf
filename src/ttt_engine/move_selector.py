"""
Computer move selection for the three difficulty tiers.
- easy: uniform random empty cell.
- medium: complete a line, else block the opponent's line, else easy.
- hard: exhaustive minimax (see solver).
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Sequence

import numpy as np

from .errors import InvalidStateError
from .game_basics import Player, evaluate, legal_moves, serialize_board
from .solver import best_move
from .tactics import completing_move


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def random_move(board: Sequence[str], rng: Optional[np.random.Generator] = None) -> int:
    moves = legal_moves(board)
    if not moves:
        raise InvalidStateError(f"No empty cell on board {serialize_board(board)}")
    rng = rng if rng is not None else np.random.default_rng()
    return int(rng.choice(moves))


def heuristic_move(board: Sequence[str], computer: Player, rng: Optional[np.random.Generator] = None) -> int:
    win = completing_move(board, computer)
    if win is not None:
        return win
    block = completing_move(board, Player(computer).opponent())
    if block is not None:
        return block
    return random_move(board, rng)


def select_move(
    board: Sequence[str],
    difficulty: Difficulty,
    computer_player: Player = Player.O,
    rng: Optional[np.random.Generator] = None,
) -> int:
    result = evaluate(board)
    if result.is_over:
        raise InvalidStateError(
            f"Cannot select a move on a finished board {serialize_board(board)} ({result.status})"
        )
    difficulty = Difficulty(difficulty)
    computer_player = Player(computer_player)
    if difficulty is Difficulty.EASY:
        move = random_move(board, rng)
    elif difficulty is Difficulty.MEDIUM:
        move = heuristic_move(board, computer_player, rng)
    else:
        move = best_move(board, computer_player)
    logging.debug("select_move board=%s difficulty=%s player=%s move=%d",
                  serialize_board(board), difficulty.value, computer_player.value, move)
    return move
