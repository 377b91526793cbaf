"""
Engine-vs-engine matches between difficulty tiers.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .game_basics import GameResult, Player, empty_board, evaluate
from .move_selector import Difficulty, select_move


@dataclass
class GameRecord:
    moves: List[int]
    result: GameResult


@dataclass
class MatchSummary:
    x_difficulty: Difficulty
    o_difficulty: Difficulty
    games: int = 0
    x_wins: int = 0
    o_wins: int = 0
    draws: int = 0
    records: List[GameRecord] = field(default_factory=list, repr=False)

    def add(self, record: GameRecord) -> None:
        self.games += 1
        self.records.append(record)
        if record.result.is_draw:
            self.draws += 1
        elif record.result.winner is Player.X:
            self.x_wins += 1
        else:
            self.o_wins += 1

    def as_metrics(self) -> dict:
        n = self.games or 1
        return {
            "games": float(self.games),
            "x_wins": float(self.x_wins),
            "o_wins": float(self.o_wins),
            "draws": float(self.draws),
            "x_win_rate": self.x_wins / n,
            "o_win_rate": self.o_wins / n,
            "draw_rate": self.draws / n,
        }


def play_game(
    x_difficulty: Difficulty,
    o_difficulty: Difficulty,
    first: Player = Player.X,
    rng: Optional[np.random.Generator] = None,
) -> GameRecord:
    rng = rng if rng is not None else np.random.default_rng()
    tiers = {Player.X: Difficulty(x_difficulty), Player.O: Difficulty(o_difficulty)}
    board = empty_board()
    player = Player(first)
    moves: List[int] = []
    result = evaluate(board)
    while not result.is_over:
        mv = select_move(board, tiers[player], player, rng=rng)
        board[mv] = player.value
        moves.append(mv)
        result = evaluate(board)
        player = player.opponent()
    return GameRecord(moves=moves, result=result)


def run_matches(
    x_difficulty: Difficulty,
    o_difficulty: Difficulty,
    games: int,
    seed: Optional[int] = None,
    first: Player = Player.X,
) -> MatchSummary:
    rng = np.random.default_rng(seed)
    summary = MatchSummary(Difficulty(x_difficulty), Difficulty(o_difficulty))
    for i in range(games):
        summary.add(play_game(x_difficulty, o_difficulty, first=first, rng=rng))
        if (i + 1) % 100 == 0:
            logging.debug("played %d/%d games", i + 1, games)
    return summary
