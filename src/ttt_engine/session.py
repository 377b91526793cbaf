"""
Game session: the turn-keeping layer a front end drives.

The session owns one board, whose turn it is, whether the game is still
running, and a scoreboard for its own lifetime. It never waits: in
player-vs-computer mode the front end applies ``config.computer_delay``
itself and then calls ``computer_move``. A human move sent while the
computer is still to play is refused with ``InvalidMoveError``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .errors import InvalidMoveError
from .game_basics import Board, GameResult, Player, empty_board, evaluate, serialize_board
from .move_selector import select_move
from .settings import SessionConfig


@dataclass
class Scoreboard:
    x: int = 0
    o: int = 0
    draws: int = 0

    def record(self, result: GameResult) -> None:
        if result.is_draw:
            self.draws += 1
        elif result.is_win:
            if result.winner is Player.X:
                self.x += 1
            else:
                self.o += 1


class GameSession:
    def __init__(self, config: Optional[SessionConfig] = None, rng: Optional[np.random.Generator] = None) -> None:
        self.config = config if config is not None else SessionConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.scores = Scoreboard()
        self.board: Board = empty_board()
        self.current_player: Player = self.config.first_player
        self.active = True
        self.result = GameResult.in_progress()

    @property
    def is_computer_turn(self) -> bool:
        return (
            self.active
            and self.config.vs_computer
            and self.current_player is self.config.computer_player
        )

    def play(self, index: int) -> GameResult:
        """Apply a human move at ``index`` for the player to move."""
        if not self.active:
            raise InvalidMoveError("Game is over; restart to play again")
        if self.is_computer_turn:
            raise InvalidMoveError(f"It is the computer's turn ({self.current_player.value})")
        if not 0 <= index <= 8:
            raise InvalidMoveError(f"Cell index must be 0-8, got {index}")
        if self.board[index]:
            raise InvalidMoveError(f"Cell {index} is already occupied by {self.board[index]}")
        return self._apply(index)

    def computer_move(self) -> int:
        if not self.is_computer_turn:
            raise InvalidMoveError("It is not the computer's turn")
        move = select_move(self.board, self.config.difficulty, self.config.computer_player, rng=self.rng)
        self._apply(move)
        return move

    def restart(self) -> None:
        self.board = empty_board()
        self.current_player = self.config.first_player
        self.active = True
        self.result = GameResult.in_progress()
        logging.info("New game: %s moves first", self.current_player.value)

    def _apply(self, index: int) -> GameResult:
        player = self.current_player
        self.board[index] = player.value
        self.result = evaluate(self.board)
        logging.debug("%s -> %d board=%s", player.value, index, serialize_board(self.board))
        if self.result.is_over:
            self.active = False
            self.scores.record(self.result)
            if self.result.is_win:
                logging.info("%s wins (line %s)", self.result.winner.value, self.result.line)
            else:
                logging.info("Draw")
        else:
            self.current_player = player.opponent()
        return self.result
