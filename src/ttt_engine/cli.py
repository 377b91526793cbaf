from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import Callable, Optional, Sequence

import numpy as np

from .arena import run_matches
from .errors import BoardFormatError, InvalidMoveError
from .game_basics import (
    Board,
    GameResult,
    Player,
    current_player,
    deserialize_board,
    evaluate,
    is_valid_state,
)
from .move_selector import Difficulty, select_move
from .session import GameSession
from .settings import SessionConfig
from .solver import move_scores
from .tactics import completing_move, fork_moves, immediate_winning_moves
from .tracking import maybe_mlflow_run

DIFFICULTIES = [d.value for d in Difficulty]
PLAYERS = [p.value for p in Player]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe engine CLI")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )
    p.add_argument("--seed", type=int, default=None, help="Seed for the computer's random choices")

    board_help = "Board string, 9 cells of X, O or '.', row by row, e.g. OO.XX...."

    p_eval = sub.add_parser("evaluate", help="Report win/draw/in-progress for a board")
    p_eval.add_argument("--board", required=True, help=board_help)

    p_move = sub.add_parser("move", help="Pick the computer's move for a board")
    p_move.add_argument("--board", required=True, help=board_help)
    p_move.add_argument("--difficulty", choices=DIFFICULTIES, default="hard")
    p_move.add_argument("--computer", type=str.upper, choices=PLAYERS, default="O",
                        help="Symbol the computer plays (default: O)")
    p_move.add_argument("--explain", action="store_true", help="Also log the minimax score of every cell")

    p_tac = sub.add_parser("tactics", help="List immediate wins, blocks and forks")
    p_tac.add_argument("--board", required=True, help=board_help)
    p_tac.add_argument("--player", type=str.upper, choices=PLAYERS, default=None,
                       help="Side to analyse (default: side to move, X opening)")

    p_arena = sub.add_parser("arena", help="Play computer tiers against each other")
    p_arena.add_argument("--x", dest="x_difficulty", choices=DIFFICULTIES, default="hard")
    p_arena.add_argument("--o", dest="o_difficulty", choices=DIFFICULTIES, default="easy")
    p_arena.add_argument("--games", type=int, default=100)
    p_arena.add_argument("--first", type=str.upper, choices=PLAYERS, default="X")
    p_arena.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_arena.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs (mlflow local backend)",
    )

    p_play = sub.add_parser("play", help="Play in the terminal (settings default to TTT_* env vars)")
    p_play.add_argument("--mode", choices=["pvp", "pvc"], default=None)
    p_play.add_argument("--difficulty", choices=DIFFICULTIES, default=None)
    p_play.add_argument("--first", type=str.upper, choices=PLAYERS, default=None)
    p_play.add_argument("--computer", type=str.upper, choices=PLAYERS, default=None)
    p_play.add_argument("--delay", type=float, default=None, help="Seconds before the computer moves")

    return p


def _print_info() -> None:
    import importlib.util
    import platform
    import sys

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy", "mlflow"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _parse_board(raw: str) -> Optional[Board]:
    try:
        board = deserialize_board(raw)
    except BoardFormatError as exc:
        logging.error("Invalid board string: %s", exc)
        return None
    if not is_valid_state(board):
        logging.error("Board is not a valid reachable state.")
        return None
    return board


def render_board(board: Sequence[str], result: Optional[GameResult] = None) -> str:
    """Three text rows; empty cells show their index, a winning line is bracketed."""
    line = set(result.line) if result is not None and result.line else set()
    cells = []
    for i, v in enumerate(board):
        text = v if v else str(i)
        cells.append(f"[{text}]" if i in line else f" {text} ")
    rows = ["|".join(cells[r * 3:r * 3 + 3]) for r in range(3)]
    return "\n---+---+---\n".join(rows)


def _status(result: GameResult, to_move: Player) -> str:
    if result.is_win:
        return f"{result.winner.value} Wins!"
    if result.is_draw:
        return "It's a Draw!"
    return f"{to_move.value}'s turn"


def _report(session: GameSession) -> None:
    print(render_board(session.board, session.result))
    print(_status(session.result, session.current_player))
    if session.result.is_over:
        s = session.scores
        print(f"Score X={s.x} O={s.o} draws={s.draws}")


def run_play(
    config: SessionConfig,
    rng: Optional[np.random.Generator] = None,
    input_fn: Callable[[str], str] = input,
    sleep: Callable[[float], None] = time.sleep,
) -> GameSession:
    session = GameSession(config, rng=rng)
    logging.info(
        "mode=%s difficulty=%s first=%s computer=%s",
        config.mode, config.difficulty.value, config.first_player.value, config.computer_player.value,
    )
    print(render_board(session.board))
    while True:
        if session.is_computer_turn:
            sleep(config.computer_delay)
            mv = session.computer_move()
            print(f"Computer ({config.computer_player.value}) plays {mv}")
            _report(session)
            continue
        prompt = (
            f"{session.current_player.value} to move [0-8, r=restart, q=quit]: "
            if session.active else "Game over [r=restart, q=quit]: "
        )
        try:
            cmd = input_fn(prompt).strip().lower()
        except EOFError:
            break
        if cmd in ("q", "quit"):
            break
        if cmd in ("r", "restart"):
            session.restart()
            print(render_board(session.board))
            continue
        try:
            idx = int(cmd)
        except ValueError:
            logging.warning("Enter a cell number 0-8, r or q")
            continue
        try:
            session.play(idx)
        except InvalidMoveError as exc:
            logging.warning("%s", exc)
            continue
        _report(session)
    s = session.scores
    logging.info("final_scores x=%d o=%d draws=%d", s.x, s.o, s.draws)
    return session


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if getattr(ns, "version", False):
        try:
            from importlib.metadata import PackageNotFoundError, version as _ver

            print(_ver("ttt-engine"))
        except PackageNotFoundError:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    rng = np.random.default_rng(ns.seed)

    if ns.cmd == "evaluate":
        b = _parse_board(ns.board)
        if b is None:
            return 2
        res = evaluate(b)
        logging.info(
            "result=%s winner=%s line=%s",
            res.status,
            res.winner.value if res.winner else None,
            list(res.line) if res.line else None,
        )
        return 0

    if ns.cmd == "move":
        b = _parse_board(ns.board)
        if b is None:
            return 2
        res = evaluate(b)
        if res.is_over:
            logging.error("Board is already finished (%s); no move to make.", res.status)
            return 2
        mv = select_move(b, Difficulty(ns.difficulty), Player(ns.computer), rng=rng)
        logging.info("move=%d", mv)
        if ns.explain:
            logging.info("scores=%s", move_scores(b, Player(ns.computer)))
        return 0

    if ns.cmd == "tactics":
        b = _parse_board(ns.board)
        if b is None:
            return 2
        p = Player(ns.player) if ns.player else current_player(b)
        logging.info(
            "player=%s win=%s block=%s wins=%s forks=%s",
            p.value,
            completing_move(b, p),
            completing_move(b, p.opponent()),
            immediate_winning_moves(b, p),
            fork_moves(b, p),
        )
        return 0

    if ns.cmd == "arena":
        if ns.games < 1:
            logging.error("--games must be positive, got %d", ns.games)
            return 2
        with maybe_mlflow_run(ns.tracking == "mlflow", run_name="arena", log_dir=ns.log_dir) as tracker:
            tracker.log_params({
                "x_difficulty": ns.x_difficulty,
                "o_difficulty": ns.o_difficulty,
                "games": ns.games,
                "first": ns.first,
                "seed": ns.seed,
            })
            summary = run_matches(ns.x_difficulty, ns.o_difficulty, ns.games, seed=ns.seed, first=Player(ns.first))
            tracker.log_metrics(summary.as_metrics())
        logging.info(
            "x=%s o=%s games=%d x_wins=%d o_wins=%d draws=%d",
            summary.x_difficulty.value,
            summary.o_difficulty.value,
            summary.games,
            summary.x_wins,
            summary.o_wins,
            summary.draws,
        )
        return 0

    if ns.cmd == "play":
        try:
            config = SessionConfig.from_env().override(
                mode=ns.mode,
                difficulty=ns.difficulty,
                first_player=ns.first,
                computer_player=ns.computer,
                computer_delay=ns.delay,
            )
        except ValueError as exc:
            logging.error("Invalid session settings: %s", exc)
            return 2
        run_play(config, rng=rng)
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
