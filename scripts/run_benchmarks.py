#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import math
import statistics as stats
import time
from dataclasses import dataclass
from typing import List, Tuple

from ttt_engine.arena import run_matches
from ttt_engine.game_basics import Player, empty_board
from ttt_engine.solver import best_move, clear_cache


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    rounds: int = 10
    games: int = 100


def main() -> int:
    ap = argparse.ArgumentParser(description="Time the minimax search and a Hard-vs-Easy arena")
    ap.add_argument("--rounds", type=int, default=Config.rounds)
    ap.add_argument("--games", type=int, default=Config.games)
    ns = ap.parse_args()
    cfg = Config(rounds=ns.rounds, games=ns.games)
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    search_times: List[float] = []
    arena_times: List[float] = []
    for r in range(cfg.rounds):
        clear_cache()
        t0 = time.perf_counter()
        best_move(empty_board(), Player.X)
        t1 = time.perf_counter()
        search_times.append(t1 - t0)
        t2 = time.perf_counter()
        run_matches("hard", "easy", games=cfg.games, seed=r)
        t3 = time.perf_counter()
        arena_times.append(t3 - t2)
    m_search, h_search = ci95(search_times)
    m_arena, h_arena = ci95(arena_times)
    logging.info("best_move(empty, cold cache): mean=%.4fs ± %.4fs (95%% CI, N=%d)", m_search, h_search, cfg.rounds)
    logging.info("arena hard-vs-easy x%d: mean=%.4fs ± %.4fs (95%% CI)", cfg.games, m_arena, h_arena)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
