#!/usr/bin/env python3
"""Benchmark lazy Series evaluation over a growing BarStore.

Three measurements per history size:
  - cold:   build the indicator graph and read it once
  - cached: read the same graph again with no store mutation
  - append: append ``--tail`` bars, then read (full recompute of the graph)
"""
from __future__ import annotations

import argparse
import os
import sys
from time import perf_counter
from typing import List

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import numpy as np
import pandas as pd

from pandas_ta_series import BarStore, Series, setup_logging, ta


def make_ohlcv(rows: int, seed: int) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    idx = pd.date_range("2025-01-01", periods=rows, freq="1min")
    base = 100 + rng.standard_normal(rows).cumsum()
    close = base + rng.normal(0, 0.2, rows)
    open_ = base + rng.normal(0, 0.2, rows)
    high = np.maximum(open_, close) + rng.random(rows) * 0.5
    low = np.minimum(open_, close) - rng.random(rows) * 0.5
    volume = rng.integers(100, 1000, rows)
    return pd.DataFrame(
        {
            "open": open_,
            "high": high,
            "low": low,
            "close": close,
            "volume": volume,
        },
        index=idx,
    )


def parse_list(value: str) -> List[int]:
    return [int(v.strip()) for v in value.split(",") if v.strip()]


def time_call(fn, runs: int) -> float:
    times = []
    for _ in range(max(runs, 1)):
        start = perf_counter()
        fn()
        times.append(perf_counter() - start)
    return sum(times) / len(times)


def build_graph(store: BarStore) -> List[Series]:
    """A handful of indicators sharing the close leaf."""
    high, low, close = (Series.from_bars(store, f) for f in ("high", "low", "close"))
    _, upper, lower = ta.bb(close, 20, 2.0)
    line, _ = ta.supertrend(high, low, close)
    signal = ta.crossover(ta.ema(close, 9), ta.sma(close, 21))
    return [upper, lower, ta.atr(high, low, close), line, signal, ta.mcginley(close)]


def read_all(outputs: List[Series]) -> None:
    for s in outputs:
        s.to_array()


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument(
        "--sizes",
        type=str,
        default="1000,10000,50000,100000",
        help="comma-separated history sizes",
    )
    ap.add_argument("--tail", type=int, default=1, help="bars appended per update")
    ap.add_argument("--seed", type=int, default=7)
    ap.add_argument("--warmup", type=int, default=1, help="warmup runs (not timed)")
    ap.add_argument("--runs", type=int, default=3, help="timed runs")
    ap.add_argument("--log-level", type=str, default="WARNING")
    args = ap.parse_args()

    setup_logging(args.log_level)
    sizes = parse_list(args.sizes)

    print(f"[i] sizes: {sizes}")
    print(f"[i] tail: {args.tail}")
    print(f"[i] runs: {args.runs} (warmup: {args.warmup})")

    for rows in sizes:
        if rows <= args.tail + 1:
            print(f"[i] skip rows={rows} (need > tail+1)")
            continue

        df = make_ohlcv(rows, args.seed)
        split = rows - args.tail
        tail_bars = list(BarStore.from_dataframe(df.iloc[split:]))

        def run_cold():
            store = BarStore.from_dataframe(df.iloc[:split])
            read_all(build_graph(store))

        store = BarStore.from_dataframe(df.iloc[:split])
        outputs = build_graph(store)

        def run_cached():
            read_all(outputs)

        def run_append():
            for bar in tail_bars:
                store.append(bar)
            read_all(outputs)
            for _ in tail_bars:
                store.remove_last()

        # Warmup (also triggers numba compilation)
        for _ in range(max(args.warmup, 0)):
            run_cold()
            run_cached()
            run_append()

        avg_cold = time_call(run_cold, args.runs)
        read_all(outputs)
        avg_cached = time_call(run_cached, args.runs)
        avg_append = time_call(run_append, args.runs)
        print(
            f"[bench] rows={rows} tail={args.tail} cold_s={avg_cold:.6f} "
            f"cached_s={avg_cached:.6f} append_s={avg_append:.6f}"
        )


if __name__ == "__main__":
    main()
