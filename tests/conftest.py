"""Shared pytest fixtures for pandas-ta-series tests.

All fixtures produce deterministic, self-contained data.
"""
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd
import pytest

from pandas_ta_series import Bar, BarStore


# ---------------------------------------------------------------------------
# OHLCV fixtures
# ---------------------------------------------------------------------------

def _make_ohlcv(n_bars: int, seed: int, base_price: float, trend: float = 0.0) -> pd.DataFrame:
    """Generate synthetic OHLCV with proper high >= open/close >= low."""
    rng = np.random.RandomState(seed)
    dates = pd.date_range("2024-01-01", periods=n_bars, freq="h", tz="UTC")

    close = np.empty(n_bars)
    close[0] = base_price
    for i in range(1, n_bars):
        ret = rng.normal(trend, 0.01)
        close[i] = close[i - 1] * (1.0 + ret)

    open_ = close * (1.0 + rng.normal(0, 0.002, n_bars))
    spread = np.abs(rng.normal(0, 0.004, n_bars)) * close
    high = np.maximum(open_, close) + spread
    low = np.minimum(open_, close) - spread
    volume = rng.uniform(100, 5000, n_bars)

    return pd.DataFrame(
        {"open": open_, "high": high, "low": low, "close": close, "volume": volume},
        index=dates,
    )


def make_bars(
    close: Sequence[float],
    high: Optional[Sequence[float]] = None,
    low: Optional[Sequence[float]] = None,
    volume: Optional[float] = 1.0,
) -> List[Bar]:
    """Bars at times 0, 1, 2, ... from explicit price columns."""
    high = close if high is None else high
    low = close if low is None else low
    return [
        Bar(time=i, open=c, high=h, low=lo, close=c, volume=volume)
        for i, (c, h, lo) in enumerate(zip(close, high, low))
    ]


@pytest.fixture(scope="session")
def sample_ohlcv_df() -> pd.DataFrame:
    """400 hourly bars around 100, seed=42, mild uptrend."""
    return _make_ohlcv(400, seed=42, base_price=100.0, trend=0.0005)


@pytest.fixture(scope="session")
def short_ohlcv_df() -> pd.DataFrame:
    """10 bars, shorter than most default lengths."""
    return _make_ohlcv(10, seed=7, base_price=50.0)


@pytest.fixture
def sample_store(sample_ohlcv_df: pd.DataFrame) -> BarStore:
    """A fresh store per test so mutations never leak."""
    return BarStore.from_dataframe(sample_ohlcv_df)


@pytest.fixture
def sma_store() -> BarStore:
    """Five closes with a hand-checkable SMA(3): NaN, NaN, 10, 10.667, 9.667."""
    return BarStore(make_bars([10.0, 11.0, 9.0, 12.0, 8.0]))


@pytest.fixture
def w_bars() -> List[Bar]:
    """12-bar W shape: lows at bars 3 and 9, high at bar 6, volume 1 per bar."""
    lows = [109, 104, 99, 94, 99, 104, 109, 104, 99, 93, 99, 104]
    highs = [111, 106, 101, 96, 101, 106, 111, 106, 101, 95, 101, 106]
    closes = [(h + lo) / 2 for h, lo in zip(highs, lows)]
    return make_bars(closes, highs, lows, volume=1.0)
