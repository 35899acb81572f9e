# -*- coding: utf-8 -*-
"""Series-level technical analysis functions.

Every function builds graph nodes and returns lazily evaluated Series;
nothing is computed until a value is read.

    >>> close = Series.from_bars(store, "close")
    >>> signal = crossover(sma(close, 9), sma(close, 21))
    >>> signal.last()
"""
from __future__ import annotations

from typing import Optional, Tuple, Union

from pandas_ta_series import kernels
from pandas_ta_series.bars import as_store
from pandas_ta_series.ma import MAType, ma, vwma
from pandas_ta_series.series import Series, kernel

Operand = Union[Series, float, int]


def _as_series(like: Series, value: Operand) -> Series:
    if isinstance(value, Series):
        return value
    return Series.constant(like.store, value)


# ---------------------------------------------------------------------------
# Moving averages & statistics
# ---------------------------------------------------------------------------

def sma(source: Series, length: int) -> Series:
    return source.sma(length)


def ema(source: Series, length: int) -> Series:
    return source.ema(length)


def rma(source: Series, length: int) -> Series:
    return source.rma(length)


def wma(source: Series, length: int) -> Series:
    return source.wma(length)


def stdev(source: Series, length: int) -> Series:
    return source.stdev(length)


def variance(source: Series, length: int, biased: bool = True) -> Series:
    return source.variance(length, biased)


def linreg(source: Series, length: int, offset: int = 0) -> Series:
    return source.linreg(length, offset)


def highest(source: Series, length: int) -> Series:
    return source.highest(length)


def lowest(source: Series, length: int) -> Series:
    return source.lowest(length)


def highestbars(source: Series, length: int) -> Series:
    return source.apply_kernel(kernels.highestbars, length=kernels.check_length(length))


def lowestbars(source: Series, length: int) -> Series:
    return source.apply_kernel(kernels.lowestbars, length=kernels.check_length(length))


# ---------------------------------------------------------------------------
# Momentum
# ---------------------------------------------------------------------------

def change(source: Series, length: int = 1) -> Series:
    return source.change(length)


def mom(source: Series, length: int = 10) -> Series:
    return source.change(length)


def roc(source: Series, length: int = 9) -> Series:
    return source.apply_kernel(kernels.roc, length=kernels.check_length(length))


# ---------------------------------------------------------------------------
# Volatility
# ---------------------------------------------------------------------------

def tr(high: Series, low: Series, close: Series, handle_na: bool = False) -> Series:
    """True Range."""
    return kernel(kernels.true_range, high, low, close, handle_na=bool(handle_na))


def atr(high: Series, low: Series, close: Series, length: int = 14) -> Series:
    """Average True Range."""
    return kernel(kernels.atr, high, low, close, length=kernels.check_length(length))


def bb(source: Series, length: int = 20, mult: float = 2.0,
       ma_type: Union[MAType, str] = MAType.SMA,
       volume: Optional[Series] = None) -> Tuple[Series, Series, Series]:
    """Bollinger Bands: ``(basis, upper, lower)``."""
    basis = ma(ma_type, source, length, volume)
    dev = source.stdev(length) * float(mult)
    return basis, basis + dev, basis - dev


# ---------------------------------------------------------------------------
# Signals
# ---------------------------------------------------------------------------

def crossover(a: Series, b: Operand) -> Series:
    """1 on the bar where *a* moves from at-or-below *b* to above it."""
    b = _as_series(a, b)
    return (a > b) & (a.offset(1) <= b.offset(1))


def crossunder(a: Series, b: Operand) -> Series:
    """1 on the bar where *a* moves from at-or-above *b* to below it."""
    b = _as_series(a, b)
    return (a < b) & (a.offset(1) >= b.offset(1))


def cross(a: Series, b: Operand) -> Series:
    return crossover(a, b) | crossunder(a, b)


def rising(source: Series, length: int) -> Series:
    """1 when *source* is above every one of its previous *length* values."""
    return source > source.offset(1).highest(length)


def falling(source: Series, length: int) -> Series:
    """1 when *source* is below every one of its previous *length* values."""
    return source < source.offset(1).lowest(length)


# ---------------------------------------------------------------------------
# Stateful folds
# ---------------------------------------------------------------------------

def sar(high: Series, low: Series, close: Series,
        start: float = 0.02, increment: float = 0.02, maximum: float = 0.2) -> Tuple[Series, Series, Series]:
    """Parabolic SAR: ``(sar, direction, af)``."""
    params = {"start": start, "increment": increment, "maximum": maximum}
    return Series.from_fold("psar", {"high": high, "low": low, "close": close}, params)


def supertrend(high: Series, low: Series, close: Series,
               factor: float = 3.0, atr_period: int = 10) -> Tuple[Series, Series]:
    """Supertrend: ``(supertrend, direction)``; direction -1 is an up trend."""
    params = {"factor": factor, "atr_period": atr_period}
    return Series.from_fold("supertrend", {"high": high, "low": low, "close": close}, params)


def mcginley(source: Series, length: int = 14) -> Series:
    """McGinley Dynamic."""
    return Series.from_fold("mcgd", {"close": source}, {"length": length})[0]


def zigzag(bars, deviation: float = 5.0, depth: int = 10,
           allow_zigzag_on_one_bar: bool = True) -> Tuple[Series, Series, Series]:
    """Zig-zag pivot machine: ``(swing, price, changed)`` of the last pivot per bar."""
    store = as_store(bars)
    fields = {name: Series.from_bars(store, name) for name in ("time", "high", "low", "volume")}
    params = {"deviation": deviation, "depth": depth, "allow_zigzag_on_one_bar": allow_zigzag_on_one_bar}
    return Series.from_fold("zigzag", fields, params)


__all__ = [
    "sma", "ema", "rma", "wma", "vwma", "stdev", "variance", "linreg",
    "highest", "lowest", "highestbars", "lowestbars",
    "change", "mom", "roc", "tr", "atr", "bb",
    "crossover", "crossunder", "cross", "rising", "falling",
    "sar", "supertrend", "mcginley", "zigzag",
]
