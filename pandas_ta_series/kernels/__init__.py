# -*- coding: utf-8 -*-
"""pandas-ta-series numeric kernels.

Stateless ``array -> array`` functions. The compiled ``*_nb`` functions do
the work; the wrappers below coerce their input to contiguous float64 and
validate window lengths. Every output is aligned 1:1 with its input.
"""
from typing import Any

import numpy as np

from ._smooth import (
    atr_nb, change_nb, ema_nb, rma_nb, roc_nb, true_range_nb,
)
from ._window import (
    highest_nb, highestbars_nb, linreg_nb, lowest_nb, lowestbars_nb,
    sma_nb, stdev_nb, variance_nb, window_sum_nb, wma_nb,
)


def _as_array(x: Any) -> np.ndarray:
    return np.ascontiguousarray(x, dtype=np.float64)


def check_length(length: Any, name: str = "length") -> int:
    """Window lengths are positive integers."""
    try:
        value = int(length)
    except (TypeError, ValueError):
        value = None
    if value is None or isinstance(length, bool) or value != length or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {length!r}")
    return value


# ---------------------------------------------------------------------------
# Windowed aggregates
# ---------------------------------------------------------------------------

def window_sum(source, length: int) -> np.ndarray:
    return window_sum_nb(_as_array(source), check_length(length))


def sma(source, length: int) -> np.ndarray:
    """Simple Moving Average."""
    return sma_nb(_as_array(source), check_length(length))


def wma(source, length: int) -> np.ndarray:
    """Weighted Moving Average; the newest value weighs ``length``."""
    return wma_nb(_as_array(source), check_length(length))


def variance(source, length: int, biased: bool = True) -> np.ndarray:
    return variance_nb(_as_array(source), check_length(length), bool(biased))


def stdev(source, length: int) -> np.ndarray:
    """Population standard deviation."""
    return stdev_nb(_as_array(source), check_length(length))


def highest(source, length: int) -> np.ndarray:
    return highest_nb(_as_array(source), check_length(length))


def lowest(source, length: int) -> np.ndarray:
    return lowest_nb(_as_array(source), check_length(length))


def highestbars(source, length: int) -> np.ndarray:
    """Bars back to the window high; the older bar wins ties."""
    return highestbars_nb(_as_array(source), check_length(length))


def lowestbars(source, length: int) -> np.ndarray:
    """Bars back to the window low; the older bar wins ties."""
    return lowestbars_nb(_as_array(source), check_length(length))


def linreg(source, length: int, offset: int = 0) -> np.ndarray:
    """Least squares line evaluated ``offset`` bars before the newest."""
    return linreg_nb(_as_array(source), check_length(length), int(offset))


# ---------------------------------------------------------------------------
# Smoothers, differences, ranges
# ---------------------------------------------------------------------------

def ema(source, length: int) -> np.ndarray:
    """Exponential Moving Average, alpha = 2 / (length + 1), SMA seed."""
    return ema_nb(_as_array(source), check_length(length))


def rma(source, length: int) -> np.ndarray:
    """Wilder's Moving Average, alpha = 1 / length, SMA seed."""
    return rma_nb(_as_array(source), check_length(length))


def change(source, length: int = 1) -> np.ndarray:
    return change_nb(_as_array(source), check_length(length))


mom = change


def roc(source, length: int) -> np.ndarray:
    """Rate of change in percent; a zero base gives NaN."""
    return roc_nb(_as_array(source), check_length(length))


def true_range(high, low, close, handle_na: bool = False) -> np.ndarray:
    return true_range_nb(_as_array(high), _as_array(low), _as_array(close), bool(handle_na))


def atr(high, low, close, length: int) -> np.ndarray:
    """Average True Range (RMA of the true range)."""
    return atr_nb(_as_array(high), _as_array(low), _as_array(close), check_length(length))


__all__ = [
    "check_length",
    "window_sum", "sma", "wma", "variance", "stdev",
    "highest", "lowest", "highestbars", "lowestbars", "linreg",
    "ema", "rma", "change", "mom", "roc", "true_range", "atr",
]
