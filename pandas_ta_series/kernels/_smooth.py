# -*- coding: utf-8 -*-
"""Recursive smoothers, differences and ranges."""
from numba import njit
from numpy import full, isnan, nan


# Exponential smoothing, SMA-seeded.
# The first output is the mean of the first `length` valid inputs; after
# that each valid input moves the value by alpha and a NaN input carries
# the previous value forward.
@njit(cache=True)
def ewm_nb(x, length, alpha):
    n = x.size
    out = full(n, nan)
    seed_sum, seen = 0.0, 0
    last = nan

    for i in range(n):
        v = x[i]
        if seen < length:
            if not isnan(v):
                seed_sum += v
                seen += 1
                if seen == length:
                    last = seed_sum / length
                    out[i] = last
            continue
        if not isnan(v):
            last = alpha * v + (1.0 - alpha) * last
        out[i] = last
    return out


@njit(cache=True)
def ema_nb(x, length):
    return ewm_nb(x, length, 2.0 / (length + 1.0))


@njit(cache=True)
def rma_nb(x, length):
    return ewm_nb(x, length, 1.0 / length)


@njit(cache=True)
def change_nb(x, length):
    n = x.size
    out = full(n, nan)
    for i in range(length, n):
        out[i] = x[i] - x[i - length]
    return out


@njit(cache=True)
def roc_nb(x, length):
    n = x.size
    out = full(n, nan)
    for i in range(length, n):
        prev = x[i - length]
        if prev != 0.0:
            out[i] = 100.0 * (x[i] - prev) / prev
    return out


@njit(cache=True)
def true_range_nb(high, low, close, handle_na):
    n = high.size
    out = full(n, nan)
    if n == 0:
        return out
    out[0] = high[0] - low[0]
    for i in range(1, n):
        prev = close[i - 1]
        if isnan(prev):
            if handle_na:
                out[i] = high[i] - low[i]
            continue
        hl = high[i] - low[i]
        hc = abs(high[i] - prev)
        lc = abs(low[i] - prev)
        out[i] = max(hl, max(hc, lc))
    return out


@njit(cache=True)
def atr_nb(high, low, close, length):
    return rma_nb(true_range_nb(high, low, close, False), length)
