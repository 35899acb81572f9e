# -*- coding: utf-8 -*-
"""Fixed-window aggregates over the last ``length`` valid (non-NaN) values.

Each ``*_nb`` kernel keeps a ring buffer of the most recent valid inputs
and their bar positions. Output is NaN until ``length`` valid inputs have
been seen; afterwards every bar reports the aggregate of the buffer, so a
NaN input in the middle of a series never re-opens a warm-up gap.

Ring reads go newest -> oldest: ``buf[(pos - 1 - j + length) % length]``
is the value ``j`` valid samples back.
"""
from numba import njit
from numpy import empty, full, isnan, nan, sqrt


@njit(cache=True)
def window_sum_nb(x, length):
    n = x.size
    out = full(n, nan)
    buf = empty(length)
    pos, count = 0, 0

    for i in range(n):
        v = x[i]
        if not isnan(v):
            buf[pos] = v
            pos = (pos + 1) % length
            count += 1
        if count >= length:
            total = 0.0
            for j in range(length):
                total += buf[(pos - 1 - j + length) % length]
            out[i] = total
    return out


@njit(cache=True)
def sma_nb(x, length):
    out = window_sum_nb(x, length)
    return out / length


@njit(cache=True)
def wma_nb(x, length):
    n = x.size
    out = full(n, nan)
    buf = empty(length)
    pos, count = 0, 0
    norm = length * (length + 1) / 2.0

    for i in range(n):
        v = x[i]
        if not isnan(v):
            buf[pos] = v
            pos = (pos + 1) % length
            count += 1
        if count >= length:
            total = 0.0
            for j in range(length):
                total += buf[(pos - 1 - j + length) % length] * (length - j)
            out[i] = total / norm
    return out


@njit(cache=True)
def variance_nb(x, length, biased):
    n = x.size
    out = full(n, nan)
    buf = empty(length)
    pos, count = 0, 0
    denom = length if biased else length - 1

    for i in range(n):
        v = x[i]
        if not isnan(v):
            buf[pos] = v
            pos = (pos + 1) % length
            count += 1
        if count >= length and denom > 0:
            mean = 0.0
            for j in range(length):
                mean += buf[(pos - 1 - j + length) % length]
            mean /= length
            ss = 0.0
            for j in range(length):
                d = buf[(pos - 1 - j + length) % length] - mean
                ss += d * d
            out[i] = ss / denom
    return out


@njit(cache=True)
def stdev_nb(x, length):
    return sqrt(variance_nb(x, length, True))


@njit(cache=True)
def _extreme_nb(x, length, want_high, as_offset):
    # Oldest sample wins ties: scan oldest -> newest with a strict compare.
    n = x.size
    out = full(n, nan)
    buf = empty(length)
    idx = empty(length)
    pos, count = 0, 0

    for i in range(n):
        v = x[i]
        if not isnan(v):
            buf[pos] = v
            idx[pos] = i
            pos = (pos + 1) % length
            count += 1
        if count >= length:
            best, best_idx = buf[pos], idx[pos]
            for j in range(length - 2, -1, -1):
                k = (pos - 1 - j + length) % length
                if (want_high and buf[k] > best) or (not want_high and buf[k] < best):
                    best, best_idx = buf[k], idx[k]
            out[i] = i - best_idx if as_offset else best
    return out


@njit(cache=True)
def highest_nb(x, length):
    return _extreme_nb(x, length, True, False)


@njit(cache=True)
def lowest_nb(x, length):
    return _extreme_nb(x, length, False, False)


@njit(cache=True)
def highestbars_nb(x, length):
    return _extreme_nb(x, length, True, True)


@njit(cache=True)
def lowestbars_nb(x, length):
    return _extreme_nb(x, length, False, True)


@njit(cache=True)
def linreg_nb(x, length, offset):
    # x-axis: 0 for the oldest sample ... length - 1 for the newest
    n = x.size
    out = full(n, nan)
    buf = empty(length)
    pos, count = 0, 0

    sum_x = length * (length - 1) / 2.0
    sum_xx = (length - 1) * length * (2 * length - 1) / 6.0
    denom = length * sum_xx - sum_x * sum_x

    for i in range(n):
        v = x[i]
        if not isnan(v):
            buf[pos] = v
            pos = (pos + 1) % length
            count += 1
        if count >= length:
            sum_y, sum_xy = 0.0, 0.0
            for j in range(length):
                y = buf[(pos - 1 - j + length) % length]
                xi = length - 1 - j
                sum_y += y
                sum_xy += xi * y
            slope = (length * sum_xy - sum_x * sum_y) / denom if denom != 0 else 0.0
            intercept = (sum_y - slope * sum_x) / length
            out[i] = intercept + slope * (length - 1 - offset)
    return out
