# -*- coding: utf-8 -*-
"""pandas-ta-series stateful -- overlap indicators.

Registered kinds
----------------
mcgd, supertrend
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
import math

from ._base import (
    NAN, _param, _as_int, _as_float,
    ATRState, atr_update_raw,
    StatefulIndicator,
    STATEFUL_REGISTRY,
)


# ===========================================================================
# MCGD  (McGinley Dynamic)
# ===========================================================================
# State: prev
# Default: length=14
#   md[0] = x[0]
#   md[t] = md[t-1] + (x - md[t-1]) / (length * (x / md[t-1]) ** 4)

@dataclass
class MCGDState:
    length: int
    prev: Optional[float] = None


def _mcgd_init(params: Dict[str, Any]) -> MCGDState:
    length = _as_int(_param(params, "length", 14), 14)
    return MCGDState(length=max(1, length))


def _mcgd_update(
    state: MCGDState, bar: Dict[str, Any], params: Dict[str, Any]
) -> Tuple[List[Optional[float]], MCGDState]:
    x = bar["close"]
    prev = state.prev

    if prev is None or prev == 0.0:
        state.prev = x
        return [x], state

    try:
        denom = state.length * (x / prev) ** 4
    except OverflowError:
        denom = math.inf
    if denom == 0.0 or not math.isfinite(denom):
        md = x
    else:
        md = prev + (x - prev) / denom
        if not math.isfinite(md):
            md = x

    state.prev = md
    return [md], state


def _mcgd_output_names(params: Dict[str, Any]) -> List[str]:
    length = _as_int(_param(params, "length", 14), 14)
    return [f"MCGD_{length}"]


STATEFUL_REGISTRY["mcgd"] = StatefulIndicator(
    kind="mcgd",
    inputs=("close",),
    init=_mcgd_init,
    update=_mcgd_update,
    output_names=_mcgd_output_names,
)


# ===========================================================================
# SUPERTREND
# ===========================================================================
# State: atr state, previous bands, previous supertrend, previous close
# Default: atr_period=10, factor=3.0
# Outputs: supertrend, direction (-1 = up trend, 1 = down trend)

@dataclass
class SupertrendState:
    factor: float
    atr: ATRState
    prev_close: Optional[float] = None
    prev_upper: float = NAN
    prev_lower: float = NAN
    prev_st: float = NAN


def _supertrend_init(params: Dict[str, Any]) -> SupertrendState:
    period = _as_int(_param(params, "atr_period", 10), 10)
    factor = _as_float(_param(params, "factor", 3.0), 3.0)
    return SupertrendState(factor=factor, atr=ATRState(length=max(1, period)))


def _supertrend_update(
    state: SupertrendState, bar: Dict[str, Any], params: Dict[str, Any]
) -> Tuple[List[Optional[float]], SupertrendState]:
    high, low, close = bar["high"], bar["low"], bar["close"]

    atr, state.atr = atr_update_raw(state.atr, high, low, close)
    prev_close = state.prev_close
    state.prev_close = close
    if atr is None:
        return [None, 1.0], state

    src = (high + low) / 2.0
    upper = src + state.factor * atr
    lower = src - state.factor * atr

    # Bands ratchet toward price unless the previous close broke through
    if prev_close is not None and not (math.isnan(state.prev_upper) or math.isnan(state.prev_lower)):
        if not (lower > state.prev_lower or prev_close < state.prev_lower):
            lower = state.prev_lower
        if not (upper < state.prev_upper or prev_close > state.prev_upper):
            upper = state.prev_upper

    if math.isnan(state.prev_st):
        direction = 1.0
    elif state.prev_st == state.prev_upper:
        direction = -1.0 if close > upper else 1.0
    else:
        direction = 1.0 if close < lower else -1.0

    st = lower if direction < 0 else upper
    state.prev_upper = upper
    state.prev_lower = lower
    state.prev_st = st
    return [st, direction], state


def _supertrend_output_names(params: Dict[str, Any]) -> List[str]:
    period = _as_int(_param(params, "atr_period", 10), 10)
    factor = _as_float(_param(params, "factor", 3.0), 3.0)
    props = f"_{period}_{factor}"
    return [f"SUPERT{props}", f"SUPERTd{props}"]


STATEFUL_REGISTRY["supertrend"] = StatefulIndicator(
    kind="supertrend",
    inputs=("high", "low", "close"),
    init=_supertrend_init,
    update=_supertrend_update,
    output_names=_supertrend_output_names,
)
