# -*- coding: utf-8 -*-
"""pandas-ta-series stateful -- trend indicators.

Registered kinds
----------------
psar, zigzag
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ._base import (
    NAN, _param, _as_int, _as_float, _as_bool,
    StatefulIndicator,
    STATEFUL_REGISTRY,
    replay,
)


# ===========================================================================
# PSAR  (Parabolic SAR)
# ===========================================================================
# State: trend, sar, ep, af, last two highs/lows
# Default: start=0.02, increment=0.02, maximum=0.2
# Outputs: sar, direction (1 = up, -1 = down), af after the bar

@dataclass
class PsarState:
    start: float
    increment: float
    maximum: float
    bars: int = 0
    up: bool = True
    first_trend_bar: bool = False
    sar: float = NAN
    ep: float = NAN
    af: float = 0.0
    prev_close: Optional[float] = None
    prev_high: Optional[float] = None
    prev_low: Optional[float] = None
    prev_high2: Optional[float] = None
    prev_low2: Optional[float] = None


def _psar_init(params: Dict[str, Any]) -> PsarState:
    start = _as_float(_param(params, "start", 0.02), 0.02)
    increment = _as_float(_param(params, "increment", 0.02), 0.02)
    maximum = _as_float(_param(params, "maximum", 0.2), 0.2)
    return PsarState(start=start, increment=increment, maximum=maximum, af=start)


def _psar_shift(state: PsarState, high: float, low: float, close: float) -> None:
    state.prev_high2, state.prev_low2 = state.prev_high, state.prev_low
    state.prev_high, state.prev_low, state.prev_close = high, low, close
    state.bars += 1


def _psar_update(
    state: PsarState, bar: Dict[str, Any], params: Dict[str, Any]
) -> Tuple[List[Optional[float]], PsarState]:
    high, low, close = bar["high"], bar["low"], bar["close"]

    if state.bars == 0:
        _psar_shift(state, high, low, close)
        return [None, None, None], state

    # Second bar: trend from the close-to-close move
    if state.bars == 1:
        if close > state.prev_close:
            state.up, state.ep, state.sar = True, high, state.prev_low
        else:
            state.up, state.ep, state.sar = False, low, state.prev_high
        state.first_trend_bar = True
        state.af = state.start

    state.sar += state.af * (state.ep - state.sar)

    if state.up:
        if state.sar > low:
            state.up = False
            state.first_trend_bar = True
            state.sar = max(high, state.ep)
            state.ep = low
            state.af = state.start
    else:
        if state.sar < high:
            state.up = True
            state.first_trend_bar = True
            state.sar = min(low, state.ep)
            state.ep = high
            state.af = state.start

    if not state.first_trend_bar:
        if state.up and high > state.ep:
            state.ep = high
            state.af = min(state.af + state.increment, state.maximum)
        elif not state.up and low < state.ep:
            state.ep = low
            state.af = min(state.af + state.increment, state.maximum)

    # SAR never enters the previous two bars' range
    if state.up:
        state.sar = min(state.sar, state.prev_low)
        if state.prev_low2 is not None:
            state.sar = min(state.sar, state.prev_low2)
    else:
        state.sar = max(state.sar, state.prev_high)
        if state.prev_high2 is not None:
            state.sar = max(state.sar, state.prev_high2)

    state.first_trend_bar = False
    _psar_shift(state, high, low, close)
    return [state.sar, 1.0 if state.up else -1.0, state.af], state


def _psar_output_names(params: Dict[str, Any]) -> List[str]:
    start = _as_float(_param(params, "start", 0.02), 0.02)
    increment = _as_float(_param(params, "increment", 0.02), 0.02)
    maximum = _as_float(_param(params, "maximum", 0.2), 0.2)
    props = f"_{start}_{increment}_{maximum}"
    return [f"PSAR{props}", f"PSARd{props}", f"PSARaf{props}"]


STATEFUL_REGISTRY["psar"] = StatefulIndicator(
    kind="psar",
    inputs=("high", "low", "close"),
    init=_psar_init,
    update=_psar_update,
    output_names=_psar_output_names,
)


# ===========================================================================
# ZIGZAG
# ===========================================================================
# State: high/low/time buffers (2 * legs + 1), pivots, pending volume
# Default: deviation=5.0, depth=10, allow_zigzag_on_one_bar=True
# legs = max(2, depth // 2): a pivot needs that many bars on
# each side, so it is confirmed `legs` bars after it happened.
# Outputs: last pivot swing (1 high / -1 low), last pivot price, changed flag

@dataclass
class ChartPoint:
    time: Any
    bar_index: int
    price: float


@dataclass
class Pivot:
    is_high: bool
    volume: float
    start: ChartPoint
    end: ChartPoint


@dataclass
class ZigZagSettings:
    deviation: float = 5.0
    depth: int = 10
    extend_last: bool = True
    allow_zigzag_on_one_bar: bool = True

    @classmethod
    def from_params(cls, params: Dict[str, Any]) -> "ZigZagSettings":
        return cls(
            deviation=_as_float(_param(params, "deviation", 5.0), 5.0),
            depth=_as_int(_param(params, "depth", 10), 10),
            extend_last=_as_bool(_param(params, "extend_last", True), True),
            allow_zigzag_on_one_bar=_as_bool(_param(params, "allow_zigzag_on_one_bar", True), True),
        )

    @property
    def legs(self) -> int:
        return max(2, self.depth // 2)

    def as_params(self) -> Dict[str, Any]:
        return {
            "deviation": self.deviation,
            "depth": self.depth,
            "extend_last": self.extend_last,
            "allow_zigzag_on_one_bar": self.allow_zigzag_on_one_bar,
        }


@dataclass
class ZigZagResult:
    pivots: List[Pivot]
    extension: Optional[Pivot]


@dataclass
class ZigzagState:
    settings: ZigZagSettings
    highs: deque = field(default_factory=deque)
    lows: deque = field(default_factory=deque)
    times: deque = field(default_factory=deque)
    indices: deque = field(default_factory=deque)
    bar_count: int = 0
    sum_vol: float = 0.0
    pivots: List[Pivot] = field(default_factory=list)

    @property
    def last_pivot(self) -> Optional[Pivot]:
        return self.pivots[-1] if self.pivots else None


def _zigzag_init(params: Dict[str, Any]) -> ZigzagState:
    settings = ZigZagSettings.from_params(params)
    size = 2 * settings.legs + 1
    return ZigzagState(
        settings=settings,
        highs=deque(maxlen=size),
        lows=deque(maxlen=size),
        times=deque(maxlen=size),
        indices=deque(maxlen=size),
    )


def _calc_dev(base: float, price: float) -> float:
    if base == 0.0:
        return NAN
    return 100.0 * (price - base) / abs(base)


def _find_pivot_point(state: ZigzagState, is_high: bool) -> Optional[ChartPoint]:
    legs = state.settings.legs
    buf = state.highs if is_high else state.lows
    p = len(buf) - 1 - legs
    if p < legs:
        return None
    candidate = buf[p]

    # Later bars may touch the candidate but not exceed it
    for i in range(p + 1, len(buf)):
        if (buf[i] > candidate) if is_high else (buf[i] < candidate):
            return None
    # Earlier bars must stay strictly below (above for lows)
    for i in range(p - legs, p):
        if (buf[i] >= candidate) if is_high else (buf[i] <= candidate):
            return None

    return ChartPoint(time=state.times[p], bar_index=state.indices[p], price=candidate)


def _new_pivot_found(state: ZigzagState, is_high: bool, point: ChartPoint) -> bool:
    last = state.last_pivot
    if last is None:
        state.pivots.append(Pivot(is_high, state.sum_vol, point, point))
        state.sum_vol = 0.0
        return True

    if last.is_high == is_high:
        more_extreme = point.price > last.end.price if is_high else point.price < last.end.price
        if more_extreme:
            last.end = point
            last.volume += state.sum_vol
            state.sum_vol = 0.0
            return True
        return False

    dev = _calc_dev(last.end.price, point.price)
    threshold = state.settings.deviation
    if last.is_high:
        passed = dev <= -threshold
    else:
        passed = dev >= threshold
    if passed:
        state.pivots.append(Pivot(is_high, state.sum_vol, last.end, point))
        state.sum_vol = 0.0
        return True
    return False


def _try_pivot(state: ZigzagState, is_high: bool, register: bool = True) -> bool:
    point = _find_pivot_point(state, is_high)
    if point is None or not register:
        return False
    return _new_pivot_found(state, is_high, point)


def _zigzag_update(
    state: ZigzagState, bar: Dict[str, Any], params: Dict[str, Any]
) -> Tuple[List[Optional[float]], ZigzagState]:
    state.highs.append(bar["high"])
    state.lows.append(bar["low"])
    state.times.append(bar["time"])
    state.indices.append(int(bar.get("index", state.bar_count)))
    state.bar_count += 1
    state.sum_vol += bar.get("volume", 0.0)

    changed = False
    if state.bar_count >= 2 * state.settings.legs + 1:
        changed = _try_pivot(state, True)
        allow = state.settings.allow_zigzag_on_one_bar or not changed
        changed = _try_pivot(state, False, register=allow) or changed

    last = state.last_pivot
    if last is None:
        return [None, None, float(changed)], state
    return [1.0 if last.is_high else -1.0, last.end.price, float(changed)], state


def _zigzag_output_names(params: Dict[str, Any]) -> List[str]:
    settings = ZigZagSettings.from_params(params)
    props = f"_{settings.deviation}%_{settings.depth}"
    return [f"ZIGZAGs{props}", f"ZIGZAGv{props}", f"ZIGZAGc{props}"]


STATEFUL_REGISTRY["zigzag"] = StatefulIndicator(
    kind="zigzag",
    inputs=("time", "high", "low", "volume"),
    init=_zigzag_init,
    update=_zigzag_update,
    output_names=_zigzag_output_names,
)


def zigzag_extension(state: ZigzagState, bar: Dict[str, Any], bar_index: int) -> Optional[Pivot]:
    """Unconfirmed leg from the last pivot to *bar*. Never stored in state."""
    if not state.settings.extend_last:
        return None
    last = state.last_pivot
    if last is None:
        return None
    is_high = not last.is_high
    price = bar["high"] if is_high else bar["low"]
    end = ChartPoint(time=bar["time"], bar_index=bar_index, price=price)
    return Pivot(is_high, state.sum_vol, last.end, end)


def calculate_zigzag(bars: Sequence[Any], settings: Optional[ZigZagSettings] = None) -> ZigZagResult:
    """Confirmed pivots over *bars* plus the extension to the last bar.

    *bars* is any sequence of objects with ``time/high/low`` attributes and
    an optional ``volume`` (``Bar`` instances or a ``BarStore``).
    """
    settings = settings or ZigZagSettings()
    if len(bars) == 0:
        return ZigZagResult(pivots=[], extension=None)

    inputs = {
        "time": [float(b.time) for b in bars],
        "high": [b.high for b in bars],
        "low": [b.low for b in bars],
        "volume": [0.0 if getattr(b, "volume", None) is None else b.volume for b in bars],
    }
    _, state = replay("zigzag", inputs, settings.as_params())
    # replay converts times to float; restore the bars' own values
    for pivot in state.pivots:
        for point in (pivot.start, pivot.end):
            point.time = bars[point.bar_index].time

    last_bar = bars[len(bars) - 1]
    last = {"time": last_bar.time, "high": last_bar.high, "low": last_bar.low}
    extension = zigzag_extension(state, last, len(bars) - 1)
    return ZigZagResult(pivots=state.pivots, extension=extension)
