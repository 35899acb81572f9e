# -*- coding: utf-8 -*-
"""pandas-ta-series stateful – shared base: state classes, helpers, registry.

Every sequential algorithm is a fold: ``update(state, bar, params)`` takes
the state left by the previous bar and returns ``(outputs, state)``.
Category modules (``_overlap``, ``_trend``) populate ``STATEFUL_REGISTRY``
at import time; ``replay`` runs a registered fold over column arrays.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import math

import numpy as np

NAN = float("nan")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _is_nan(x: Any) -> bool:
    """True when *x* is None or a float NaN."""
    return x is None or (isinstance(x, float) and math.isnan(x))


def _param(params: Dict[str, Any], key: str, default: Any) -> Any:
    """Pull *key* from *params*; treat None as missing → default."""
    value = params.get(key, default)
    return default if value is None else value


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(default)


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return float(default)


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
        return bool(default)
    if isinstance(value, (int, float)) and not _is_nan(value):
        return bool(value)
    return bool(default)


# ---------------------------------------------------------------------------
# Shared state classes
# ---------------------------------------------------------------------------

@dataclass
class ATRState:
    """ATR with Wilder (RMA, alpha=1/n) + SMA seed.

    First ATR = mean(TR[0:length]), then Wilder smoothing. TR of the first
    bar is ``high - low``.
    """
    length: int
    prev_close: Optional[float] = None
    atr: Optional[float] = None
    _tr_sum: float = 0.0
    _tr_count: int = 0


# ---------------------------------------------------------------------------
# Low-level update helpers
# ---------------------------------------------------------------------------

def atr_update_raw(state: ATRState, high: float, low: float, close: float) -> Tuple[Optional[float], ATRState]:
    """Single-step ATR (Wilder).  Returns (atr | None, state)."""
    # True Range
    if state.prev_close is None:
        tr = high - low
    else:
        tr = max(high - low, abs(high - state.prev_close), abs(low - state.prev_close))
    state.prev_close = close

    if state.atr is None:
        state._tr_sum += tr
        state._tr_count += 1
        if state._tr_count < state.length:
            return None, state
        state.atr = state._tr_sum / state.length       # SMA seed
    else:
        state.atr = (state.atr * (state.length - 1) + tr) / state.length
    return state.atr, state


# ---------------------------------------------------------------------------
# Indicator descriptor & registry  (populated by category modules)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StatefulIndicator:
    """Immutable descriptor for a single stateful indicator."""
    kind:         str
    inputs:       Tuple[str, ...]
    init:         Callable[[Dict[str, Any]], Any]
    update:       Callable[[Any, Dict[str, Any], Dict[str, Any]],
                           Tuple[List[Optional[float]], Any]]
    output_names: Callable[[Dict[str, Any]], List[str]]


# Populated by category modules at import time.
STATEFUL_REGISTRY: Dict[str, StatefulIndicator] = {}


def get_indicator(kind: str) -> StatefulIndicator:
    indicator = STATEFUL_REGISTRY.get(kind)
    if indicator is None:
        raise ValueError(f"Indicator '{kind}' not found in STATEFUL_REGISTRY")
    return indicator


# ---------------------------------------------------------------------------
# Replay
# ---------------------------------------------------------------------------

def replay(
        kind: str, inputs: Mapping[str, Any], params: Optional[Dict[str, Any]] = None
) -> Tuple[np.ndarray, Any]:
    """Run the fold for *kind* from the first bar to the last.

    *inputs* maps each name in ``indicator.inputs`` to an equally long
    array-like. Returns ``(matrix, state)`` where ``matrix`` has one row
    per bar and one column per output. Rows whose inputs contain NaN stay
    NaN and do not advance the state. The bar dict handed to ``update``
    also carries ``index``, the bar's position.
    """
    params = params or {}
    indicator = get_indicator(kind)
    missing = [k for k in indicator.inputs if k not in inputs]
    if missing:
        raise ValueError(f"Indicator '{kind}' needs inputs {missing}")

    keys = indicator.inputs
    columns = [np.asarray(inputs[k], dtype=np.float64) for k in keys]
    n = len(columns[0]) if columns else 0
    if any(len(c) != n for c in columns):
        raise ValueError(f"Indicator '{kind}' inputs differ in length")

    width = len(indicator.output_names(params))
    out = np.full((n, width), np.nan)
    state = indicator.init(params)

    for i in range(n):
        bar: Dict[str, float] = {"index": i}
        valid = True
        for k, col in zip(keys, columns):
            v = col[i]
            if v != v:
                valid = False
                break
            bar[k] = float(v)
        if not valid:
            continue
        values, state = indicator.update(state, bar, params)
        for j, v in enumerate(values):
            if v is not None:
                out[i, j] = v
    return out, state


# ---------------------------------------------------------------------------
# Output-name helpers
# ---------------------------------------------------------------------------

def resolve_output_names(
        base_names: List[str], spec: Dict[str, Any]
) -> Tuple[Optional[List[str]], Optional[str]]:
    """Apply prefix / suffix / col_names overrides from *spec*."""
    names = list(base_names)
    delimiter = spec.get("delimiter", "_")
    prefix = spec.get("prefix") or ""
    suffix = spec.get("suffix") or ""
    if prefix:
        prefix = f"{prefix}{delimiter}"
    if suffix:
        suffix = f"{delimiter}{suffix}"
    if prefix or suffix:
        names = [f"{prefix}{n}{suffix}" for n in names]
    col_names = spec.get("col_names")
    if col_names is not None:
        if not isinstance(col_names, tuple):
            col_names = (col_names,)
        if len(col_names) < len(names):
            return None, f"[!] col_names too short: {len(col_names)} < {len(names)}"
        names = list(col_names[: len(names)])
    return names, None


def stateful_supported_kinds() -> List[str]:
    """Return sorted list of supported indicator kinds."""
    return sorted(STATEFUL_REGISTRY.keys())
