# -*- coding: utf-8 -*-
"""pandas-ta-series.stateful – sequential (fold) indicator package.

Category modules populate STATEFUL_REGISTRY at import time.  This package
re-exports it plus the shared base API.
"""
from __future__ import annotations

# Base API (always available)
from ._base import (
    NAN,
    ATRState,
    StatefulIndicator,
    STATEFUL_REGISTRY,
    atr_update_raw,
    get_indicator,
    replay,
    resolve_output_names,
    stateful_supported_kinds,
    _is_nan,
    _param,
    _as_int,
    _as_float,
    _as_bool,
)

# ---------------------------------------------------------------------------
# Category modules – each populates the shared registry on import
# ---------------------------------------------------------------------------
from . import _overlap      # noqa: F401  mcgd, supertrend
from . import _trend        # noqa: F401  psar, zigzag

from ._trend import (
    ChartPoint,
    Pivot,
    ZigZagResult,
    ZigZagSettings,
    calculate_zigzag,
    zigzag_extension,
)

__all__ = [
    # base
    "NAN",
    "ATRState",
    "StatefulIndicator",
    "STATEFUL_REGISTRY",
    "atr_update_raw",
    "get_indicator",
    "replay",
    "resolve_output_names",
    "stateful_supported_kinds",
    # zigzag
    "ChartPoint",
    "Pivot",
    "ZigZagResult",
    "ZigZagSettings",
    "calculate_zigzag",
    "zigzag_extension",
]
