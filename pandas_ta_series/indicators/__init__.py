# -*- coding: utf-8 -*-
"""pandas-ta-series.indicators – chart-ready indicator catalog.

Indicator modules populate INDICATOR_REGISTRY at import time.
"""
from typing import Any, Dict, List, Mapping, Optional

from pandas_ta_series.maps import Category
from ._base import (
    INDICATOR_REGISTRY,
    IndicatorMetadata,
    IndicatorResult,
    IndicatorSpec,
    InputConfig,
    InputType,
    PlotConfig,
    PlotPoint,
    collect_defaults,
    resolve_inputs,
)

# ---------------------------------------------------------------------------
# Indicator modules – each registers itself on import
# ---------------------------------------------------------------------------
from . import sma               # noqa: F401
from . import ema               # noqa: F401
from . import rma               # noqa: F401
from . import wma               # noqa: F401
from . import vwma              # noqa: F401
from . import lsma              # noqa: F401
from . import mcginley_dynamic  # noqa: F401
from . import ma_ribbon         # noqa: F401
from . import bb                # noqa: F401
from . import atr               # noqa: F401
from . import momentum          # noqa: F401
from . import roc               # noqa: F401
from . import parabolic_sar     # noqa: F401
from . import supertrend        # noqa: F401
from . import zigzag            # noqa: F401


def get_indicator_spec(kind: str) -> IndicatorSpec:
    spec = INDICATOR_REGISTRY.get(kind.lower())
    if spec is None:
        raise ValueError(f"Indicator '{kind}' not found, available: {sorted(INDICATOR_REGISTRY)}")
    return spec


def calculate(kind: str, bars: Any, inputs: Optional[Mapping[str, Any]] = None) -> IndicatorResult:
    """Run catalog indicator *kind* over *bars* (BarStore, bar list or DataFrame)."""
    return get_indicator_spec(kind).calculate(bars, inputs)


def list_indicators(category: Optional[str] = None) -> List[str]:
    """Sorted indicator kinds, optionally restricted to one category."""
    if category is not None and category not in Category:
        raise ValueError(f"Unknown category '{category}', expected one of {sorted(Category)}")
    return sorted(
        kind for kind, spec in INDICATOR_REGISTRY.items()
        if category is None or spec.category == category
    )


def indicator_catalog() -> Dict[str, List[str]]:
    """Category -> indicator kinds."""
    catalog: Dict[str, List[str]] = {}
    for kind in list_indicators():
        catalog.setdefault(INDICATOR_REGISTRY[kind].category, []).append(kind)
    return catalog


__all__ = [
    "INDICATOR_REGISTRY",
    "IndicatorMetadata",
    "IndicatorResult",
    "IndicatorSpec",
    "InputConfig",
    "InputType",
    "PlotConfig",
    "PlotPoint",
    "collect_defaults",
    "resolve_inputs",
    "get_indicator_spec",
    "calculate",
    "list_indicators",
    "indicator_catalog",
]
