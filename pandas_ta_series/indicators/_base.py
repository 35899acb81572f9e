# -*- coding: utf-8 -*-
"""pandas-ta-series indicators – shared base: config types, results, registry.

Every indicator module declares ``metadata``, ``input_config`` and
``plot_config``, implements ``calculate(bars, inputs=None)`` and registers
an ``IndicatorSpec`` in ``INDICATOR_REGISTRY`` at import time.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from pandas_ta_series.bars import BarStore, as_store
from pandas_ta_series.logging_config import get_logger
from pandas_ta_series.ma import MA_OPTIONS, SOURCE_OPTIONS, Source
from pandas_ta_series.stateful import _as_bool, _as_float, _as_int

logger = get_logger("indicators")


class InputType(str, Enum):
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"
    SOURCE = "source"


@dataclass(frozen=True)
class InputConfig:
    id: str
    type: InputType
    default: Any
    title: Optional[str] = None
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    options: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class PlotConfig:
    id: str
    title: str
    color: str = "#2962FF"
    line_width: int = 2


@dataclass(frozen=True)
class IndicatorMetadata:
    title: str
    short_title: str
    overlay: bool = True


class PlotPoint(NamedTuple):
    time: Any
    value: float


@dataclass
class IndicatorResult:
    metadata: IndicatorMetadata
    plots: Dict[str, List[PlotPoint]]
    extras: Dict[str, Any] = field(default_factory=dict)

    def to_frame(self):
        """Plots as columns of a DataFrame indexed by bar time."""
        import pandas as pd

        if not self.plots:
            return pd.DataFrame()
        first = next(iter(self.plots.values()))
        index = pd.Index([p.time for p in first], name="time")
        data = {pid: [p.value for p in points] for pid, points in self.plots.items()}
        return pd.DataFrame(data, index=index)


@dataclass(frozen=True)
class IndicatorSpec:
    """Immutable descriptor for a catalog indicator."""
    kind:         str
    category:     str
    metadata:     IndicatorMetadata
    input_config: Tuple[InputConfig, ...]
    plot_config:  Tuple[PlotConfig, ...]
    calculate:    Callable[..., IndicatorResult]

    @property
    def default_inputs(self) -> Dict[str, Any]:
        return collect_defaults(self.input_config)


# Populated by indicator modules at import time.
INDICATOR_REGISTRY: Dict[str, IndicatorSpec] = {}


def register(spec: IndicatorSpec) -> IndicatorSpec:
    INDICATOR_REGISTRY[spec.kind] = spec
    return spec


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

def source_input(id: str = "source", title: str = "Source", default: str = "close") -> InputConfig:
    return InputConfig(id, InputType.SOURCE, default, title=title, options=SOURCE_OPTIONS)


def ma_type_input(id: str, title: str, default: str = "SMA") -> InputConfig:
    return InputConfig(id, InputType.STRING, default, title=title, options=MA_OPTIONS)


def collect_defaults(input_config: Sequence[InputConfig]) -> Dict[str, Any]:
    return {cfg.id: cfg.default for cfg in input_config}


def _clamp(value, cfg: InputConfig):
    if cfg.min is not None and value < cfg.min:
        value = type(value)(cfg.min)
    if cfg.max is not None and value > cfg.max:
        value = type(value)(cfg.max)
    return value


def _coerce(cfg: InputConfig, value: Any) -> Any:
    if cfg.type is InputType.INT:
        return _clamp(_as_int(value, cfg.default), cfg)
    if cfg.type is InputType.FLOAT:
        return _clamp(_as_float(value, cfg.default), cfg)
    if cfg.type is InputType.BOOL:
        return _as_bool(value, cfg.default)
    if cfg.type is InputType.SOURCE:
        return Source.parse(value).value
    value = str(value)
    if cfg.options and value not in cfg.options:
        raise ValueError(f"Input '{cfg.id}' must be one of {cfg.options}, got '{value}'")
    return value


def resolve_inputs(input_config: Sequence[InputConfig], inputs: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Merge *inputs* over the defaults and coerce each to its declared type.

    Numbers outside ``[min, max]`` are clamped; unparseable numbers fall
    back to the default. Unknown input ids raise ``ValueError``.
    """
    inputs = dict(inputs or {})
    known = {cfg.id for cfg in input_config}
    unknown = sorted(set(inputs) - known)
    if unknown:
        raise ValueError(f"Unknown inputs {unknown}, expected some of {sorted(known)}")

    resolved: Dict[str, Any] = {}
    for cfg in input_config:
        value = inputs.get(cfg.id)
        resolved[cfg.id] = cfg.default if value is None else _coerce(cfg, value)
    return resolved


# ---------------------------------------------------------------------------
# Plots
# ---------------------------------------------------------------------------

def build_plot(store: BarStore, values) -> List[PlotPoint]:
    """One point per bar; *values* is a Series or an aligned array."""
    array = values.to_array() if hasattr(values, "to_array") else np.asarray(values, dtype=np.float64)
    return [PlotPoint(bar.time, float(v)) for bar, v in zip(store.snapshot(), array)]


def prepare(bars: Any, input_config: Sequence[InputConfig],
            inputs: Optional[Mapping[str, Any]], kind: str) -> Tuple[BarStore, Dict[str, Any]]:
    store = as_store(bars)
    params = resolve_inputs(input_config, inputs)
    logger.debug("calculate %s over %d bars with %s", kind, len(store), params)
    return store, params
