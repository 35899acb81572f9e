# -*- coding: utf-8 -*-
"""Chart adapter boundary.

``PlotRuntime`` turns bar-aligned values into chart series through a
caller supplied ``ChartAdapter``. The library never draws anything itself.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

import numpy as np

from pandas_ta_series.bars import BarStore, as_store
from pandas_ta_series.exceptions import PlotContextError
from pandas_ta_series.logging_config import get_logger

logger = get_logger("runtime")


class SeriesHandle(Protocol):
    def set_data(self, points: List[Dict[str, Any]]) -> None: ...


class ChartAdapter(Protocol):
    def add_series(self, series_type: str, options: Dict[str, Any]) -> SeriesHandle: ...

    def remove_series(self, handle: SeriesHandle) -> None: ...


_SERIES_TYPES = {
    "histogram": "histogram",
    "columns": "histogram",
    "area": "area",
    "areabr": "area",
}

_LINE_STYLES = {"solid": 0, "dotted": 1, "dashed": 2}


def series_type_for(style: Optional[str]) -> str:
    return _SERIES_TYPES.get(style or "", "line")


def line_style_for(style: Optional[str]) -> int:
    return _LINE_STYLES.get(style or "", 0)


@dataclass
class ActivePlot:
    id: str
    handle: Any


class PlotRuntime:
    """Holds the chart context and the plots created through it."""

    def __init__(self) -> None:
        self.adapter: Optional[ChartAdapter] = None
        self.store: Optional[BarStore] = None
        self.active_plots: List[ActivePlot] = []
        self._counter = 0
        self._calculate: Optional[Callable[[], None]] = None

    @property
    def has_context(self) -> bool:
        return self.adapter is not None

    def set_context(self, adapter: ChartAdapter, bars: Any) -> None:
        """Bind a chart and the bars whose times label plotted values."""
        self.clear_plots()
        self.adapter = adapter
        self.store = as_store(bars)
        self._counter = 0

    def clear_context(self) -> None:
        self.clear_plots()
        self.adapter = None
        self.store = None
        self._calculate = None
        self._counter = 0

    def register_calculate(self, fn: Callable[[], None]) -> None:
        self._calculate = fn

    def recalculate(self) -> None:
        """Drop every plot and run the registered calculate function again."""
        if self._calculate is None:
            return
        self.clear_plots()
        self._counter = 0
        self._calculate()

    def clear_plots(self) -> None:
        if self.adapter is not None:
            for plot in self.active_plots:
                try:
                    self.adapter.remove_series(plot.handle)
                except Exception:
                    logger.warning("failed to remove plot %s", plot.id, exc_info=True)
        self.active_plots = []

    def _require_context(self, what: str) -> ChartAdapter:
        if self.adapter is None or self.store is None:
            raise PlotContextError(f"Chart context not set. Call set_context() before {what}.")
        return self.adapter

    def _next_id(self, title: Optional[str]) -> str:
        plot_id = f"plot_{self._counter}"
        self._counter += 1
        if title:
            plot_id += "_" + re.sub(r"\s+", "_", title)
        return plot_id

    def plot(self, values: Any, title: Optional[str] = None, color: Optional[str] = None,
             line_width: Optional[int] = None, style: Optional[str] = None) -> str:
        """Send *values* (a Series or a bar-aligned array) to the chart.

        NaN values are left out of the data sent to the adapter.
        """
        adapter = self._require_context("plotting")
        array = values.to_array() if hasattr(values, "to_array") else np.asarray(values, dtype=np.float64)

        plot_id = self._next_id(title)
        options = {"color": color, "lineWidth": line_width, "lineStyle": line_style_for(style)}
        handle = adapter.add_series(series_type_for(style), options)

        data = [
            {"time": bar.time, "value": float(v)}
            for bar, v in zip(self.store.snapshot(), array)
            if not np.isnan(v)
        ]
        handle.set_data(data)
        self.active_plots.append(ActivePlot(plot_id, handle))
        logger.debug("plotted %s with %d points", plot_id, len(data))
        return plot_id

    def hline(self, price: float, title: Optional[str] = None, color: Optional[str] = None,
              line_style: Optional[str] = "dashed", line_width: Optional[int] = 1) -> str:
        """Horizontal line at *price* across every bar."""
        self._require_context("creating hlines")
        return self.plot(np.full(len(self.store), float(price)), title, color, line_width, line_style)

    def plot_result(self, result, plot_config: Sequence[Any] = ()) -> List[str]:
        """Plot every series of an ``IndicatorResult`` using its plot config."""
        configs = {cfg.id: cfg for cfg in plot_config}
        ids = []
        for pid, points in result.plots.items():
            cfg = configs.get(pid)
            values = [p.value for p in points]
            if cfg is None:
                ids.append(self.plot(values, title=pid))
            else:
                ids.append(self.plot(values, title=cfg.title, color=cfg.color, line_width=cfg.line_width))
        return ids
