# -*- coding: utf-8 -*-
"""Supertrend: an ATR trailing stop drawn as separate up and down trend lines."""
import numpy as np

from pandas_ta_series.indicators._base import (
    IndicatorMetadata, IndicatorResult, IndicatorSpec, InputConfig, InputType, PlotConfig,
    build_plot, collect_defaults, prepare, register,
)
from pandas_ta_series.series import Series
from pandas_ta_series.ta import supertrend

metadata = IndicatorMetadata(title="Supertrend", short_title="ST", overlay=True)
input_config = (
    InputConfig("atr_period", InputType.INT, 10, title="ATR Length", min=1),
    InputConfig("factor", InputType.FLOAT, 3.0, title="Factor", min=0.01, step=0.01),
)
plot_config = (
    PlotConfig("plot0", "Up Trend", color="#26A69A"),
    PlotConfig("plot1", "Down Trend", color="#EF5350"),
)
default_inputs = collect_defaults(input_config)


def calculate(bars, inputs=None) -> IndicatorResult:
    store, params = prepare(bars, input_config, inputs, "supertrend")
    high, low, close = (Series.from_bars(store, name) for name in ("high", "low", "close"))
    line, direction = supertrend(high, low, close, params["factor"], params["atr_period"])

    values = line.to_array()
    dirs = direction.to_array()
    up = np.where(dirs < 0, values, np.nan)
    down = np.where(dirs >= 0, values, np.nan)
    # The first bar only seeds the bands
    if up.size:
        up[0] = down[0] = np.nan

    return IndicatorResult(
        metadata,
        {"plot0": build_plot(store, up), "plot1": build_plot(store, down)},
        extras={"direction": dirs.copy()},
    )


register(IndicatorSpec("supertrend", "trend", metadata, input_config, plot_config, calculate))
