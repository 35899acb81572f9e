# -*- coding: utf-8 -*-
"""Parabolic SAR."""
from pandas_ta_series.indicators._base import (
    IndicatorMetadata, IndicatorResult, IndicatorSpec, InputConfig, InputType, PlotConfig,
    build_plot, collect_defaults, prepare, register,
)
from pandas_ta_series.series import Series
from pandas_ta_series.ta import sar

metadata = IndicatorMetadata(title="Parabolic SAR", short_title="SAR", overlay=True)
input_config = (
    InputConfig("start", InputType.FLOAT, 0.02, title="Start", min=0.0001, step=0.01),
    InputConfig("increment", InputType.FLOAT, 0.02, title="Increment", min=0.0001, step=0.01),
    InputConfig("maximum", InputType.FLOAT, 0.2, title="Max Value", min=0.01, step=0.01),
)
plot_config = (PlotConfig("plot0", "ParabolicSAR", color="#2962FF", line_width=1),)
default_inputs = collect_defaults(input_config)


def calculate(bars, inputs=None) -> IndicatorResult:
    store, params = prepare(bars, input_config, inputs, "parabolic_sar")
    high, low, close = (Series.from_bars(store, name) for name in ("high", "low", "close"))
    values, direction, _ = sar(high, low, close, params["start"], params["increment"], params["maximum"])
    return IndicatorResult(
        metadata,
        {"plot0": build_plot(store, values)},
        extras={"direction": direction.to_array().copy()},
    )


register(IndicatorSpec("parabolic_sar", "trend", metadata, input_config, plot_config, calculate))
