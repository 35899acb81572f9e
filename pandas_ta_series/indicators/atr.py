# -*- coding: utf-8 -*-
"""Average True Range (ATR) with a selectable smoothing."""
from pandas_ta_series.indicators._base import (
    IndicatorMetadata, IndicatorResult, IndicatorSpec, InputConfig, InputType, PlotConfig,
    build_plot, collect_defaults, prepare, register,
)
from pandas_ta_series.ma import ma
from pandas_ta_series.series import Series
from pandas_ta_series.ta import tr

metadata = IndicatorMetadata(title="Average True Range", short_title="ATR", overlay=False)
input_config = (
    InputConfig("length", InputType.INT, 14, title="Length", min=1),
    InputConfig("smoothing", InputType.STRING, "RMA", title="Smoothing",
                options=("RMA", "SMA", "EMA", "WMA")),
)
plot_config = (PlotConfig("plot0", "ATR", color="#B71C1C"),)
default_inputs = collect_defaults(input_config)


def calculate(bars, inputs=None) -> IndicatorResult:
    store, params = prepare(bars, input_config, inputs, "atr")
    high, low, close = (Series.from_bars(store, name) for name in ("high", "low", "close"))
    values = ma(params["smoothing"], tr(high, low, close, handle_na=True), params["length"])
    return IndicatorResult(metadata, {"plot0": build_plot(store, values)})


register(IndicatorSpec("atr", "volatility", metadata, input_config, plot_config, calculate))
