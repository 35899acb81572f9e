# -*- coding: utf-8 -*-
"""Weighted Moving Average (WMA)."""
from pandas_ta_series.indicators._base import (
    IndicatorMetadata, IndicatorResult, IndicatorSpec, InputConfig, InputType, PlotConfig,
    build_plot, collect_defaults, prepare, register, source_input,
)
from pandas_ta_series.ma import source_series

metadata = IndicatorMetadata(title="Moving Average Weighted", short_title="WMA", overlay=True)
input_config = (
    InputConfig("length", InputType.INT, 9, title="Length", min=1),
    source_input(),
)
plot_config = (PlotConfig("plot0", "WMA", color="#2962FF"),)
default_inputs = collect_defaults(input_config)


def calculate(bars, inputs=None) -> IndicatorResult:
    store, params = prepare(bars, input_config, inputs, "wma")
    values = source_series(store, params["source"]).wma(params["length"])
    return IndicatorResult(metadata, {"plot0": build_plot(store, values)})


register(IndicatorSpec("wma", "overlap", metadata, input_config, plot_config, calculate))
