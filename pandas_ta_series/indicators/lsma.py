# -*- coding: utf-8 -*-
"""Least Squares Moving Average (LSMA): the linear regression line's end point."""
from pandas_ta_series.indicators._base import (
    IndicatorMetadata, IndicatorResult, IndicatorSpec, InputConfig, InputType, PlotConfig,
    build_plot, collect_defaults, prepare, register, source_input,
)
from pandas_ta_series.ma import source_series

metadata = IndicatorMetadata(title="Least Squares Moving Average", short_title="LSMA", overlay=True)
input_config = (
    InputConfig("length", InputType.INT, 25, title="Length", min=1),
    InputConfig("offset", InputType.INT, 0, title="Offset"),
    source_input(),
)
plot_config = (PlotConfig("plot0", "LSMA", color="#2962FF"),)
default_inputs = collect_defaults(input_config)


def calculate(bars, inputs=None) -> IndicatorResult:
    store, params = prepare(bars, input_config, inputs, "lsma")
    values = source_series(store, params["source"]).linreg(params["length"], params["offset"])
    return IndicatorResult(metadata, {"plot0": build_plot(store, values)})


register(IndicatorSpec("lsma", "overlap", metadata, input_config, plot_config, calculate))
