# -*- coding: utf-8 -*-
"""Smoothed Moving Average (SMMA / RMA)."""
from pandas_ta_series.indicators._base import (
    IndicatorMetadata, IndicatorResult, IndicatorSpec, InputConfig, InputType, PlotConfig,
    build_plot, collect_defaults, prepare, register, source_input,
)
from pandas_ta_series.ma import source_series

metadata = IndicatorMetadata(title="Smoothed Moving Average", short_title="SMMA", overlay=True)
input_config = (
    InputConfig("length", InputType.INT, 7, title="Length", min=1),
    source_input(),
)
plot_config = (PlotConfig("plot0", "SMMA", color="#673AB7"),)
default_inputs = collect_defaults(input_config)


def calculate(bars, inputs=None) -> IndicatorResult:
    store, params = prepare(bars, input_config, inputs, "rma")
    values = source_series(store, params["source"]).rma(params["length"])
    return IndicatorResult(metadata, {"plot0": build_plot(store, values)})


register(IndicatorSpec("rma", "overlap", metadata, input_config, plot_config, calculate))
