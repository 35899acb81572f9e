# -*- coding: utf-8 -*-
"""Bollinger Bands (BB)."""
from pandas_ta_series.indicators._base import (
    IndicatorMetadata, IndicatorResult, IndicatorSpec, InputConfig, InputType, PlotConfig,
    build_plot, collect_defaults, ma_type_input, prepare, register, source_input,
)
from pandas_ta_series.ma import source_series
from pandas_ta_series.ta import bb

metadata = IndicatorMetadata(title="Bollinger Bands", short_title="BB", overlay=True)
input_config = (
    InputConfig("length", InputType.INT, 20, title="Length", min=1),
    ma_type_input("ma_type", "Basis MA Type"),
    source_input(),
    InputConfig("mult", InputType.FLOAT, 2.0, title="StdDev", min=0.001, max=50),
)
plot_config = (
    PlotConfig("plot0", "Basis", color="#2962FF"),
    PlotConfig("plot1", "Upper", color="#F23645"),
    PlotConfig("plot2", "Lower", color="#089981"),
)
default_inputs = collect_defaults(input_config)


def calculate(bars, inputs=None) -> IndicatorResult:
    store, params = prepare(bars, input_config, inputs, "bb")
    src = source_series(store, params["source"])
    basis, upper, lower = bb(src, params["length"], params["mult"], params["ma_type"])
    return IndicatorResult(metadata, {
        "plot0": build_plot(store, basis),
        "plot1": build_plot(store, upper),
        "plot2": build_plot(store, lower),
    })


register(IndicatorSpec("bb", "volatility", metadata, input_config, plot_config, calculate))
