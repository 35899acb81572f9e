# -*- coding: utf-8 -*-
"""Volume Weighted Moving Average (VWMA)."""
from pandas_ta_series.indicators._base import (
    IndicatorMetadata, IndicatorResult, IndicatorSpec, InputConfig, InputType, PlotConfig,
    build_plot, collect_defaults, prepare, register, source_input,
)
from pandas_ta_series.ma import source_series, vwma

metadata = IndicatorMetadata(title="Volume Weighted Moving Average", short_title="VWMA", overlay=True)
input_config = (
    InputConfig("length", InputType.INT, 20, title="Length", min=1),
    source_input(),
)
plot_config = (PlotConfig("plot0", "VWMA", color="#2962FF"),)
default_inputs = collect_defaults(input_config)


def calculate(bars, inputs=None) -> IndicatorResult:
    store, params = prepare(bars, input_config, inputs, "vwma")
    values = vwma(source_series(store, params["source"]), params["length"])
    return IndicatorResult(metadata, {"plot0": build_plot(store, values)})


register(IndicatorSpec("vwma", "overlap", metadata, input_config, plot_config, calculate))
