# -*- coding: utf-8 -*-
"""Momentum (Mom): ``source - source[length]``."""
from pandas_ta_series.indicators._base import (
    IndicatorMetadata, IndicatorResult, IndicatorSpec, InputConfig, InputType, PlotConfig,
    build_plot, collect_defaults, prepare, register, source_input,
)
from pandas_ta_series.ma import source_series
from pandas_ta_series.ta import mom

metadata = IndicatorMetadata(title="Momentum", short_title="Mom", overlay=False)
input_config = (
    InputConfig("length", InputType.INT, 10, title="Length", min=1),
    source_input(),
)
plot_config = (PlotConfig("plot0", "Mom", color="#2962FF"),)
default_inputs = collect_defaults(input_config)


def calculate(bars, inputs=None) -> IndicatorResult:
    store, params = prepare(bars, input_config, inputs, "momentum")
    values = mom(source_series(store, params["source"]), params["length"])
    return IndicatorResult(metadata, {"plot0": build_plot(store, values)})


register(IndicatorSpec("momentum", "momentum", metadata, input_config, plot_config, calculate))
