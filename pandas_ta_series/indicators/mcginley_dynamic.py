# -*- coding: utf-8 -*-
"""McGinley Dynamic (MGD): a moving average that speeds up when price runs away from it."""
from pandas_ta_series.indicators._base import (
    IndicatorMetadata, IndicatorResult, IndicatorSpec, InputConfig, InputType, PlotConfig,
    build_plot, collect_defaults, prepare, register, source_input,
)
from pandas_ta_series.ma import source_series
from pandas_ta_series.ta import mcginley

metadata = IndicatorMetadata(title="McGinley Dynamic", short_title="MGD", overlay=True)
input_config = (
    InputConfig("length", InputType.INT, 14, title="Length", min=1, max=500, step=1),
    source_input(),
)
plot_config = (PlotConfig("plot0", "McGinley Dynamic", color="#2962FF"),)
default_inputs = collect_defaults(input_config)


def calculate(bars, inputs=None) -> IndicatorResult:
    store, params = prepare(bars, input_config, inputs, "mcginley_dynamic")
    values = mcginley(source_series(store, params["source"]), params["length"])
    return IndicatorResult(metadata, {"plot0": build_plot(store, values)})


register(IndicatorSpec("mcginley_dynamic", "overlap", metadata, input_config, plot_config, calculate))
