# -*- coding: utf-8 -*-
"""Rate Of Change (ROC) in percent."""
from pandas_ta_series.indicators._base import (
    IndicatorMetadata, IndicatorResult, IndicatorSpec, InputConfig, InputType, PlotConfig,
    build_plot, collect_defaults, prepare, register, source_input,
)
from pandas_ta_series.ma import source_series
from pandas_ta_series.ta import roc

metadata = IndicatorMetadata(title="Rate Of Change", short_title="ROC", overlay=False)
input_config = (
    InputConfig("length", InputType.INT, 9, title="Length", min=1),
    source_input(),
)
plot_config = (PlotConfig("plot0", "ROC", color="#2962FF"),)
default_inputs = collect_defaults(input_config)


def calculate(bars, inputs=None) -> IndicatorResult:
    store, params = prepare(bars, input_config, inputs, "roc")
    values = roc(source_series(store, params["source"]), params["length"])
    return IndicatorResult(metadata, {"plot0": build_plot(store, values)})


register(IndicatorSpec("roc", "momentum", metadata, input_config, plot_config, calculate))
