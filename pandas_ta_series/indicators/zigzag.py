# -*- coding: utf-8 -*-
"""Zig Zag: confirmed swing pivots plus the still-open leg to the last bar.

The plot is NaN everywhere except at each pivot's bar (and the extension
bar when ``extend_last`` is on). ``extras`` carries the pivot objects.
"""
import numpy as np

from pandas_ta_series.indicators._base import (
    IndicatorMetadata, IndicatorResult, IndicatorSpec, InputConfig, InputType, PlotConfig,
    build_plot, collect_defaults, prepare, register,
)
from pandas_ta_series.stateful import ZigZagSettings, calculate_zigzag

metadata = IndicatorMetadata(title="Zig Zag", short_title="ZigZag", overlay=True)
input_config = (
    InputConfig("deviation", InputType.FLOAT, 5.0, title="Price deviation for reversals (%)",
                min=0.00001, max=100),
    InputConfig("depth", InputType.INT, 10, title="Pivot legs", min=2),
    InputConfig("extend_last", InputType.BOOL, True, title="Extend to last bar"),
    InputConfig("allow_zigzag_on_one_bar", InputType.BOOL, True, title="Allow Zig Zag on one bar"),
)
plot_config = (PlotConfig("plot0", "Zig Zag", color="#2962FF"),)
default_inputs = collect_defaults(input_config)


def calculate(bars, inputs=None) -> IndicatorResult:
    store, params = prepare(bars, input_config, inputs, "zigzag")
    settings = ZigZagSettings(**params)
    result = calculate_zigzag(store.snapshot(), settings)

    values = np.full(len(store), np.nan)
    for pivot in result.pivots:
        values[pivot.end.bar_index] = pivot.end.price
    if result.extension is not None:
        values[result.extension.end.bar_index] = result.extension.end.price

    return IndicatorResult(
        metadata,
        {"plot0": build_plot(store, values)},
        extras={"pivots": result.pivots, "extension": result.extension},
    )


register(IndicatorSpec("zigzag", "trend", metadata, input_config, plot_config, calculate))
