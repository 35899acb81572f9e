# -*- coding: utf-8 -*-
"""Moving Average Ribbon: four independently configured moving averages."""
import numpy as np

from pandas_ta_series.indicators._base import (
    IndicatorMetadata, IndicatorResult, IndicatorSpec, InputConfig, InputType, PlotConfig,
    build_plot, collect_defaults, ma_type_input, prepare, register, source_input,
)
from pandas_ta_series.ma import ma, source_series

_LENGTHS = (20, 50, 100, 200)
_COLORS = ("#FFEB3B", "#FF9800", "#2196F3", "#9C27B0")

metadata = IndicatorMetadata(title="Moving Average Ribbon", short_title="MA Ribbon", overlay=True)
input_config = tuple(
    cfg
    for k, length in enumerate(_LENGTHS, start=1)
    for cfg in (
        InputConfig(f"show_ma{k}", InputType.BOOL, True, title=f"Show MA {k}"),
        ma_type_input(f"ma{k}_type", f"MA {k} Type"),
        source_input(f"ma{k}_source", f"MA {k} Source"),
        InputConfig(f"ma{k}_length", InputType.INT, length, title=f"MA {k} Length", min=1),
    )
)
plot_config = tuple(
    PlotConfig(f"plot{k}", f"MA {k + 1}", color=color, line_width=1)
    for k, color in enumerate(_COLORS)
)
default_inputs = collect_defaults(input_config)


def calculate(bars, inputs=None) -> IndicatorResult:
    store, params = prepare(bars, input_config, inputs, "ma_ribbon")
    plots = {}
    for k in range(1, len(_LENGTHS) + 1):
        if params[f"show_ma{k}"]:
            src = source_series(store, params[f"ma{k}_source"])
            values = ma(params[f"ma{k}_type"], src, params[f"ma{k}_length"])
        else:
            values = np.full(len(store), np.nan)
        plots[f"plot{k - 1}"] = build_plot(store, values)
    return IndicatorResult(metadata, plots)


register(IndicatorSpec("ma_ribbon", "overlap", metadata, input_config, plot_config, calculate))
