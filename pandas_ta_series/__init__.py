# -*- coding: utf-8 -*-
from importlib.metadata import PackageNotFoundError, version as _version

try:
    version = _version("pandas_ta_series")
except PackageNotFoundError:
    version = "0.0.0"

from pandas_ta_series.maps import BAR_FIELDS, Category
from pandas_ta_series.logging_config import get_logger, setup_logging
from pandas_ta_series.exceptions import BarStoreRangeError, PlotContextError
from pandas_ta_series.bars import Bar, BarStore, as_store
from pandas_ta_series.series import OpCode, Series, SeriesArena, kernel
from pandas_ta_series import kernels
from pandas_ta_series.stateful import *
from pandas_ta_series.stateful import __all__ as stateful_all
from pandas_ta_series.ma import MAType, Source, ma, source_series
from pandas_ta_series import ta
from pandas_ta_series.indicators import (
    INDICATOR_REGISTRY,
    IndicatorResult,
    InputConfig,
    InputType,
    PlotConfig,
    PlotPoint,
    calculate,
    list_indicators,
)
from pandas_ta_series.runtime import ChartAdapter, PlotRuntime

# Enable "tas" DataFrame Extension
from pandas_ta_series.core import AnalysisIndicators

__all__ = [
    "version",
    "BAR_FIELDS",
    "Category",
    "get_logger",
    "setup_logging",
    "BarStoreRangeError",
    "PlotContextError",
    "Bar",
    "BarStore",
    "as_store",
    "OpCode",
    "Series",
    "SeriesArena",
    "kernel",
    "kernels",
    "MAType",
    "Source",
    "ma",
    "source_series",
    "ta",
    "INDICATOR_REGISTRY",
    "IndicatorResult",
    "InputConfig",
    "InputType",
    "PlotConfig",
    "PlotPoint",
    "calculate",
    "list_indicators",
    "ChartAdapter",
    "PlotRuntime",
    "AnalysisIndicators",
] + stateful_all
