# -*- coding: utf-8 -*-
"""``df.tas`` DataFrame extension.

    >>> import pandas_ta_series  # registers the accessor
    >>> df.tas.calculate("bb", length=20)
    >>> df.tas.stateful("psar", prefix="X")
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import numpy as np
from pandas import DataFrame
from pandas.api.extensions import register_dataframe_accessor

from pandas_ta_series.bars import BarStore
from pandas_ta_series.indicators import calculate, get_indicator_spec, list_indicators
from pandas_ta_series.stateful import get_indicator, replay, resolve_output_names

_OUTPUT_KEYS = ("prefix", "suffix", "delimiter", "col_names")


@register_dataframe_accessor("tas")
class AnalysisIndicators:
    """Indicator access for an OHLCV DataFrame.

    Column names are matched case-insensitively; ``volume`` is optional.
    Results are indexed like the source DataFrame.
    """

    def __init__(self, pandas_obj: DataFrame) -> None:
        self._df = pandas_obj

    def store(self) -> BarStore:
        """A fresh BarStore holding the DataFrame's bars."""
        return BarStore.from_dataframe(self._df)

    def indicators(self, category: Optional[str] = None) -> List[str]:
        return list_indicators(category)

    def calculate(self, kind: str, append: bool = False, **inputs: Any) -> DataFrame:
        """Catalog indicator plots as columns ``<SHORT>_<plot title>``."""
        result = calculate(kind, self.store(), inputs)
        frame = DataFrame(index=self._df.index)
        short = result.metadata.short_title
        titles = {cfg.id: cfg.title for cfg in get_indicator_spec(kind).plot_config}
        for pid, points in result.plots.items():
            frame[f"{short}_{titles.get(pid, pid)}"] = [p.value for p in points]
        return self._finish(frame, append)

    def stateful(self, kind: str, append: bool = False, **params: Any) -> DataFrame:
        """Raw outputs of a stateful fold, one column per output."""
        indicator = get_indicator(kind)
        spec = {k: params.pop(k) for k in _OUTPUT_KEYS if k in params}
        names, error = resolve_output_names(indicator.output_names(params), spec)
        if error:
            raise ValueError(error)

        store = self.store()
        inputs: Dict[str, np.ndarray] = {name: store.column(name) for name in indicator.inputs}
        matrix, _ = replay(kind, inputs, params)
        frame = DataFrame(matrix, index=self._df.index, columns=names)
        return self._finish(frame, append)

    def _finish(self, frame: DataFrame, append: bool) -> DataFrame:
        if append:
            for column in frame.columns:
                self._df[column] = frame[column]
        return frame
