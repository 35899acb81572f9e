# -*- coding: utf-8 -*-
"""Errors raised by pandas-ta-series.

Numeric trouble (division by zero, missing history) is reported as NaN in
the data, never as an exception. These types cover structural misuse only.
"""


class BarStoreRangeError(IndexError):
    """A store mutation addressed a bar that does not exist."""


class PlotContextError(RuntimeError):
    """``plot`` was called before a chart context was set."""
