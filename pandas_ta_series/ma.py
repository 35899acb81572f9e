# -*- coding: utf-8 -*-
"""Price sources and moving-average selection.

The moving average is chosen once, when the graph is built; the returned
Series carries no per-bar branching on the MA type.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Optional, Union

from pandas_ta_series.series import Series


class Source(str, Enum):
    OPEN = "open"
    HIGH = "high"
    LOW = "low"
    CLOSE = "close"
    VOLUME = "volume"
    HL2 = "hl2"
    HLC3 = "hlc3"
    OHLC4 = "ohlc4"
    HLCC4 = "hlcc4"

    @classmethod
    def parse(cls, value: Union["Source", str]) -> "Source":
        if isinstance(value, Source):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            options = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown source '{value}', expected one of: {options}") from None


SOURCE_OPTIONS = tuple(s.value for s in Source if s is not Source.VOLUME)


def source_series(bars, source: Union[Source, str] = "close") -> Series:
    """Series for a raw field or a composite price such as ``hl2``."""
    src = Source.parse(source)
    if src in (Source.OPEN, Source.HIGH, Source.LOW, Source.CLOSE, Source.VOLUME):
        return Series.from_bars(bars, src.value)

    high = Series.from_bars(bars, "high")
    low = Series.from_bars(high.store, "low")
    if src is Source.HL2:
        return (high + low) / 2.0

    close = Series.from_bars(high.store, "close")
    if src is Source.HLC3:
        return (high + low + close) / 3.0
    if src is Source.HLCC4:
        return (high + low + close + close) / 4.0

    open_ = Series.from_bars(high.store, "open")
    return (open_ + high + low + close) / 4.0


class MAType(Enum):
    SMA = "SMA"
    EMA = "EMA"
    RMA = "SMMA (RMA)"
    WMA = "WMA"
    VWMA = "VWMA"

    @classmethod
    def parse(cls, value: Union["MAType", str]) -> "MAType":
        if isinstance(value, MAType):
            return value
        label = str(value).strip().upper()
        for kind in cls:
            if label in (kind.value.upper(), kind.name):
                return kind
        if label in ("SMMA", "RMA"):
            return cls.RMA
        options = ", ".join(k.value for k in cls)
        raise ValueError(f"Unknown moving average '{value}', expected one of: {options}")


MA_OPTIONS = tuple(k.value for k in MAType)


def vwma(source: Series, length: int, volume: Optional[Series] = None) -> Series:
    """Volume Weighted Moving Average."""
    if volume is None:
        volume = Series.from_bars(source.store, "volume")
    return (source * volume).sma(length) / volume.sma(length)


_MA_DISPATCH: Dict[MAType, Callable[..., Series]] = {
    MAType.SMA: lambda source, length, volume: source.sma(length),
    MAType.EMA: lambda source, length, volume: source.ema(length),
    MAType.RMA: lambda source, length, volume: source.rma(length),
    MAType.WMA: lambda source, length, volume: source.wma(length),
    MAType.VWMA: lambda source, length, volume: vwma(source, length, volume),
}


def ma(ma_type: Union[MAType, str], source: Series, length: int, volume: Optional[Series] = None) -> Series:
    """Moving average of *source* selected by *ma_type* (e.g. ``"SMMA (RMA)"``)."""
    return _MA_DISPATCH[MAType.parse(ma_type)](source, length, volume)
