# -*- coding: utf-8 -*-
"""Bar Store: the single source of raw OHLCV data.

Every mutation bumps ``version``; lazily evaluated Series compare their
cached version against it to decide whether to recompute.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from pandas_ta_series.exceptions import BarStoreRangeError
from pandas_ta_series.logging_config import get_logger
from pandas_ta_series.maps import BAR_FIELDS, COLUMN_ALIASES

logger = get_logger("bars")


@dataclass(frozen=True)
class Bar:
    """One OHLCV record. ``volume`` may be missing; it reads as 0."""
    time: float
    open: float
    high: float
    low: float
    close: float
    volume: Optional[float] = None

    @classmethod
    def coerce(cls, obj: Any) -> "Bar":
        """Build a Bar from a Bar, a mapping or a ``(time, o, h, l, c[, v])`` tuple."""
        if isinstance(obj, Bar):
            return obj
        if isinstance(obj, Mapping):
            data = {COLUMN_ALIASES.get(str(k).lower(), str(k).lower()): v for k, v in obj.items()}
            try:
                return cls(
                    time=data["time"],
                    open=float(data["open"]),
                    high=float(data["high"]),
                    low=float(data["low"]),
                    close=float(data["close"]),
                    volume=None if data.get("volume") is None else float(data["volume"]),
                )
            except KeyError as ex:
                raise ValueError(f"Bar mapping is missing field {ex}") from None
        if isinstance(obj, (tuple, list)) and len(obj) in (5, 6):
            volume = obj[5] if len(obj) == 6 else None
            return cls(obj[0], float(obj[1]), float(obj[2]), float(obj[3]), float(obj[4]),
                       None if volume is None else float(volume))
        raise TypeError(f"Cannot build a Bar from {type(obj).__name__}")


BarLike = Union[Bar, Mapping[str, Any], Sequence[Any]]


def _field_value(bar: Bar, name: str) -> float:
    if name == "volume":
        return 0.0 if bar.volume is None else float(bar.volume)
    return float(getattr(bar, name))


class BarStore:
    """Ordered, versioned sequence of bars.

    Single writer, many readers. Reads never change ``version``; every
    mutation strictly increases it.
    """

    def __init__(self, bars: Optional[Iterable[BarLike]] = None) -> None:
        self._bars: List[Bar] = [Bar.coerce(b) for b in bars] if bars is not None else []
        self._version: int = 0
        self._columns: Dict[str, np.ndarray] = {}
        self._columns_version: int = -1
        self._arena = None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    @property
    def version(self) -> int:
        return self._version

    @property
    def arena(self):
        """Series node arena bound to this store (created on first use)."""
        if self._arena is None:
            from pandas_ta_series.series import SeriesArena
            self._arena = SeriesArena(self)
        return self._arena

    def __len__(self) -> int:
        return len(self._bars)

    def __getitem__(self, index: int) -> Bar:
        return self._bars[index]

    def __iter__(self) -> Iterator[Bar]:
        return iter(tuple(self._bars))

    def __repr__(self) -> str:
        return f"BarStore(bars={len(self._bars)}, version={self._version})"

    def snapshot(self) -> Tuple[Bar, ...]:
        """Read-only view of the committed bars."""
        return tuple(self._bars)

    def column(self, name: str) -> np.ndarray:
        """Read-only float64 column for *name*, memoised per version."""
        if name not in BAR_FIELDS:
            raise ValueError(f"Unknown bar field '{name}', expected one of {BAR_FIELDS}")
        if self._columns_version != self._version:
            self._columns = {}
            self._columns_version = self._version
        col = self._columns.get(name)
        if col is None:
            col = np.fromiter((_field_value(b, name) for b in self._bars),
                              dtype=np.float64, count=len(self._bars))
            col.setflags(write=False)
            self._columns[name] = col
        return col

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def _touch(self, action: str) -> None:
        self._version += 1
        logger.debug("%s -> version %d (%d bars)", action, self._version, len(self._bars))

    def append(self, bar: BarLike) -> None:
        self._bars.append(Bar.coerce(bar))
        self._touch("append")

    def overwrite(self, index: int, bar: BarLike) -> None:
        if index < 0 or index >= len(self._bars):
            raise BarStoreRangeError(f"overwrite index {index} out of range for {len(self._bars)} bars")
        self._bars[index] = Bar.coerce(bar)
        self._touch(f"overwrite[{index}]")

    def update_last(self, bar: BarLike) -> None:
        """Replace the still-forming last bar."""
        if not self._bars:
            raise BarStoreRangeError("update_last on an empty store")
        self._bars[-1] = Bar.coerce(bar)
        self._touch("update_last")

    def remove_last(self) -> Bar:
        if not self._bars:
            raise BarStoreRangeError("remove_last on an empty store")
        bar = self._bars.pop()
        self._touch("remove_last")
        return bar

    def replace_all(self, bars: Iterable[BarLike]) -> None:
        self._bars = [Bar.coerce(b) for b in bars]
        self._touch("replace_all")

    def invalidate(self) -> None:
        """Force every derived Series to recompute on next read."""
        self._touch("invalidate")

    # ------------------------------------------------------------------
    # pandas interop
    # ------------------------------------------------------------------
    @classmethod
    def from_dataframe(cls, df) -> "BarStore":
        """Build a store from an OHLCV DataFrame.

        Column names are matched case-insensitively (``o/h/l/c/v`` and
        ``timestamp/date`` aliases accepted). Time comes from a time column
        or, failing that, the index; datetimes become epoch milliseconds.
        """
        import pandas as pd

        frame = df.rename(columns=lambda c: COLUMN_ALIASES.get(str(c).lower(), str(c).lower()))
        missing = [c for c in ("open", "high", "low", "close") if c not in frame.columns]
        if missing:
            raise ValueError(f"DataFrame is missing OHLC columns: {missing}")

        times = frame["time"] if "time" in frame.columns else frame.index.to_series()
        if pd.api.types.is_datetime64_any_dtype(times):
            times = pd.DatetimeIndex(times).as_unit("ms").asi8
        times = np.asarray(times)

        volume = frame["volume"].fillna(0.0).to_numpy(dtype=float) if "volume" in frame.columns else None
        opens = frame["open"].to_numpy(dtype=float)
        highs = frame["high"].to_numpy(dtype=float)
        lows = frame["low"].to_numpy(dtype=float)
        closes = frame["close"].to_numpy(dtype=float)

        bars = [
            Bar(times[i].item() if hasattr(times[i], "item") else times[i],
                opens[i], highs[i], lows[i], closes[i],
                None if volume is None else volume[i])
            for i in range(len(frame))
        ]
        return cls(bars)

    def to_dataframe(self):
        """OHLCV DataFrame indexed by bar time."""
        import pandas as pd

        data = {name: self.column(name) for name in BAR_FIELDS[1:]}
        index = pd.Index([b.time for b in self._bars], name="time")
        return pd.DataFrame(data, index=index)


def as_store(bars: Any) -> BarStore:
    """Accept a BarStore, a DataFrame or any iterable of bar-likes."""
    if isinstance(bars, BarStore):
        return bars
    if hasattr(bars, "columns") and hasattr(bars, "index"):
        return BarStore.from_dataframe(bars)
    return BarStore(bars)
