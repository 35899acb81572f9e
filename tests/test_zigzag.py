"""Zig-zag pivot machine: confirmation, in-place extension and the open leg."""
from typing import List

import numpy as np
import pytest

from pandas_ta_series import Bar, BarStore, ta
from pandas_ta_series.stateful import ZigZagSettings, calculate_zigzag, replay

from conftest import make_bars


def _ramp_bars() -> List[Bar]:
    lows = [110.0, 105.0, 100.0, 95.0, 100.0, 102.0, 96.0, 90.0, 95.0, 100.0]
    highs = [lo + 2.0 for lo in lows]
    return make_bars([(h + lo) / 2 for h, lo in zip(highs, lows)], highs, lows, volume=1.0)


class TestPivots:

    def test_w_shape(self, w_bars):
        result = calculate_zigzag(w_bars, ZigZagSettings(deviation=5.0, depth=2))
        summary = [(p.is_high, p.end.bar_index, p.end.price, p.volume) for p in result.pivots]
        assert summary == [
            (False, 3, 94.0, 6.0),
            (True, 6, 111.0, 3.0),
            (False, 9, 93.0, 3.0),
        ]

    def test_legs_are_chained(self, w_bars):
        pivots = calculate_zigzag(w_bars, ZigZagSettings(deviation=5.0, depth=2)).pivots
        for prev, cur in zip(pivots, pivots[1:]):
            assert cur.start == prev.end
            assert cur.is_high != prev.is_high

    def test_extension(self, w_bars):
        result = calculate_zigzag(w_bars, ZigZagSettings(deviation=5.0, depth=2))
        ext = result.extension
        assert ext is not None
        assert ext.is_high
        assert ext.start == result.pivots[-1].end
        assert (ext.end.bar_index, ext.end.price, ext.volume) == (11, 106.0, 0.0)
        assert ext not in result.pivots
        assert len(result.pivots) == 3

    def test_extension_disabled(self, w_bars):
        result = calculate_zigzag(w_bars, ZigZagSettings(deviation=5.0, depth=2, extend_last=False))
        assert result.extension is None
        assert len(result.pivots) == 3

    def test_same_direction_extends_in_place(self):
        result = calculate_zigzag(_ramp_bars(), ZigZagSettings(deviation=10.0, depth=2))
        assert len(result.pivots) == 1
        pivot = result.pivots[0]
        assert not pivot.is_high
        assert (pivot.start.bar_index, pivot.start.price) == (3, 95.0)
        assert (pivot.end.bar_index, pivot.end.price) == (7, 90.0)
        assert pivot.volume == 10.0

    def test_deviation_threshold_blocks_reversal(self, w_bars):
        result = calculate_zigzag(w_bars, ZigZagSettings(deviation=50.0, depth=2))
        assert len(result.pivots) == 1
        assert result.pivots[0].end.price == 93.0

    def test_keeps_bar_times(self, w_bars):
        result = calculate_zigzag(w_bars, ZigZagSettings(deviation=5.0, depth=2))
        first = result.pivots[0].end
        assert first.time == 3 and isinstance(first.time, int)
        assert result.extension.end.time == 11
        assert isinstance(result.extension.end.time, int)

    @pytest.mark.parametrize("allow, expected", [
        (True, [(True, 120.0), (False, 80.0)]),
        (False, [(True, 120.0)]),
    ])
    def test_one_bar_spike(self, allow, expected):
        bars = make_bars(
            [100.0] * 5,
            high=[101.0, 101.0, 120.0, 101.0, 101.0],
            low=[99.0, 99.0, 80.0, 99.0, 99.0],
        )
        settings = ZigZagSettings(deviation=5.0, depth=2, allow_zigzag_on_one_bar=allow)
        pivots = calculate_zigzag(bars, settings).pivots
        assert [(p.is_high, p.end.price) for p in pivots] == expected
        assert all(p.end.bar_index == 2 for p in pivots)

    def test_empty_bars(self):
        result = calculate_zigzag([])
        assert result.pivots == []
        assert result.extension is None

    def test_too_few_bars_for_a_pivot(self, w_bars):
        result = calculate_zigzag(w_bars[:4], ZigZagSettings(depth=2))
        assert result.pivots == []
        assert result.extension is None

    def test_accepts_a_store(self, w_bars):
        from_list = calculate_zigzag(w_bars, ZigZagSettings(depth=2))
        from_store = calculate_zigzag(BarStore(w_bars), ZigZagSettings(depth=2))
        assert from_list.pivots == from_store.pivots

    def test_random_walk_properties(self, sample_store: BarStore):
        settings = ZigZagSettings(deviation=1.0, depth=6)
        pivots = calculate_zigzag(sample_store, settings).pivots
        assert len(pivots) > 2
        for prev, cur in zip(pivots, pivots[1:]):
            assert cur.is_high != prev.is_high
            assert cur.start == prev.end
            move = 100.0 * abs(cur.end.price - cur.start.price) / abs(cur.start.price)
            assert move >= settings.deviation
        ends = [p.end.bar_index for p in pivots]
        assert ends == sorted(ends)


class TestSettings:

    @pytest.mark.parametrize("depth, legs", [(1, 2), (2, 2), (5, 2), (10, 5), (11, 5)])
    def test_legs(self, depth, legs):
        assert ZigZagSettings(depth=depth).legs == legs

    def test_from_params(self):
        settings = ZigZagSettings.from_params({"depth": "4", "extend_last": "false", "deviation": None})
        assert settings == ZigZagSettings(deviation=5.0, depth=4, extend_last=False)


class TestFold:

    def test_outputs_per_bar(self, w_bars):
        store = BarStore(w_bars)
        inputs = {f: store.column(f) for f in ("time", "high", "low", "volume")}
        matrix, _ = replay("zigzag", inputs, {"deviation": 5.0, "depth": 2})

        swing, price, changed = matrix[:, 0], matrix[:, 1], matrix[:, 2]
        assert np.isnan(swing[:5]).all()
        assert (swing[5], price[5]) == (-1.0, 94.0)
        assert (swing[8], price[8]) == (1.0, 111.0)
        assert (swing[11], price[11]) == (-1.0, 93.0)
        np.testing.assert_array_equal(np.flatnonzero(changed), [5, 8, 11])

    def test_series_wrapper(self, w_bars):
        swing, price, changed = ta.zigzag(w_bars, deviation=5.0, depth=2)
        assert swing.last() == -1.0
        assert price.last() == 93.0
        assert changed.to_array().sum() == 3

    def test_follows_store_appends(self, w_bars):
        store = BarStore(w_bars[:9])
        swing, price, _ = ta.zigzag(store, deviation=5.0, depth=2)
        assert price.last() == 111.0
        for bar in w_bars[9:]:
            store.append(bar)
        assert price.last() == 93.0
        assert swing.last() == -1.0

    def test_skipped_rows_keep_positions(self, w_bars):
        # a NaN row after the first low shifts every later bar by one
        highs = [b.high for b in w_bars]
        lows = [b.low for b in w_bars]
        inputs = {
            "time": np.arange(13.0),
            "high": highs[:4] + [np.nan] + highs[4:],
            "low": lows[:4] + [np.nan] + lows[4:],
            "volume": np.ones(13),
        }
        matrix, state = replay("zigzag", inputs, {"deviation": 5.0, "depth": 2})

        assert np.isnan(matrix[4]).all()
        summary = [(p.is_high, p.end.bar_index, p.end.time, p.end.price) for p in state.pivots]
        assert summary == [
            (False, 3, 3.0, 94.0),
            (True, 7, 7.0, 111.0),
            (False, 10, 10.0, 93.0),
        ]
