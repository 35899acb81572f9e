"""Indicator catalog: registry, input resolution and per-indicator plots."""
import math

import numpy as np
import pandas as pd
import pytest

from pandas_ta_series import BarStore, Category, Series, kernels
from pandas_ta_series.indicators import (
    INDICATOR_REGISTRY,
    InputConfig,
    InputType,
    calculate,
    get_indicator_spec,
    indicator_catalog,
    list_indicators,
    resolve_inputs,
)
from pandas_ta_series.stateful import ZigZagSettings, calculate_zigzag, replay

from conftest import make_bars


def _values(result, plot_id="plot0"):
    return np.array([p.value for p in result.plots[plot_id]], dtype=float)


class TestRegistry:

    def test_registry_matches_categories(self):
        assert indicator_catalog() == {k: sorted(v) for k, v in Category.items()}
        assert sorted(INDICATOR_REGISTRY) == sorted(k for v in Category.values() for k in v)

    def test_list_by_category(self):
        assert list_indicators("volatility") == ["atr", "bb"]
        with pytest.raises(ValueError):
            list_indicators("cycles")

    def test_lookup_is_case_insensitive(self):
        assert get_indicator_spec("SMA").kind == "sma"
        with pytest.raises(ValueError):
            get_indicator_spec("ichimoku")

    def test_default_inputs(self):
        spec = get_indicator_spec("bb")
        assert spec.default_inputs == {"length": 20, "ma_type": "SMA", "source": "close", "mult": 2.0}
        from pandas_ta_series.indicators import ma_ribbon
        assert ma_ribbon.default_inputs["ma4_length"] == 200

    @pytest.mark.parametrize("kind", sorted(INDICATOR_REGISTRY))
    def test_every_plot_is_bar_aligned(self, kind, sample_store: BarStore):
        spec = get_indicator_spec(kind)
        result = calculate(kind, sample_store)
        assert set(result.plots) == {cfg.id for cfg in spec.plot_config}
        times = [bar.time for bar in sample_store]
        for points in result.plots.values():
            assert [p.time for p in points] == times

    @pytest.mark.parametrize("kind", sorted(INDICATOR_REGISTRY))
    def test_short_history_does_not_raise(self, kind, short_ohlcv_df: pd.DataFrame):
        result = calculate(kind, short_ohlcv_df)
        for points in result.plots.values():
            assert len(points) == len(short_ohlcv_df)

    def test_to_frame(self, sma_store: BarStore):
        frame = calculate("sma", sma_store, {"length": 3}).to_frame()
        assert list(frame.columns) == ["plot0"]
        assert list(frame.index) == [0, 1, 2, 3, 4]
        assert frame["plot0"].iloc[2] == pytest.approx(10.0)


class TestResolveInputs:

    CONFIG = (
        InputConfig("length", InputType.INT, 9, min=1, max=500),
        InputConfig("mult", InputType.FLOAT, 2.0, min=0.5),
        InputConfig("show", InputType.BOOL, True),
        InputConfig("mode", InputType.STRING, "a", options=("a", "b")),
        InputConfig("source", InputType.SOURCE, "close"),
    )

    def test_defaults(self):
        assert resolve_inputs(self.CONFIG) == {
            "length": 9, "mult": 2.0, "show": True, "mode": "a", "source": "close",
        }

    def test_coercion(self):
        resolved = resolve_inputs(self.CONFIG, {"length": "21", "mult": 3, "show": "off", "source": "HL2"})
        assert resolved["length"] == 21
        assert resolved["mult"] == 3.0
        assert resolved["show"] is False
        assert resolved["source"] == "hl2"

    def test_clamping(self):
        resolved = resolve_inputs(self.CONFIG, {"length": 0, "mult": 0.1})
        assert resolved["length"] == 1
        assert resolved["mult"] == 0.5
        assert resolve_inputs(self.CONFIG, {"length": 10_000})["length"] == 500

    def test_unknown_input(self):
        with pytest.raises(ValueError):
            resolve_inputs(self.CONFIG, {"lenght": 5})

    def test_invalid_option(self):
        with pytest.raises(ValueError):
            resolve_inputs(self.CONFIG, {"mode": "c"})
        with pytest.raises(ValueError):
            resolve_inputs(self.CONFIG, {"source": "vwap"})

    def test_catalog_rejects_unknown_input(self, sma_store: BarStore):
        with pytest.raises(ValueError):
            calculate("sma", sma_store, {"period": 3})


class TestOverlap:

    def test_sma(self, sma_store: BarStore):
        np.testing.assert_allclose(
            _values(calculate("sma", sma_store, {"length": 3})),
            [np.nan, np.nan, 10.0, 32.0 / 3, 29.0 / 3],
        )

    @pytest.mark.parametrize("kind, fn", [
        ("ema", kernels.ema), ("rma", kernels.rma), ("wma", kernels.wma),
    ])
    def test_matches_kernel(self, kind, fn, sample_store: BarStore):
        close = sample_store.column("close")
        np.testing.assert_allclose(_values(calculate(kind, sample_store, {"length": 12})), fn(close, 12))

    def test_source_selection(self, sample_store: BarStore):
        hl2 = (sample_store.column("high") + sample_store.column("low")) / 2.0
        values = _values(calculate("sma", sample_store, {"length": 5, "source": "hl2"}))
        np.testing.assert_allclose(values, kernels.sma(hl2, 5))

    def test_vwma(self, sample_store: BarStore):
        close, volume = sample_store.column("close"), sample_store.column("volume")
        expected = kernels.sma(close * volume, 20) / kernels.sma(volume, 20)
        np.testing.assert_allclose(_values(calculate("vwma", sample_store)), expected)

    def test_lsma(self, sample_store: BarStore):
        close = sample_store.column("close")
        values = _values(calculate("lsma", sample_store, {"length": 10, "offset": 2}))
        np.testing.assert_allclose(values, kernels.linreg(close, 10, 2))

    def test_mcginley_dynamic(self, sample_store: BarStore):
        matrix, _ = replay("mcgd", {"close": sample_store.column("close")}, {"length": 14})
        np.testing.assert_allclose(_values(calculate("mcginley_dynamic", sample_store)), matrix[:, 0])

    def test_ma_ribbon(self, sample_store: BarStore):
        result = calculate("ma_ribbon", sample_store, {
            "show_ma2": False, "ma3_type": "EMA", "ma3_length": 30,
        })
        close = sample_store.column("close")
        assert np.isnan(_values(result, "plot1")).all()
        np.testing.assert_allclose(_values(result, "plot0"), kernels.sma(close, 20))
        np.testing.assert_allclose(_values(result, "plot2"), kernels.ema(close, 30))


class TestVolatility:

    def test_bb_bands_are_symmetric(self, sample_store: BarStore):
        result = calculate("bb", sample_store, {"length": 20, "mult": 2.0})
        basis, upper, lower = (_values(result, f"plot{k}") for k in range(3))
        close = sample_store.column("close")
        np.testing.assert_allclose(basis, kernels.sma(close, 20))
        np.testing.assert_allclose(upper - basis, 2.0 * kernels.stdev(close, 20))
        np.testing.assert_allclose(basis - lower, upper - basis)

    def test_bb_ma_type(self, sample_store: BarStore):
        result = calculate("bb", sample_store, {"ma_type": "SMMA (RMA)"})
        np.testing.assert_allclose(_values(result), kernels.rma(sample_store.column("close"), 20))

    @pytest.mark.parametrize("smoothing, fn", [("RMA", kernels.rma), ("SMA", kernels.sma), ("EMA", kernels.ema)])
    def test_atr_smoothing(self, smoothing, fn, sample_store: BarStore):
        h, l, c = (sample_store.column(f) for f in ("high", "low", "close"))
        expected = fn(kernels.true_range(h, l, c, handle_na=True), 14)
        values = _values(calculate("atr", sample_store, {"smoothing": smoothing}))
        np.testing.assert_allclose(values, expected)


class TestMomentum:

    def test_momentum(self, sma_store: BarStore):
        np.testing.assert_allclose(
            _values(calculate("momentum", sma_store, {"length": 2})),
            [np.nan, np.nan, -1.0, 1.0, -1.0],
        )

    def test_roc(self, sma_store: BarStore):
        values = _values(calculate("roc", sma_store, {"length": 1}))
        assert math.isnan(values[0])
        assert values[1] == pytest.approx(10.0)
        assert values[4] == pytest.approx(-100.0 / 3)


class TestTrend:

    def test_parabolic_sar(self, sample_store: BarStore):
        result = calculate("parabolic_sar", sample_store)
        cols = {f: sample_store.column(f) for f in ("high", "low", "close")}
        matrix, _ = replay("psar", cols)
        np.testing.assert_allclose(_values(result), matrix[:, 0])
        np.testing.assert_allclose(result.extras["direction"], matrix[:, 1])

    def test_supertrend_split_by_direction(self):
        high = [11.0, 12.0, 13.0, 13.0, 10.0]
        low = [9.0, 10.0, 11.0, 10.0, 8.0]
        close = [10.0, 11.0, 12.0, 12.5, 9.0]
        store = BarStore(make_bars(close, high, low))
        result = calculate("supertrend", store, {"atr_period": 1, "factor": 1.0})

        np.testing.assert_allclose(_values(result, "plot0"), [np.nan, np.nan, np.nan, 10.0, np.nan])
        np.testing.assert_allclose(_values(result, "plot1"), [np.nan, 12.0, 12.0, np.nan, 13.5])
        np.testing.assert_allclose(result.extras["direction"], [1, 1, 1, -1, 1])

    def test_zigzag_plot_points(self, w_bars):
        result = calculate("zigzag", BarStore(w_bars), {"depth": 2})
        values = _values(result)
        plotted = {i: values[i] for i in np.flatnonzero(~np.isnan(values))}
        assert plotted == {3: 94.0, 6: 111.0, 9: 93.0, 11: 106.0}
        assert len(result.extras["pivots"]) == 3
        assert result.extras["extension"].end.bar_index == 11

    def test_zigzag_without_extension(self, w_bars):
        result = calculate("zigzag", w_bars, {"depth": 2, "extend_last": False})
        assert np.isnan(_values(result)[11])
        assert result.extras["extension"] is None

    def test_zigzag_matches_calculate_zigzag(self, sample_store: BarStore):
        result = calculate("zigzag", sample_store)
        direct = calculate_zigzag(sample_store, ZigZagSettings())
        assert result.extras["pivots"] == direct.pivots

    def test_series_input_for_lazy_indicators(self, sample_store: BarStore):
        result = calculate("ema", sample_store, {"length": 9})
        lazy = Series.from_bars(sample_store, "close").ema(9)
        np.testing.assert_allclose(_values(result), lazy.to_array())
