"""Numeric kernels: warm-up, NaN policy, tie-breaking and reference values."""
import numpy as np
import pandas as pd
import pytest

from pandas_ta_series import kernels

NAN = np.nan


class TestWindowAggregates:

    def test_sma_warmup(self):
        x = np.arange(1.0, 11.0)
        out = kernels.sma(x, 4)
        assert np.isnan(out[:3]).all()
        assert out[3] == pytest.approx(np.mean(x[:4]))

    def test_sma_matches_pandas_rolling(self, sample_ohlcv_df: pd.DataFrame):
        close = sample_ohlcv_df["close"]
        np.testing.assert_allclose(kernels.sma(close, 20), close.rolling(20).mean().to_numpy())

    def test_stdev_is_population(self, sample_ohlcv_df: pd.DataFrame):
        close = sample_ohlcv_df["close"]
        expected = close.rolling(20).std(ddof=0).to_numpy()
        np.testing.assert_allclose(kernels.stdev(close, 20), expected, rtol=1e-6)

    def test_stdev_textbook(self):
        x = np.array([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0])
        assert kernels.stdev(x, 8)[-1] == pytest.approx(2.0)

    def test_unbiased_variance(self):
        x = np.array([1.0, 2.0, 3.0, 4.0])
        assert kernels.variance(x, 4, biased=False)[-1] == pytest.approx(np.var(x, ddof=1))
        assert np.isnan(kernels.variance(x, 1, biased=False)).all()

    def test_nan_inputs_are_skipped(self):
        x = np.array([1.0, 2.0, NAN, 3.0])
        np.testing.assert_allclose(kernels.sma(x, 2), [NAN, 1.5, 1.5, 2.5])
        np.testing.assert_allclose(kernels.window_sum(x, 2), [NAN, 3.0, 3.0, 5.0])

    def test_wma_weights_newest_most(self):
        x = np.array([1.0, 2.0, 3.0])
        assert kernels.wma(x, 3)[-1] == pytest.approx((3 * 3 + 2 * 2 + 1 * 1) / 6.0)

    def test_highest_lowest(self):
        x = np.array([3.0, 1.0, 4.0, 1.0, 5.0])
        np.testing.assert_allclose(kernels.highest(x, 3), [NAN, NAN, 4, 4, 5])
        np.testing.assert_allclose(kernels.lowest(x, 3), [NAN, NAN, 1, 1, 1])

    def test_bars_offset_older_wins_ties(self):
        x = np.array([1.0, 3.0, 3.0, 2.0])
        np.testing.assert_allclose(kernels.highestbars(x, 3), [NAN, NAN, 1, 2])
        y = np.array([5.0, 2.0, 2.0, 4.0])
        np.testing.assert_allclose(kernels.lowestbars(y, 3), [NAN, NAN, 1, 2])

    def test_linreg_on_a_line(self):
        x = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
        np.testing.assert_allclose(kernels.linreg(x, 3), [NAN, NAN, 3, 4, 5])
        np.testing.assert_allclose(kernels.linreg(x, 3, offset=1), [NAN, NAN, 2, 3, 4])

    def test_linreg_length_one(self):
        x = np.array([4.0, 7.0])
        np.testing.assert_allclose(kernels.linreg(x, 1), [4.0, 7.0])

    @pytest.mark.parametrize("length", [0, -3, 2.5, None, True])
    def test_invalid_length(self, length):
        with pytest.raises(ValueError):
            kernels.sma(np.ones(5), length)

    def test_empty_input(self):
        assert kernels.sma(np.array([]), 3).size == 0
        assert kernels.true_range([], [], []).size == 0


class TestSmoothers:

    def test_ema_sma_seed(self):
        np.testing.assert_allclose(kernels.ema([1, 2, 3, 4, 5], 3), [NAN, NAN, 2, 3, 4])

    def test_rma(self):
        np.testing.assert_allclose(
            kernels.rma([1, 2, 3, 4, 5], 3), [NAN, NAN, 2, 8 / 3, 31 / 9]
        )

    def test_nan_after_seed_carries_value(self):
        out = kernels.ema([1.0, 2.0, 3.0, NAN, 5.0], 3)
        assert out[3] == pytest.approx(2.0)
        assert out[4] == pytest.approx(0.5 * 5 + 0.5 * 2)

    def test_nan_before_seed_is_skipped(self):
        out = kernels.ema([NAN, 1.0, 2.0, 3.0], 3)
        np.testing.assert_allclose(out, [NAN, NAN, NAN, 2.0])


class TestDifferencesAndRanges:

    def test_change_and_mom(self):
        x = [1.0, 4.0, 9.0, 16.0]
        np.testing.assert_allclose(kernels.change(x), [NAN, 3, 5, 7])
        np.testing.assert_allclose(kernels.mom(x, 2), [NAN, NAN, 8, 12])

    def test_roc_zero_base(self):
        np.testing.assert_allclose(kernels.roc([0.0, 2.0, 4.0], 1), [NAN, NAN, 100.0])

    def test_true_range(self):
        high = [10.0, 12.0, 11.0]
        low = [9.0, 10.0, 8.0]
        close = [9.5, 11.5, 9.0]
        np.testing.assert_allclose(kernels.true_range(high, low, close), [1.0, 2.5, 3.5])

    def test_true_range_nan_close(self):
        high, low, close = [10.0, 12.0], [9.0, 10.0], [NAN, 11.0]
        assert np.isnan(kernels.true_range(high, low, close)[1])
        assert kernels.true_range(high, low, close, handle_na=True)[1] == 2.0

    def test_atr_is_rma_of_true_range(self, sample_ohlcv_df: pd.DataFrame):
        h, l, c = (sample_ohlcv_df[k].to_numpy() for k in ("high", "low", "close"))
        np.testing.assert_allclose(kernels.atr(h, l, c, 14), kernels.rma(kernels.true_range(h, l, c), 14))
