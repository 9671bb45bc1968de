"""Tests for depth aggregation, VWAP sweeps and the analysis snapshot."""

import numpy as np
import pytest

from lob_analytics import AnalyticsConfig, Stats, analyze, analyze_with, depth, sweep_vwap
from lob_book import InsufficientLiquidity, Order


class TestDepth:
    def test_band_is_closed(self, sample_book):
        assert depth(sample_book.bids, 99.0, 100.0) == 15.0
        assert depth(sample_book.asks, 101.0, 101.0) == 8.0

    def test_partial_band(self, sample_book):
        assert depth(sample_book.bids, 99.5, 100.0) == 10.0

    def test_empty_selection(self, sample_book):
        assert depth(sample_book.asks, 50.0, 60.0) == 0.0
        assert depth([], 0.0, 1e9) == 0.0

    def test_widening_band_never_decreases_depth(self):
        orders = [Order("ask", 100.0 + 0.1 * i, 1.0 + i) for i in range(20)]
        previous = 0.0
        for k in range(30):
            current = depth(orders, 100.0 - 0.1 * k, 100.0 + 0.1 * k)
            assert current >= previous
            previous = current
        assert previous == sum(o.size for o in orders)


class TestSweepVwap:
    def test_buy_scenario(self, sample_book):
        # (8 * 101.0 + 2 * 102.0) / 10
        assert sweep_vwap(sample_book.asks, 10) == pytest.approx(101.2)

    def test_sell_scenario(self, sample_book):
        # (10 * 100.0 + 2 * 99.0) / 12
        assert sweep_vwap(sample_book.bids, 12) == pytest.approx(99.8333333)

    def test_fill_inside_best_level(self, sample_book):
        assert sweep_vwap(sample_book.asks, 3) == 101.0

    def test_full_sweep_is_size_weighted_mean(self):
        asks = [Order("ask", 100.01 + 0.01 * i, 1.37 * (i + 1)) for i in range(10)]
        total = sum(o.size for o in asks)
        expected = sum(o.price * o.size for o in asks) / total
        assert sweep_vwap(asks, total) == pytest.approx(expected)

    def test_full_sweep_with_large_sizes(self):
        np.random.seed(3)
        for _ in range(50):
            sizes = np.random.uniform(1e7, 1e8, size=20)
            asks = [Order("ask", 100.0 + 0.01 * i, float(s)) for i, s in enumerate(sizes)]
            total = sum(o.size for o in asks)
            expected = sum(o.price * o.size for o in asks) / total
            assert sweep_vwap(asks, total) == pytest.approx(expected)

    def test_tiny_target_fills_at_best_price(self):
        assert sweep_vwap([Order("ask", 101.0, 8.0)], 1e-10) == pytest.approx(101.0)

    def test_tiny_target_on_empty_levels(self):
        with pytest.raises(InsufficientLiquidity):
            sweep_vwap([], 5e-10)

    def test_levels_beyond_fill_are_untouched(self):
        asks = [Order("ask", 101.0, 10.0), Order("ask", 1e9, 1.0)]
        assert sweep_vwap(asks, 10.0) == 101.0

    def test_insufficient_liquidity(self, sample_book):
        with pytest.raises(InsufficientLiquidity) as excinfo:
            sweep_vwap(sample_book.asks, 18.5)
        assert excinfo.value.side == "ask"
        assert excinfo.value.target_qty == 18.5
        assert excinfo.value.available == 18.0
        assert "buy" in str(excinfo.value)

    def test_insufficient_liquidity_on_sell(self, sample_book):
        with pytest.raises(InsufficientLiquidity) as excinfo:
            sweep_vwap(sample_book.bids, 100)
        assert excinfo.value.side == "bid"
        assert "sell" in str(excinfo.value)

    def test_empty_levels(self):
        with pytest.raises(InsufficientLiquidity) as excinfo:
            sweep_vwap([], 1.0)
        assert excinfo.value.side is None

    @pytest.mark.parametrize("qty", [0, -1.0, float("nan")])
    def test_invalid_target_is_caller_error(self, sample_book, qty):
        with pytest.raises(ValueError):
            sweep_vwap(sample_book.asks, qty)


class TestAnalyze:
    def test_full_snapshot(self, sample_book):
        stats = analyze(sample_book, depth_pct=1.0, target_qty=10)
        assert stats.best_bid == 100.0
        assert stats.best_ask == 101.0
        assert stats.mid_price == 100.5
        assert stats.spread == 1.0
        assert stats.spread_pct == pytest.approx(1.0 / 100.5 * 100)
        # band [99.495, 101.505]
        assert stats.bid_depth == 10.0
        assert stats.ask_depth == 8.0
        assert stats.vwap_buy == pytest.approx(101.2)
        assert stats.vwap_sell == 100.0

    def test_wide_band_takes_everything(self, sample_book):
        stats = analyze(sample_book, depth_pct=50.0, target_qty=1)
        assert stats.bid_depth == 15.0
        assert stats.ask_depth == 18.0

    def test_zero_band_excludes_off_mid_levels(self, sample_book):
        stats = analyze(sample_book, depth_pct=0.0, target_qty=1)
        assert stats.bid_depth == 0.0
        assert stats.ask_depth == 0.0

    def test_failing_sweep_fails_whole_analysis(self, sample_book):
        # buy side can fill 16 (18 resting) but sell side cannot (15 resting)
        with pytest.raises(InsufficientLiquidity) as excinfo:
            analyze(sample_book, depth_pct=0.5, target_qty=16)
        assert excinfo.value.side == "bid"

    def test_negative_band_rejected(self, sample_book):
        with pytest.raises(ValueError):
            analyze(sample_book, depth_pct=-1.0, target_qty=1)

    def test_analyze_with_config(self, sample_book):
        stats = analyze_with(sample_book, AnalyticsConfig(depth_pct=1.0, target_qty=12))
        assert stats.vwap_sell == pytest.approx(99.8333333)

    def test_default_config(self):
        cfg = AnalyticsConfig()
        assert cfg.depth_pct == 0.5
        assert cfg.target_qty == 40.0

    def test_stats_as_dict(self, sample_book):
        stats = analyze(sample_book, depth_pct=1.0, target_qty=10)
        d = stats.as_dict()
        assert set(d) == {
            "best_bid", "best_ask", "mid_price", "spread", "spread_pct",
            "bid_depth", "ask_depth", "vwap_buy", "vwap_sell",
        }
        assert Stats(**d) == stats
