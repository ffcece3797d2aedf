"""Tests for chart scaling: range, height mapping, windowing and bar geometry."""

import random

import pytest

from gastracker.chart.scaler import (
    axis_labels,
    bar_geometry,
    chart_geometry,
    compute_range,
    height_percent,
    visible_window,
)
from gastracker.chart.series import generate_series
from gastracker.exceptions import EmptyInputError
from gastracker.models import OHLCPoint, PriceRange

NOW_MS = 1_700_000_000_000


def make_point(
    time: int = NOW_MS,
    open: float = 10.0,
    high: float | None = None,
    low: float | None = None,
    close: float = 10.0,
) -> OHLCPoint:
    """Create an OHLCPoint, defaulting high/low to the body extremes."""
    return OHLCPoint(
        time=time,
        open=open,
        high=max(open, close) if high is None else high,
        low=min(open, close) if low is None else low,
        close=close,
    )


class TestComputeRange:
    """Global min/max over all four price fields."""

    def test_scans_all_price_fields(self) -> None:
        points = [
            make_point(open=10.0, high=15.0, low=8.0, close=12.0),
            make_point(open=11.0, high=20.0, low=9.0, close=10.0),
        ]
        assert compute_range(points) == PriceRange(min=8.0, max=20.0)

    def test_single_point(self) -> None:
        assert compute_range([make_point(open=5.0, close=5.0)]) == PriceRange(min=5.0, max=5.0)

    def test_empty_raises(self) -> None:
        with pytest.raises(EmptyInputError):
            compute_range([])

    def test_empty_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            compute_range([])

    def test_mid(self) -> None:
        assert PriceRange(min=10.0, max=30.0).mid == 20.0


class TestHeightPercent:
    """Linear mapping onto the 10-90 band."""

    def test_min_maps_to_10(self) -> None:
        assert height_percent(20.0, PriceRange(min=20.0, max=60.0)) == pytest.approx(10.0)

    def test_max_maps_to_90(self) -> None:
        assert height_percent(60.0, PriceRange(min=20.0, max=60.0)) == pytest.approx(90.0)

    def test_midpoint_maps_to_50(self) -> None:
        assert height_percent(40.0, PriceRange(min=20.0, max=60.0)) == pytest.approx(50.0)

    def test_monotonic(self) -> None:
        price_range = PriceRange(min=3.0, max=17.0)
        prices = [3.0 + i * 0.5 for i in range(29)]
        heights = [height_percent(p, price_range) for p in prices]
        assert heights == sorted(heights)

    def test_flat_range_maps_to_band_bottom(self) -> None:
        assert height_percent(5.0, PriceRange(min=5.0, max=5.0)) == 10.0

    def test_flat_range_uses_unit_span(self) -> None:
        """With max == min the divisor is 1, so offsets scale by 80 per unit."""
        assert height_percent(5.5, PriceRange(min=5.0, max=5.0)) == pytest.approx(50.0)


class TestVisibleWindow:
    """Trailing window selection."""

    def test_last_20_of_48_in_order(self) -> None:
        points = [make_point(time=i) for i in range(48)]
        window = visible_window(points, 20)
        assert window == points[-20:]
        assert [p.time for p in window] == list(range(28, 48))

    def test_shorter_series_returned_whole(self) -> None:
        points = [make_point(time=i) for i in range(5)]
        assert visible_window(points, 20) == points

    def test_default_window_is_20(self) -> None:
        points = [make_point(time=i) for i in range(30)]
        assert len(visible_window(points)) == 20

    def test_zero_window_is_empty(self) -> None:
        points = [make_point(time=i) for i in range(5)]
        assert visible_window(points, 0) == []

    def test_returns_new_list(self) -> None:
        points = [make_point(time=i) for i in range(3)]
        window = visible_window(points, 20)
        window.append(make_point(time=99))
        assert len(points) == 3


class TestBarGeometry:
    """Body and wick geometry for single candles."""

    price_range = PriceRange(min=10.0, max=20.0)

    def test_up_bar(self) -> None:
        bar = bar_geometry(make_point(open=12.0, high=18.0, low=11.0, close=16.0), self.price_range)
        assert bar.is_up is True
        assert bar.body_top == pytest.approx(26.0)      # h(12)
        assert bar.body_height == pytest.approx(32.0)   # h(16) - h(12)
        assert bar.wick_top == pytest.approx(74.0)      # h(18)
        assert bar.wick_bottom == pytest.approx(18.0)   # h(11)
        assert bar.wick_length == pytest.approx(56.0)

    def test_down_bar(self) -> None:
        bar = bar_geometry(make_point(open=16.0, close=12.0), self.price_range)
        assert bar.is_up is False
        assert bar.body_top == pytest.approx(26.0)
        assert bar.body_height == pytest.approx(32.0)

    def test_unchanged_bar_counts_as_up(self) -> None:
        bar = bar_geometry(make_point(open=15.0, close=15.0), self.price_range)
        assert bar.is_up is True

    def test_unchanged_bar_has_minimum_body(self) -> None:
        bar = bar_geometry(make_point(open=15.0, close=15.0), self.price_range)
        assert bar.body_height == 2

    def test_tiny_body_padded_to_minimum(self) -> None:
        bar = bar_geometry(make_point(open=15.0, close=15.1), self.price_range)
        assert bar.body_height == 2

    def test_custom_minimum_body(self) -> None:
        bar = bar_geometry(make_point(open=15.0, close=15.0), self.price_range, min_body=4.0)
        assert bar.body_height == 4.0

    def test_keeps_source_point(self) -> None:
        point = make_point(open=12.0, close=13.0)
        assert bar_geometry(point, self.price_range).point is point


class TestAxisLabels:
    def test_one_decimal_place(self) -> None:
        assert axis_labels(PriceRange(min=10.04, max=21.36)) == ("21.4", "15.7", "10.0")


class TestChartGeometry:
    """Full chart view assembly."""

    def test_empty_series_gives_empty_view(self) -> None:
        view = chart_geometry([])
        assert view.is_empty
        assert view.price_range is None
        assert view.total_points == 0

    def test_window_and_range_over_whole_series(self) -> None:
        points = [make_point(time=i, open=float(i + 1), close=float(i + 2)) for i in range(48)]
        view = chart_geometry(points, window_size=20)

        assert len(view.bars) == 20
        assert view.total_points == 48
        assert [bar.point for bar in view.bars] == points[-20:]
        # Range spans the hidden older bars too
        assert view.price_range == PriceRange(min=1.0, max=49.0)
        assert view.axis_labels == ("49.0", "25.0", "1.0")


class TestEndToEnd:
    """Generate, range, scale."""

    def test_all_heights_within_band(self) -> None:
        points = generate_series(100.0, 5.0, 48, 900_000, NOW_MS, rng=random.Random(2024))
        price_range = compute_range(points)

        for p in points:
            for price in (p.open, p.high, p.low, p.close):
                h = height_percent(price, price_range)
                assert 10.0 - 1e-9 <= h <= 90.0 + 1e-9

    def test_geometry_within_band(self) -> None:
        points = generate_series(100.0, 5.0, 48, 900_000, NOW_MS, rng=random.Random(7))
        view = chart_geometry(points)
        for bar in view.bars:
            assert bar.wick_length >= 0
            assert 10.0 - 1e-9 <= bar.wick_bottom <= bar.wick_top <= 90.0 + 1e-9
            assert bar.body_top >= bar.wick_bottom - 1e-9
