"""Chart scaling: price range, percentage heights and per-bar geometry.

Heights are percentages of the plot area measured from the bottom. Prices
map linearly onto a 10%-90% band, leaving a margin above and below.

All functions are pure.
"""

from collections.abc import Sequence

from gastracker.exceptions import EmptyInputError
from gastracker.models import BarGeometry, ChartView, OHLCPoint, PriceRange

BAND_BOTTOM = 10.0
BAND_TOP = 90.0
DEFAULT_WINDOW = 20
DEFAULT_MIN_BODY = 2.0

_EMPTY_LABELS = ("", "", "")


def compute_range(points: Sequence[OHLCPoint]) -> PriceRange:
    """Return the global min and max over open, high, low and close.

    Raises:
        EmptyInputError: If ``points`` is empty.
    """
    if not points:
        raise EmptyInputError("cannot compute a price range of an empty series")

    prices = [p for point in points for p in (point.open, point.high, point.low, point.close)]
    return PriceRange(min=min(prices), max=max(prices))


def height_percent(price: float, price_range: PriceRange) -> float:
    """Map ``price`` from [min, max] onto [10, 90].

    A flat range (max == min) uses a span of 1, so the range's own price
    lands on the bottom of the band.
    """
    span = (price_range.max - price_range.min) or 1
    return ((price - price_range.min) / span) * (BAND_TOP - BAND_BOTTOM) + BAND_BOTTOM


def visible_window(
    points: Sequence[OHLCPoint], window_size: int = DEFAULT_WINDOW
) -> list[OHLCPoint]:
    """Return the most recent ``window_size`` points, oldest first."""
    if window_size <= 0:
        return []
    return list(points[-window_size:])


def bar_geometry(
    point: OHLCPoint,
    price_range: PriceRange,
    min_body: float = DEFAULT_MIN_BODY,
) -> BarGeometry:
    """Compute body and wick geometry for one candle.

    The body is at least ``min_body`` percentage points tall so unchanged
    candles remain visible. Ties (close == open) count as up.
    """
    open_h = height_percent(point.open, price_range)
    close_h = height_percent(point.close, price_range)

    return BarGeometry(
        point=point,
        is_up=point.close >= point.open,
        body_top=min(close_h, open_h),
        body_height=max(abs(close_h - open_h), min_body),
        wick_top=height_percent(point.high, price_range),
        wick_bottom=height_percent(point.low, price_range),
    )


def axis_labels(price_range: PriceRange) -> tuple[str, str, str]:
    """Y-axis labels (top, middle, bottom) at one decimal place."""
    return (
        f"{price_range.max:.1f}",
        f"{price_range.mid:.1f}",
        f"{price_range.min:.1f}",
    )


def chart_geometry(
    points: Sequence[OHLCPoint],
    window_size: int = DEFAULT_WINDOW,
    min_body: float = DEFAULT_MIN_BODY,
) -> ChartView:
    """Build the full chart view for a series.

    The range is taken over the whole series, not just the visible window,
    so bars keep their scale as they scroll. An empty series yields an empty
    view rather than an error since the page renders before the first refresh.
    """
    if not points:
        return ChartView(bars=[], price_range=None, axis_labels=_EMPTY_LABELS, total_points=0)

    price_range = compute_range(points)
    bars = [
        bar_geometry(point, price_range, min_body)
        for point in visible_window(points, window_size)
    ]
    return ChartView(
        bars=bars,
        price_range=price_range,
        axis_labels=axis_labels(price_range),
        total_points=len(points),
    )
