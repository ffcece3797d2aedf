"""Shared data models for the gas price tracker.

Prices are gas prices in Gwei as floats. Times are Unix milliseconds.
"""

import time
from dataclasses import dataclass, field
from enum import Enum


class Network(str, Enum):
    """Tracked networks, in display order."""

    ETHEREUM = "ethereum"
    POLYGON = "polygon"
    ARBITRUM = "arbitrum"


def now_ms() -> int:
    """Current time as Unix milliseconds."""
    return int(time.time() * 1000)


@dataclass
class OHLCPoint:
    """One 15-minute candle of gas prices."""

    time: int  # Unix milliseconds
    open: float
    high: float
    low: float
    close: float

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
        }


@dataclass
class GasReading:
    """Current gas price for one network."""

    gas_price: float
    timestamp: int = field(default_factory=now_ms)
    is_fallback: bool = False


@dataclass(frozen=True)
class PriceRange:
    """Global min/max over every price field of a series."""

    min: float
    max: float

    @property
    def mid(self) -> float:
        return (self.max + self.min) / 2


@dataclass
class BarGeometry:
    """Render geometry for one candle, in percent of plot height from the bottom."""

    point: OHLCPoint
    is_up: bool
    body_top: float
    body_height: float
    wick_top: float
    wick_bottom: float

    @property
    def wick_length(self) -> float:
        return self.wick_top - self.wick_bottom


@dataclass
class ChartView:
    """Everything the renderer needs to draw one network's chart."""

    bars: list[BarGeometry]
    price_range: PriceRange | None
    axis_labels: tuple[str, str, str]  # (top, middle, bottom)
    total_points: int

    @property
    def is_empty(self) -> bool:
        return not self.bars


NetworkSeries = dict[Network, list[OHLCPoint]]


@dataclass(frozen=True)
class TrackerSnapshot:
    """Result of one refresh cycle. Replaced wholesale, never mutated."""

    readings: dict[Network, GasReading]
    series: NetworkSeries
    refreshed_at: int = field(default_factory=now_ms)
