"""Tests for synthetic fallback prices."""

import random

import pytest

from gastracker.config import ArbitrumSettings, EthereumSettings, PolygonSettings
from gastracker.sources.fallback import fallback_price, fallback_reading


class _FixedRandom(random.Random):
    def __init__(self, value: float) -> None:
        super().__init__(0)
        self._value = value

    def random(self) -> float:
        return self._value


class TestFallbackPrice:
    """floor(random() * scale) + offset."""

    @pytest.mark.parametrize(
        "value,scale,offset,expected",
        [
            (0.0, 50, 10, 10),
            (0.999999, 50, 10, 59),
            (0.5, 100, 20, 70),
            (0.0, 10, 1, 1),
            (0.999999, 10, 1, 10),
        ],
    )
    def test_formula(self, value: float, scale: int, offset: int, expected: int) -> None:
        assert fallback_price(_FixedRandom(value), scale, offset) == expected

    def test_returns_int(self) -> None:
        assert isinstance(fallback_price(random.Random(1), 50, 10), int)


class TestFallbackReading:
    """Per-network default ranges."""

    @pytest.mark.parametrize(
        "settings,low,high",
        [
            (EthereumSettings(), 10, 59),
            (PolygonSettings(), 20, 119),
            (ArbitrumSettings(), 1, 10),
        ],
    )
    def test_within_network_range(self, settings, low: int, high: int) -> None:
        rng = random.Random(3)
        for _ in range(200):
            reading = fallback_reading(rng, settings)
            assert low <= reading.gas_price <= high
            assert reading.gas_price.is_integer()

    def test_marked_as_fallback(self) -> None:
        reading = fallback_reading(random.Random(1), EthereumSettings())
        assert reading.is_fallback is True
        assert reading.timestamp > 0
