"""Synthetic OHLC history generation.

Live sources only report the current gas price, so the chart's 12-hour
history is synthesized around it: a slow sine wave of amplitude
``volatility`` plus uniform noise, one candle per interval.

Randomness comes from an injected ``random.Random`` so a seeded generator
reproduces the same series exactly.
"""

import math
import random

from gastracker.config import NetworkSettings, SeriesSettings
from gastracker.logging import get_logger
from gastracker.models import Network, OHLCPoint, now_ms

logger = get_logger(__name__)

#: Prices never drop below this floor, whatever the base price.
PRICE_FLOOR = 1.0


def generate_series(
    base_price: float,
    volatility: float,
    count: int,
    interval_ms: int,
    now: int,
    rng: random.Random | None = None,
) -> list[OHLCPoint]:
    """Generate ``count`` synthetic candles ending at ``now``.

    For each step ``i`` from ``count - 1`` down to 0 (oldest first):
        time       = now - i * interval_ms
        trend      = sin(i / 10) * volatility
        randomness = (u1 - 0.5) * volatility
        open       = base_price + trend + randomness
        close      = open + (u2 - 0.5) * volatility
        high       = max(open, close) + u3 * volatility / 2
        low        = min(open, close) - u4 * volatility / 2

    where u1..u4 are successive draws from ``rng.random()``. Every price is
    then clamped to PRICE_FLOOR.

    Args:
        base_price: Current gas price the history oscillates around.
        volatility: Magnitude of the wave and of the noise.
        count: Number of candles. Non-positive yields an empty list.
        interval_ms: Spacing between candle times.
        now: Time of the newest candle (Unix milliseconds).
        rng: Random source. A fresh unseeded one is used when omitted.

    Returns:
        Candles ordered by ascending time.
    """
    if rng is None:
        rng = random.Random()

    points: list[OHLCPoint] = []
    for i in range(count - 1, -1, -1):
        time_ms = now - i * interval_ms

        trend = math.sin(i / 10) * volatility
        randomness = (rng.random() - 0.5) * volatility

        open_ = base_price + trend + randomness
        close = open_ + (rng.random() - 0.5) * volatility
        high = max(open_, close) + rng.random() * (volatility / 2)
        low = min(open_, close) - rng.random() * (volatility / 2)

        points.append(
            OHLCPoint(
                time=time_ms,
                open=max(PRICE_FLOOR, open_),
                high=max(PRICE_FLOOR, high),
                low=max(PRICE_FLOOR, low),
                close=max(PRICE_FLOOR, close),
            )
        )

    return points


class SeriesGenerator:
    """Builds per-network synthetic histories from configured parameters.

    Args:
        settings: Series length, spacing and optional seed.
        networks: Per-network settings (volatility is read from here).
        rng: Explicit random source. Overrides ``settings.seed`` when given.
    """

    def __init__(
        self,
        settings: SeriesSettings,
        networks: dict[Network, NetworkSettings],
        rng: random.Random | None = None,
    ) -> None:
        self._settings = settings
        self._networks = networks
        self._rng = rng if rng is not None else random.Random(settings.seed)

    def volatility(self, network: Network) -> float:
        return self._networks[network].volatility

    def generate(
        self,
        base_price: float,
        volatility: float,
        count: int,
        interval_ms: int,
        now: int,
    ) -> list[OHLCPoint]:
        """Generate a series using this generator's random source."""
        return generate_series(
            base_price, volatility, count, interval_ms, now, rng=self._rng
        )

    def generate_for(
        self, network: Network, base_price: float, now: int | None = None
    ) -> list[OHLCPoint]:
        """Generate the configured-length history for one network."""
        if now is None:
            now = now_ms()
        points = self.generate(
            base_price,
            self.volatility(network),
            self._settings.point_count,
            self._settings.interval_ms,
            now,
        )
        logger.debug(
            "series_generated",
            network=network.value,
            base_price=base_price,
            points=len(points),
        )
        return points
