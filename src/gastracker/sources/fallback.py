"""Synthetic fallback prices used when a network has no live reading."""

import math
import random

from gastracker.config import NetworkSettings
from gastracker.models import GasReading, now_ms


def fallback_price(rng: random.Random, scale: int, offset: int) -> int:
    """Return floor(rng.random() * scale) + offset.

    The result is an integer in [offset, offset + scale - 1].
    """
    return math.floor(rng.random() * scale) + offset


def fallback_reading(rng: random.Random, settings: NetworkSettings) -> GasReading:
    """Build a fallback GasReading from a network's configured range."""
    price = fallback_price(rng, settings.fallback_scale, settings.fallback_offset)
    return GasReading(gas_price=float(price), timestamp=now_ms(), is_fallback=True)
