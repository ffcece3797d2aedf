"""Shared test fixtures for the gas price tracker."""

import random

import pytest

from gastracker.chart.series import SeriesGenerator
from gastracker.config import (
    AppSettings,
    ArbitrumSettings,
    DashboardSettings,
    EthereumSettings,
    PolygonSettings,
    SeriesSettings,
    SourceSettings,
)


@pytest.fixture
def mock_settings() -> AppSettings:
    """Return AppSettings with test defaults (seeded, short timeout)."""
    return AppSettings(
        log_level="DEBUG",
        source=SourceSettings(
            api_url="https://example.invalid/api",
            api_key="test-api-key",  # type: ignore[arg-type]
            fetch_timeout=0.5,
        ),
        series=SeriesSettings(seed=42),
        dashboard=DashboardSettings(refresh_interval=0.01),
        ethereum=EthereumSettings(),
        polygon=PolygonSettings(),
        arbitrum=ArbitrumSettings(),
    )


@pytest.fixture
def generator(mock_settings: AppSettings) -> SeriesGenerator:
    """SeriesGenerator with a seeded random source."""
    return SeriesGenerator(
        mock_settings.series, mock_settings.networks, rng=random.Random(7)
    )
