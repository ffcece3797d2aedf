"""Configuration system using pydantic-settings with environment variable loading.

Every settings group reads the process environment and the same ``.env``
file under its own prefix (``SOURCE_API_KEY``, ``POLYGON_USE_SOURCE``, ...).
Keys belonging to other groups are ignored. Groups are built when
AppSettings is instantiated, not at import.
"""

from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from gastracker.models import Network

ENV_FILE = ".env"


def _group_config(prefix: str) -> SettingsConfigDict:
    return SettingsConfigDict(
        env_prefix=prefix,
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )


class SourceSettings(BaseSettings):
    """Live gas price source (Etherscan gas oracle)."""

    model_config = _group_config("SOURCE_")

    api_url: str = "https://api.etherscan.io/api"
    api_key: SecretStr = SecretStr("YourApiKeyToken")
    fetch_timeout: float = 10.0  # seconds; bounds one refresh cycle's wait on the source


class SeriesSettings(BaseSettings):
    """Synthetic history shape. 48 x 15 minutes = 12 hours."""

    model_config = _group_config("SERIES_")

    point_count: int = 48
    interval_ms: int = 15 * 60 * 1000
    seed: int | None = None  # set for reproducible charts


class ChartSettings(BaseSettings):
    """Chart rendering parameters."""

    model_config = _group_config("CHART_")

    window_size: int = 20  # bars shown
    min_body_height: float = 2.0  # percentage points


class NetworkSettings(BaseSettings):
    """Per-network generation and fallback parameters.

    The fallback price is floor(random() * fallback_scale) + fallback_offset.
    Networks with use_source=False never call the live source.
    """

    volatility: float = 5.0
    fallback_scale: int = 50
    fallback_offset: int = 10
    use_source: bool = False


class EthereumSettings(NetworkSettings):
    model_config = _group_config("ETHEREUM_")

    volatility: float = 5.0
    fallback_scale: int = 50
    fallback_offset: int = 10
    use_source: bool = True


class PolygonSettings(NetworkSettings):
    model_config = _group_config("POLYGON_")

    volatility: float = 15.0
    fallback_scale: int = 100
    fallback_offset: int = 20


class ArbitrumSettings(NetworkSettings):
    model_config = _group_config("ARBITRUM_")

    volatility: float = 2.0
    fallback_scale: int = 10
    fallback_offset: int = 1


class DashboardSettings(BaseSettings):
    """Dashboard server configuration."""

    model_config = _group_config("DASHBOARD_")

    host: str = "0.0.0.0"
    port: int = 8080
    enabled: bool = True
    refresh_interval: float = 30.0  # seconds between refresh cycles


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"
    source: SourceSettings = Field(default_factory=SourceSettings)
    series: SeriesSettings = Field(default_factory=SeriesSettings)
    chart: ChartSettings = Field(default_factory=ChartSettings)
    dashboard: DashboardSettings = Field(default_factory=DashboardSettings)
    ethereum: EthereumSettings = Field(default_factory=EthereumSettings)
    polygon: PolygonSettings = Field(default_factory=PolygonSettings)
    arbitrum: ArbitrumSettings = Field(default_factory=ArbitrumSettings)

    def network(self, network: Network) -> NetworkSettings:
        """Return the settings block for a network."""
        return getattr(self, Network(network).value)

    @property
    def networks(self) -> dict[Network, NetworkSettings]:
        return {n: self.network(n) for n in Network}
