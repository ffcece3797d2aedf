"""Etherscan gas oracle source.

Uses urllib.request (stdlib) in a worker thread; the oracle is a single
small GET per refresh cycle so a dedicated HTTP client is not needed.
"""

import asyncio
import json
import urllib.parse
import urllib.request

from gastracker.config import SourceSettings
from gastracker.exceptions import SourceUnavailableError
from gastracker.logging import get_logger
from gastracker.models import GasReading, Network, now_ms
from gastracker.sources.client import GasPriceSource

logger = get_logger(__name__)

_SUCCESS_STATUS = "1"


class EtherscanGasSource(GasPriceSource):
    """Fetches the proposed gas price from the Etherscan gas oracle.

    The oracle reports Ethereum mainnet only; the requested network is used
    for logging.
    """

    def __init__(self, settings: SourceSettings) -> None:
        self._settings = settings

    def _build_url(self) -> str:
        query = urllib.parse.urlencode({
            "module": "gastracker",
            "action": "gasoracle",
            "apikey": self._settings.api_key.get_secret_value(),
        })
        return f"{self._settings.api_url}?{query}"

    def _request(self) -> dict:
        headers = {"Accept": "application/json", "User-Agent": "GasPriceTracker/1.0"}
        req = urllib.request.Request(self._build_url(), headers=headers)
        with urllib.request.urlopen(req, timeout=self._settings.fetch_timeout) as resp:
            return json.loads(resp.read())

    @staticmethod
    def parse_response(data: dict) -> float:
        """Extract ProposeGasPrice from an oracle payload.

        Raises:
            SourceUnavailableError: If the status is not "1" or the price is
                missing or not numeric.
        """
        status = data.get("status") if isinstance(data, dict) else None
        if status != _SUCCESS_STATUS:
            raise SourceUnavailableError(f"gas oracle returned status {status!r}")

        result = data.get("result")
        raw = result.get("ProposeGasPrice") if isinstance(result, dict) else None
        try:
            return float(raw)
        except (TypeError, ValueError) as e:
            raise SourceUnavailableError(f"invalid ProposeGasPrice {raw!r}") from e

    async def fetch_price(self, network: Network) -> GasReading:
        try:
            data = await asyncio.to_thread(self._request)
        except (OSError, ValueError) as e:
            # URLError and socket timeouts are OSErrors; bad JSON is a ValueError
            raise SourceUnavailableError(f"gas oracle request failed: {e}") from e

        gas_price = self.parse_response(data)
        logger.debug("gas_price_fetched", network=network.value, gas_price=gas_price)
        return GasReading(gas_price=gas_price, timestamp=now_ms())
