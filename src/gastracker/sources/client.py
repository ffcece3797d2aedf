"""Abstract gas price source interface.

The tracker depends only on this contract, keeping provider-specific
request and parsing details in the concrete implementations.
"""

from abc import ABC, abstractmethod

from gastracker.models import GasReading, Network


class GasPriceSource(ABC):
    """Abstract base class for live gas price providers."""

    @abstractmethod
    async def fetch_price(self, network: Network) -> GasReading:
        """Fetch the current gas price for a network.

        Raises:
            SourceUnavailableError: On transport, decoding or status failure.
        """
        ...

    async def close(self) -> None:
        """Release any held resources. Default implementation holds none."""
