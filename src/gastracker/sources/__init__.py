"""Gas price sources -- live provider interface, Etherscan client and fallback."""

from gastracker.sources.client import GasPriceSource
from gastracker.sources.etherscan import EtherscanGasSource
from gastracker.sources.fallback import fallback_price, fallback_reading

__all__ = ["EtherscanGasSource", "GasPriceSource", "fallback_price", "fallback_reading"]
