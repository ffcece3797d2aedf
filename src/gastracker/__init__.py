"""Gas price tracker -- live gas prices with synthetic candlestick history."""

__version__ = "0.1.0"
