"""BarterCoin peer-to-peer bartering marketplace API."""

__version__ = "0.1.0"
