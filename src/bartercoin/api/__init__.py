"""HTTP API for the BarterCoin marketplace."""
