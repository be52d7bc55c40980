"""
Data models for assets supplied to the optimizer.
"""

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(frozen=True)
class Asset:
    """Asset with the return and risk estimates used for optimization."""

    symbol: str
    name: str
    expected_return: float
    volatility: float
    price: float = 100.0

    def __post_init__(self):
        """Validate asset data."""
        if not self.symbol or not self.symbol.strip():
            raise ValueError("Symbol cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "symbol": self.symbol,
            "name": self.name,
            "expected_return": self.expected_return,
            "volatility": self.volatility,
            "price": self.price,
        }


# Demonstration universe shown to users with no saved portfolios
SAMPLE_ASSETS = (
    Asset("AAPL", "Apple Inc.", expected_return=0.12, volatility=0.25, price=175.5),
    Asset("GOOGL", "Alphabet Inc.", expected_return=0.14, volatility=0.28, price=2750.0),
    Asset(
        "MSFT",
        "Microsoft Corporation",
        expected_return=0.11,
        volatility=0.22,
        price=415.25,
    ),
    Asset("TSLA", "Tesla Inc.", expected_return=0.18, volatility=0.45, price=245.75),
    Asset("SPY", "SPDR S&P 500 ETF", expected_return=0.10, volatility=0.18, price=445.2),
)


def get_sample_assets() -> List[Asset]:
    """Get a fresh list of the sample assets."""
    return list(SAMPLE_ASSETS)
