"""
Portfolio metrics for arbitrary weight vectors.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Sequence

import numpy as np

from ..data.models import Asset
from .covariance import build_covariance
from .exceptions import InvalidInputError
from .objective import portfolio_return, portfolio_volatility, sharpe_ratio


@dataclass(frozen=True)
class PortfolioMetrics:
    """Expected return, volatility and Sharpe ratio of a portfolio."""

    expected_return: float
    volatility: float
    sharpe_ratio: float

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        return asdict(self)


def _as_weight_array(assets: Sequence[Asset], weights: Sequence[float]) -> np.ndarray:
    weights = np.asarray(weights, dtype=float)
    if weights.shape != (len(assets),):
        raise InvalidInputError(
            f"Expected {len(assets)} weights, got {weights.size}"
        )
    return weights


def calculate_portfolio_metrics(
    assets: Sequence[Asset],
    weights: Sequence[float],
    risk_free_rate: float = 0.02,
) -> PortfolioMetrics:
    """
    Calculate metrics for a given allocation.

    Weights are taken as given: they need not sum to one or satisfy any
    bounds, so manually entered allocations can be evaluated as well as
    optimizer output.

    Args:
        assets: Assets in portfolio order
        weights: Weight for each asset
        risk_free_rate: Risk-free rate for the Sharpe ratio

    Returns:
        Portfolio metrics

    Raises:
        InvalidInputError: If the number of weights differs from the number of assets
        DegenerateVolatilityError: If the portfolio volatility is zero
    """
    weights = _as_weight_array(assets, weights)
    expected_returns = np.array([asset.expected_return for asset in assets], dtype=float)
    covariance_matrix = build_covariance(assets)

    expected_return = portfolio_return(weights, expected_returns)
    volatility = portfolio_volatility(weights, covariance_matrix)

    return PortfolioMetrics(
        expected_return=expected_return,
        volatility=volatility,
        sharpe_ratio=sharpe_ratio(
            weights, expected_returns, covariance_matrix, risk_free_rate
        ),
    )


def allocation_values(
    assets: Sequence[Asset], weights: Sequence[float]
) -> Dict[str, float]:
    """Map each symbol to weight * price."""
    weights = _as_weight_array(assets, weights)
    return {
        asset.symbol: float(weight * asset.price)
        for asset, weight in zip(assets, weights)
    }
