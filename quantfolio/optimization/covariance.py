"""
Covariance estimation from per-asset volatilities.

Uses a constant pairwise correlation in place of a covariance estimated from
historical returns. Any estimator returning an n x n matrix for the same
asset list can replace it without changes downstream.
"""

from typing import Sequence

import numpy as np

from ..data.models import Asset

# Moderate positive correlation assumed between every pair of assets
DEFAULT_CORRELATION = 0.3


def build_covariance(
    assets: Sequence[Asset], correlation: float = DEFAULT_CORRELATION
) -> np.ndarray:
    """
    Build the covariance matrix for a list of assets.

    Args:
        assets: Assets in portfolio order
        correlation: Pairwise correlation applied off the diagonal

    Returns:
        Read-only n x n covariance matrix
    """
    volatilities = np.array([asset.volatility for asset in assets], dtype=float)

    covariance = correlation * np.outer(volatilities, volatilities)
    np.fill_diagonal(covariance, volatilities**2)

    covariance.setflags(write=False)
    return covariance
