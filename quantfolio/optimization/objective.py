"""
Sharpe ratio objective and analytic gradient.

The optimizer minimizes the negated Sharpe ratio, so both the objective and
its gradient carry a flipped sign relative to the Sharpe ratio itself.
"""

import numpy as np

from .exceptions import DegenerateVolatilityError


def portfolio_return(weights: np.ndarray, expected_returns: np.ndarray) -> float:
    """Weighted sum of asset expected returns."""
    return float(np.dot(weights, expected_returns))


def portfolio_variance(weights: np.ndarray, covariance_matrix: np.ndarray) -> float:
    """Quadratic form w^T C w."""
    return float(weights @ covariance_matrix @ weights)


def portfolio_volatility(weights: np.ndarray, covariance_matrix: np.ndarray) -> float:
    """
    Portfolio standard deviation.

    Raises:
        DegenerateVolatilityError: If the portfolio variance is zero
    """
    variance = portfolio_variance(weights, covariance_matrix)
    if variance <= 0.0:
        raise DegenerateVolatilityError(
            "Portfolio volatility is zero; Sharpe ratio is undefined"
        )
    return float(np.sqrt(variance))


def sharpe_ratio(
    weights: np.ndarray,
    expected_returns: np.ndarray,
    covariance_matrix: np.ndarray,
    risk_free_rate: float,
) -> float:
    """Excess return per unit of volatility."""
    excess_return = portfolio_return(weights, expected_returns) - risk_free_rate
    return excess_return / portfolio_volatility(weights, covariance_matrix)


def objective(
    weights: np.ndarray,
    expected_returns: np.ndarray,
    covariance_matrix: np.ndarray,
    risk_free_rate: float,
) -> float:
    """
    Negated Sharpe ratio.

    Args:
        weights: Portfolio weights
        expected_returns: Expected return for each asset
        covariance_matrix: Asset covariance matrix
        risk_free_rate: Risk-free rate

    Returns:
        -S(w), so that minimizing it maximizes the Sharpe ratio
    """
    return -sharpe_ratio(weights, expected_returns, covariance_matrix, risk_free_rate)


def gradient(
    weights: np.ndarray,
    expected_returns: np.ndarray,
    covariance_matrix: np.ndarray,
    risk_free_rate: float,
) -> np.ndarray:
    """
    Gradient of the negated Sharpe ratio with respect to the weights.

    Uses the quotient rule on S = (R - rf) / sigma:

        dS/dw_i = (r_i * sigma - (R - rf) * dsigma/dw_i) / sigma^2
        dsigma/dw_i = (2 * sum_j w_j C_ij) / (2 * sigma)

    Args:
        weights: Portfolio weights
        expected_returns: Expected return for each asset
        covariance_matrix: Asset covariance matrix
        risk_free_rate: Risk-free rate

    Returns:
        Vector of -dS/dw_i

    Raises:
        DegenerateVolatilityError: If the portfolio volatility is zero
    """
    volatility = portfolio_volatility(weights, covariance_matrix)
    excess_return = portfolio_return(weights, expected_returns) - risk_free_rate

    variance_gradient = 2.0 * (covariance_matrix @ weights)
    volatility_gradient = variance_gradient / (2.0 * volatility)

    sharpe_gradient = (
        expected_returns * volatility - excess_return * volatility_gradient
    ) / volatility**2

    return -sharpe_gradient
