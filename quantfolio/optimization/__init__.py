"""
Portfolio optimization engine.

This module contains:
- Constant-correlation covariance estimation
- Sharpe ratio objective and analytic gradient
- Quantum-inspired constrained gradient descent
- Portfolio metrics for arbitrary allocations
"""

from typing import List

from .covariance import build_covariance, DEFAULT_CORRELATION
from .exceptions import (
    OptimizationError,
    InvalidInputError,
    DegenerateVolatilityError,
    OptimizationCancelledError,
)
from .gradient_descent import (
    QuantumInspiredOptimizer,
    OptimizationResult,
    PortfolioConstraints,
    optimize,
)
from .metrics import PortfolioMetrics, calculate_portfolio_metrics, allocation_values
from .objective import (
    objective,
    gradient,
    portfolio_return,
    portfolio_variance,
    portfolio_volatility,
    sharpe_ratio,
)

__all__: List[str] = [
    "build_covariance",
    "DEFAULT_CORRELATION",
    "OptimizationError",
    "InvalidInputError",
    "DegenerateVolatilityError",
    "OptimizationCancelledError",
    "QuantumInspiredOptimizer",
    "OptimizationResult",
    "PortfolioConstraints",
    "optimize",
    "PortfolioMetrics",
    "calculate_portfolio_metrics",
    "allocation_values",
    "objective",
    "gradient",
    "portfolio_return",
    "portfolio_variance",
    "portfolio_volatility",
    "sharpe_ratio",
]
