"""
Quantum-inspired Sharpe ratio optimization.

The "quantum-inspired" search is a variational heuristic: a bounded gradient
descent on the negated Sharpe ratio with an exponentially decaying step
size, started from the equal-weight portfolio. It finds a local stationary
point reachable from that start and is fully deterministic.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

import numpy as np

from ..data.models import Asset
from .covariance import build_covariance
from .exceptions import (
    DegenerateVolatilityError,
    InvalidInputError,
    OptimizationCancelledError,
)
from .metrics import PortfolioMetrics, calculate_portfolio_metrics
from .objective import gradient, objective

logger = logging.getLogger(__name__)

BASE_LEARNING_RATE = 0.01
LEARNING_RATE_DECAY = 50.0


@dataclass(frozen=True)
class PortfolioConstraints:
    """Weight bounds applied identically to every asset."""

    min_weight: float = 0.0
    max_weight: float = 1.0

    def __post_init__(self):
        """Validate bounds."""
        if not 0.0 <= self.min_weight <= 1.0:
            raise InvalidInputError("min_weight must be in [0, 1]")
        if not 0.0 <= self.max_weight <= 1.0:
            raise InvalidInputError("max_weight must be in [0, 1]")
        if self.min_weight > self.max_weight:
            raise InvalidInputError("max_weight must be >= min_weight")


@dataclass(frozen=True)
class OptimizationResult:
    """Result from Sharpe ratio optimization."""

    optimal_weights: np.ndarray
    expected_return: float
    volatility: float
    sharpe_ratio: float
    convergence_data: Tuple[float, ...]
    iterations: int
    converged: bool = False
    symbols: Tuple[str, ...] = field(default_factory=tuple)

    def weights_by_symbol(self) -> Dict[str, float]:
        """Map each asset symbol to its optimal weight."""
        return {
            symbol: float(weight)
            for symbol, weight in zip(self.symbols, self.optimal_weights)
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "optimal_weights": self.optimal_weights.tolist(),
            "expected_return": self.expected_return,
            "volatility": self.volatility,
            "sharpe_ratio": self.sharpe_ratio,
            "convergence_data": list(self.convergence_data),
            "iterations": self.iterations,
            "converged": self.converged,
            "symbols": list(self.symbols),
        }


class QuantumInspiredOptimizer:
    """
    Sharpe ratio maximizer using constrained gradient descent.

    Each iteration records the current Sharpe ratio, steps against the
    gradient of the negated Sharpe ratio, clips every weight to the
    constraint box and rescales the weights to sum to one. The rescaling is
    applied once after clipping, so a weight may end marginally outside the
    box.
    """

    def __init__(
        self,
        risk_free_rate: float = 0.02,
        max_iterations: int = 100,
        tolerance: float = 1e-6,
        timer: Optional[Any] = None,
    ):
        """
        Initialize the optimizer.

        Args:
            risk_free_rate: Risk-free rate for Sharpe ratio calculations
            max_iterations: Maximum gradient steps per optimization
            tolerance: Objective change below which the search stops
            timer: Optional object with start_timer(operation) returning a
                stop callable, e.g. a PerformanceMonitor
        """
        if max_iterations < 1:
            raise InvalidInputError("max_iterations must be at least 1")
        if tolerance <= 0:
            raise InvalidInputError("tolerance must be positive")

        self.risk_free_rate = risk_free_rate
        self.max_iterations = max_iterations
        self.tolerance = tolerance
        self.timer = timer

    @staticmethod
    def learning_rate(iteration: int) -> float:
        """Step size for a zero-based iteration."""
        return BASE_LEARNING_RATE * np.exp(-iteration / LEARNING_RATE_DECAY)

    def optimize_portfolio(
        self,
        assets: Sequence[Asset],
        constraints: Optional[PortfolioConstraints] = None,
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> OptimizationResult:
        """
        Find the weights maximizing the Sharpe ratio.

        Args:
            assets: Assets to allocate across (at least two)
            constraints: Weight bounds, defaults to [0, 1]
            should_stop: Checked before every iteration; returning True
                cancels the optimization

        Returns:
            Optimization result with weights aligned to the input assets

        Raises:
            InvalidInputError: If fewer than two assets are given
            DegenerateVolatilityError: If portfolio volatility becomes zero
            OptimizationCancelledError: If should_stop requests cancellation
        """
        if len(assets) < 2:
            raise InvalidInputError("Portfolio must contain at least 2 assets")

        if constraints is None:
            constraints = PortfolioConstraints()

        stop_timer = (
            self.timer.start_timer("optimize_portfolio")
            if self.timer is not None
            else None
        )
        try:
            return self._run(assets, constraints, should_stop)
        finally:
            if stop_timer is not None:
                stop_timer()

    def _run(
        self,
        assets: Sequence[Asset],
        constraints: PortfolioConstraints,
        should_stop: Optional[Callable[[], bool]],
    ) -> OptimizationResult:
        n_assets = len(assets)
        expected_returns = np.array([a.expected_return for a in assets], dtype=float)
        covariance_matrix = build_covariance(assets)

        logger.info(f"Starting Sharpe ratio optimization for {n_assets} assets")

        weights = np.full(n_assets, 1.0 / n_assets)
        convergence_data = []
        converged = False

        try:
            for iteration in range(self.max_iterations):
                if should_stop is not None and should_stop():
                    raise OptimizationCancelledError(
                        f"Optimization cancelled after {iteration} iterations"
                    )

                current_objective = objective(
                    weights, expected_returns, covariance_matrix, self.risk_free_rate
                )
                convergence_data.append(-current_objective)

                step = self.learning_rate(iteration)
                gradients = gradient(
                    weights, expected_returns, covariance_matrix, self.risk_free_rate
                )

                candidate = np.clip(
                    weights - step * gradients,
                    constraints.min_weight,
                    constraints.max_weight,
                )
                total = candidate.sum()
                if total <= 0.0:
                    raise DegenerateVolatilityError(
                        "All weights collapsed to zero during optimization"
                    )
                weights = candidate / total

                new_objective = objective(
                    weights, expected_returns, covariance_matrix, self.risk_free_rate
                )

                if (iteration + 1) % 25 == 0:
                    logger.debug(
                        f"Iteration {iteration + 1}: sharpe = {-new_objective:.6f}"
                    )

                if abs(new_objective - current_objective) < self.tolerance:
                    converged = True
                    break
        except DegenerateVolatilityError:
            logger.warning(
                f"Optimization aborted after {len(convergence_data)} iterations: "
                "degenerate portfolio volatility"
            )
            raise

        metrics = self.calculate_portfolio_metrics(assets, weights)

        logger.info(
            f"Optimization finished after {len(convergence_data)} iterations "
            f"(converged={converged}): sharpe = {metrics.sharpe_ratio:.6f}"
        )

        weights.setflags(write=False)
        return OptimizationResult(
            optimal_weights=weights,
            expected_return=metrics.expected_return,
            volatility=metrics.volatility,
            sharpe_ratio=metrics.sharpe_ratio,
            convergence_data=tuple(convergence_data),
            iterations=len(convergence_data),
            converged=converged,
            symbols=tuple(asset.symbol for asset in assets),
        )

    def calculate_portfolio_metrics(
        self, assets: Sequence[Asset], weights: Sequence[float]
    ) -> PortfolioMetrics:
        """Calculate metrics for given weights at this optimizer's risk-free rate."""
        return calculate_portfolio_metrics(assets, weights, self.risk_free_rate)


def optimize(
    assets: Sequence[Asset],
    constraints: Optional[PortfolioConstraints] = None,
    risk_free_rate: float = 0.02,
    max_iterations: int = 100,
    tolerance: float = 1e-6,
) -> OptimizationResult:
    """Run a one-off Sharpe ratio optimization."""
    optimizer = QuantumInspiredOptimizer(
        risk_free_rate=risk_free_rate,
        max_iterations=max_iterations,
        tolerance=tolerance,
    )
    return optimizer.optimize_portfolio(assets, constraints)
