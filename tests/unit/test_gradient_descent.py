"""
Unit tests for the quantum-inspired Sharpe ratio optimizer.
"""

import dataclasses
from unittest.mock import Mock

import numpy as np
import pytest

from quantfolio.data.models import Asset, get_sample_assets
from quantfolio.monitoring import PerformanceMonitor
from quantfolio.optimization.exceptions import (
    DegenerateVolatilityError,
    InvalidInputError,
    OptimizationCancelledError,
)
from quantfolio.optimization.gradient_descent import (
    OptimizationResult,
    PortfolioConstraints,
    QuantumInspiredOptimizer,
    optimize,
)
from quantfolio.optimization.metrics import calculate_portfolio_metrics


class TestPortfolioConstraints:
    """Test suite for PortfolioConstraints."""

    def test_defaults(self):
        """Test default bounds are [0, 1]."""
        constraints = PortfolioConstraints()
        assert constraints.min_weight == 0.0
        assert constraints.max_weight == 1.0

    def test_min_above_max(self):
        """Test inverted bounds are rejected."""
        with pytest.raises(InvalidInputError, match="max_weight must be >= min_weight"):
            PortfolioConstraints(min_weight=0.6, max_weight=0.4)

    @pytest.mark.parametrize("min_weight,max_weight", [(-0.1, 1.0), (0.0, 1.5)])
    def test_out_of_range(self, min_weight, max_weight):
        """Test bounds outside [0, 1] are rejected."""
        with pytest.raises(InvalidInputError):
            PortfolioConstraints(min_weight=min_weight, max_weight=max_weight)

    def test_immutable(self):
        """Test constraints cannot be modified."""
        constraints = PortfolioConstraints()
        with pytest.raises(dataclasses.FrozenInstanceError):
            constraints.min_weight = 0.1


class TestQuantumInspiredOptimizer:
    """Test suite for QuantumInspiredOptimizer."""

    def setup_method(self):
        """Set up test fixtures."""
        self.optimizer = QuantumInspiredOptimizer(risk_free_rate=0.02)
        self.two_assets = [
            Asset("AAA", "Asset A", expected_return=0.12, volatility=0.25),
            Asset("BBB", "Asset B", expected_return=0.08, volatility=0.15),
        ]
        self.sample_assets = get_sample_assets()

    def test_initialization(self):
        """Test optimizer defaults."""
        optimizer = QuantumInspiredOptimizer()
        assert optimizer.risk_free_rate == 0.02
        assert optimizer.max_iterations == 100
        assert optimizer.tolerance == 1e-6
        assert optimizer.timer is None

    def test_zero_risk_free_rate_kept(self):
        """Test an explicit zero risk-free rate is not replaced by the default."""
        optimizer = QuantumInspiredOptimizer(risk_free_rate=0.0)
        assert optimizer.risk_free_rate == 0.0

    def test_invalid_settings(self):
        """Test invalid iteration and tolerance settings."""
        with pytest.raises(InvalidInputError):
            QuantumInspiredOptimizer(max_iterations=0)
        with pytest.raises(InvalidInputError):
            QuantumInspiredOptimizer(tolerance=0.0)

    def test_learning_rate_schedule(self):
        """Test the step size decays exponentially."""
        assert QuantumInspiredOptimizer.learning_rate(0) == 0.01
        assert np.isclose(QuantumInspiredOptimizer.learning_rate(50), 0.01 / np.e)
        rates = [QuantumInspiredOptimizer.learning_rate(i) for i in range(100)]
        assert all(a > b for a, b in zip(rates, rates[1:]))

    @pytest.mark.parametrize("n_assets", [0, 1])
    def test_too_few_assets(self, n_assets):
        """Test fewer than two assets are rejected."""
        with pytest.raises(InvalidInputError, match="at least 2 assets"):
            self.optimizer.optimize_portfolio(self.two_assets[:n_assets])

    def test_invalid_input_is_value_error(self):
        """Test InvalidInputError can be handled as ValueError."""
        with pytest.raises(ValueError):
            self.optimizer.optimize_portfolio(self.two_assets[:1])

    def test_two_assets_accepted(self):
        """Test the two-asset boundary case."""
        result = self.optimizer.optimize_portfolio(self.two_assets)

        assert isinstance(result, OptimizationResult)
        assert len(result.optimal_weights) == 2

    def test_weights_sum_to_one_and_respect_bounds(self):
        """Test weight invariants on the sample universe."""
        constraints = PortfolioConstraints(min_weight=0.05, max_weight=0.4)
        result = self.optimizer.optimize_portfolio(self.sample_assets, constraints)

        assert np.isclose(np.sum(result.optimal_weights), 1.0, atol=1e-6)
        assert np.all(result.optimal_weights >= 0.05 - 1e-6)
        assert np.all(result.optimal_weights <= 0.4 + 1e-6)

    def test_convergence_trace_length(self):
        """Test iterations equals trace length and is bounded."""
        result = self.optimizer.optimize_portfolio(self.sample_assets)

        assert result.iterations == len(result.convergence_data)
        assert 1 <= result.iterations <= self.optimizer.max_iterations

    def test_trace_starts_at_equal_weight_sharpe(self):
        """Test the first trace entry is the Sharpe ratio of the uniform start."""
        result = self.optimizer.optimize_portfolio(self.sample_assets)
        uniform = calculate_portfolio_metrics(
            self.sample_assets, np.full(5, 0.2), risk_free_rate=0.02
        )

        assert np.isclose(result.convergence_data[0], uniform.sharpe_ratio)

    def test_max_iterations_exhausted(self):
        """Test the loop stops at max_iterations without convergence."""
        optimizer = QuantumInspiredOptimizer(max_iterations=5, tolerance=1e-12)
        result = optimizer.optimize_portfolio(self.two_assets)

        assert result.iterations == 5
        assert len(result.convergence_data) == 5
        assert result.converged is False

    def test_early_convergence(self):
        """Test a loose tolerance stops after the first pass."""
        optimizer = QuantumInspiredOptimizer(tolerance=1.0)
        result = optimizer.optimize_portfolio(self.two_assets)

        assert result.iterations == 1
        assert result.converged is True

    def test_does_not_regress_from_start(self):
        """Test the final Sharpe ratio is at least the 50/50 Sharpe ratio."""
        result = self.optimizer.optimize_portfolio(self.two_assets)
        start = calculate_portfolio_metrics(self.two_assets, [0.5, 0.5], 0.02)

        assert result.sharpe_ratio >= start.sharpe_ratio - 1e-12

    def test_favors_lower_risk_asset_without_concentrating(self):
        """Test the search tilts toward the better diversifier but keeps both assets."""
        result = self.optimizer.optimize_portfolio(self.two_assets)
        weights = result.optimal_weights

        assert weights[1] > weights[0]
        assert 0.0 < weights[0] < 1.0
        assert 0.0 < weights[1] < 1.0

    def test_band_constraints(self):
        """Test both weights stay inside a [0.4, 0.6] band."""
        constraints = PortfolioConstraints(min_weight=0.4, max_weight=0.6)
        result = self.optimizer.optimize_portfolio(self.two_assets, constraints)

        assert np.all(result.optimal_weights >= 0.4 - 1e-6)
        assert np.all(result.optimal_weights <= 0.6 + 1e-6)
        assert np.isclose(np.sum(result.optimal_weights), 1.0, atol=1e-6)

    def test_high_risk_free_rate(self):
        """Test a risk-free rate above every return gives a finite negative Sharpe."""
        optimizer = QuantumInspiredOptimizer(risk_free_rate=0.5)
        result = optimizer.optimize_portfolio(self.two_assets)

        assert np.isfinite(result.sharpe_ratio)
        assert result.sharpe_ratio < 0
        assert all(np.isfinite(value) for value in result.convergence_data)

    def test_zero_volatility_assets(self):
        """Test degenerate volatility aborts on the first objective evaluation."""
        assets = [
            Asset("AAA", "Asset A", expected_return=0.05, volatility=0.0),
            Asset("BBB", "Asset B", expected_return=0.06, volatility=0.0),
        ]
        with pytest.raises(DegenerateVolatilityError):
            self.optimizer.optimize_portfolio(assets)

    def test_deterministic(self):
        """Test repeated runs give identical results."""
        first = self.optimizer.optimize_portfolio(self.sample_assets)
        second = self.optimizer.optimize_portfolio(self.sample_assets)

        assert np.array_equal(first.optimal_weights, second.optimal_weights)
        assert first.convergence_data == second.convergence_data

    def test_weights_aligned_with_input_order(self):
        """Test weights follow the order of the input assets."""
        result = self.optimizer.optimize_portfolio(self.two_assets)
        reversed_result = self.optimizer.optimize_portfolio(self.two_assets[::-1])

        assert np.allclose(
            result.optimal_weights, reversed_result.optimal_weights[::-1]
        )
        assert result.symbols == ("AAA", "BBB")
        assert reversed_result.symbols == ("BBB", "AAA")

    def test_result_metrics_match_weights(self):
        """Test reported metrics are recomputed from the final weights."""
        result = self.optimizer.optimize_portfolio(self.sample_assets)
        metrics = self.optimizer.calculate_portfolio_metrics(
            self.sample_assets, result.optimal_weights
        )

        assert result.expected_return == metrics.expected_return
        assert result.volatility == metrics.volatility
        assert result.sharpe_ratio == metrics.sharpe_ratio

    def test_result_immutable(self):
        """Test the result and its weights cannot be modified."""
        result = self.optimizer.optimize_portfolio(self.two_assets)

        with pytest.raises(dataclasses.FrozenInstanceError):
            result.sharpe_ratio = 1.0
        with pytest.raises(ValueError):
            result.optimal_weights[0] = 1.0

    def test_weights_by_symbol(self):
        """Test symbol to weight mapping."""
        result = self.optimizer.optimize_portfolio(self.sample_assets)
        by_symbol = result.weights_by_symbol()

        assert list(by_symbol) == ["AAPL", "GOOGL", "MSFT", "TSLA", "SPY"]
        assert np.isclose(sum(by_symbol.values()), 1.0)

    def test_to_dict(self):
        """Test dictionary conversion."""
        result = self.optimizer.optimize_portfolio(self.two_assets)
        data = result.to_dict()

        assert data["iterations"] == result.iterations
        assert data["optimal_weights"] == result.optimal_weights.tolist()
        assert data["convergence_data"] == list(result.convergence_data)
        assert data["symbols"] == ["AAA", "BBB"]

    def test_cancellation_before_first_iteration(self):
        """Test should_stop cancels without returning a result."""
        with pytest.raises(OptimizationCancelledError):
            self.optimizer.optimize_portfolio(
                self.two_assets, should_stop=lambda: True
            )

    def test_cancellation_between_iterations(self):
        """Test should_stop is checked between iterations."""
        calls = []

        def should_stop():
            calls.append(1)
            return len(calls) > 3

        optimizer = QuantumInspiredOptimizer(tolerance=1e-12)
        with pytest.raises(OptimizationCancelledError, match="after 3 iterations"):
            optimizer.optimize_portfolio(self.two_assets, should_stop=should_stop)

    def test_timer_hook(self):
        """Test an injected monitor records each optimization."""
        monitor = PerformanceMonitor()
        optimizer = QuantumInspiredOptimizer(timer=monitor)

        optimizer.optimize_portfolio(self.two_assets)
        optimizer.optimize_portfolio(self.two_assets)

        stats = monitor.get_metrics("optimize_portfolio")
        assert stats is not None
        assert stats.count == 2

    def test_timer_stopped_on_failure(self):
        """Test the timer is stopped when the optimization fails."""
        stop = Mock()
        timer = Mock()
        timer.start_timer.return_value = stop
        optimizer = QuantumInspiredOptimizer(timer=timer)
        assets = [
            Asset("AAA", "Asset A", expected_return=0.05, volatility=0.0),
            Asset("BBB", "Asset B", expected_return=0.06, volatility=0.0),
        ]

        with pytest.raises(DegenerateVolatilityError):
            optimizer.optimize_portfolio(assets)

        timer.start_timer.assert_called_once_with("optimize_portfolio")
        stop.assert_called_once()

    def test_all_weights_clipped_to_zero(self):
        """Test a step that clips every weight to zero aborts the run."""
        stop = Mock()
        timer = Mock()
        timer.start_timer.return_value = stop
        optimizer = QuantumInspiredOptimizer(risk_free_rate=-0.1, timer=timer)
        assets = [
            Asset("AAA", "Asset A", expected_return=0.1, volatility=0.001),
            Asset("BBB", "Asset B", expected_return=0.1, volatility=0.001),
        ]

        with pytest.raises(DegenerateVolatilityError, match="collapsed"):
            optimizer.optimize_portfolio(assets)

        stop.assert_called_once()

    def test_timer_not_started_for_invalid_input(self):
        """Test invalid input is rejected before any work is timed."""
        timer = Mock()
        optimizer = QuantumInspiredOptimizer(timer=timer)

        with pytest.raises(InvalidInputError):
            optimizer.optimize_portfolio(self.two_assets[:1])

        timer.start_timer.assert_not_called()


class TestOptimizeFunction:
    """Test suite for the optimize convenience function."""

    def test_matches_optimizer(self):
        """Test optimize gives the same result as the optimizer class."""
        assets = get_sample_assets()
        constraints = PortfolioConstraints(min_weight=0.05, max_weight=0.4)

        result = optimize(assets, constraints, risk_free_rate=0.03)
        expected = QuantumInspiredOptimizer(risk_free_rate=0.03).optimize_portfolio(
            assets, constraints
        )

        assert np.array_equal(result.optimal_weights, expected.optimal_weights)
        assert result.sharpe_ratio == expected.sharpe_ratio

    def test_too_few_assets(self):
        """Test optimize rejects a single asset."""
        with pytest.raises(InvalidInputError):
            optimize([Asset("AAA", "Asset A", expected_return=0.1, volatility=0.2)])
