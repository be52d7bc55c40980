"""Example demonstrating quantum-inspired Sharpe ratio optimization."""

import numpy as np

from quantfolio.data import get_sample_assets
from quantfolio.monitoring import PerformanceMonitor
from quantfolio.optimization import (
    PortfolioConstraints,
    QuantumInspiredOptimizer,
    allocation_values,
)


def compare_constraints():
    """Optimize the sample universe under different weight bounds."""
    assets = get_sample_assets()
    monitor = PerformanceMonitor()
    optimizer = QuantumInspiredOptimizer(risk_free_rate=0.02, timer=monitor)

    bounds = {
        "Unconstrained": PortfolioConstraints(),
        "Dashboard default": PortfolioConstraints(min_weight=0.05, max_weight=0.4),
        "Tight band": PortfolioConstraints(min_weight=0.15, max_weight=0.25),
    }

    equal_weight = optimizer.calculate_portfolio_metrics(
        assets, np.full(len(assets), 1.0 / len(assets))
    )
    print(f"Equal-weight Sharpe Ratio: {equal_weight.sharpe_ratio:.4f}")

    for name, constraints in bounds.items():
        print(f"\n{name} (min={constraints.min_weight}, max={constraints.max_weight})")

        result = optimizer.optimize_portfolio(assets, constraints)

        print(f"  Expected Return: {result.expected_return:.4f}")
        print(f"  Volatility: {result.volatility:.4f}")
        print(f"  Sharpe Ratio: {result.sharpe_ratio:.4f}")
        print(f"  Iterations: {result.iterations} (converged={result.converged})")
        for symbol, weight in result.weights_by_symbol().items():
            print(f"    {symbol:>6}: {weight:.4f}")

        values = allocation_values(assets, result.optimal_weights)
        print(f"  Allocation value per unit: {sum(values.values()):.2f}")

    stats = monitor.get_metrics("optimize_portfolio")
    print(f"\nAverage optimization time: {stats.avg:.2f}ms over {stats.count} runs")


if __name__ == "__main__":
    print("Quantum-Inspired Sharpe Ratio Optimization Example")
    print("=" * 50)

    compare_constraints()

    print("\nExample completed successfully!")
