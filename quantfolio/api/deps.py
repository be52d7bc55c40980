"""
Dependency injection for QuantFolio API.
"""

import logging
from typing import Optional

from ..monitoring import PerformanceMonitor
from .config import settings


def get_logger(name: str) -> logging.Logger:
    """
    Get configured logger.

    Args:
        name: Logger name

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(settings.log_format)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, settings.log_level.upper()))

    return logger


class OptimizationManager:
    """Tracks running optimizations and enforces the concurrency limit."""

    def __init__(self, max_concurrent: Optional[int] = None):
        self.running_optimizations = {}
        self.max_concurrent = max_concurrent or settings.max_concurrent_optimizations

    def can_start_optimization(self) -> bool:
        """Check if new optimization can be started."""
        return len(self.running_optimizations) < self.max_concurrent

    def start_optimization(self, optimization_id: str, num_assets: int = 0) -> bool:
        """
        Start tracking an optimization.

        Args:
            optimization_id: Unique optimization identifier
            num_assets: Number of assets being optimized

        Returns:
            True if started successfully
        """
        if not self.can_start_optimization():
            return False

        self.running_optimizations[optimization_id] = {
            "status": "running",
            "num_assets": num_assets,
        }
        return True

    def finish_optimization(self, optimization_id: str):
        """Finish tracking an optimization."""
        self.running_optimizations.pop(optimization_id, None)

    def get_optimization_status(self, optimization_id: str) -> Optional[dict]:
        """Get status of a running optimization."""
        return self.running_optimizations.get(optimization_id)


# Shared by all requests handled by this process
optimization_manager = OptimizationManager()
performance_monitor = PerformanceMonitor(
    slow_operation_threshold_ms=settings.slow_operation_threshold_ms,
    warn_on_slow=settings.environment == "development",
)


def get_optimization_manager() -> OptimizationManager:
    """Get the global optimization manager."""
    return optimization_manager


def get_performance_monitor() -> PerformanceMonitor:
    """Get the performance monitor shared by API requests."""
    return performance_monitor
