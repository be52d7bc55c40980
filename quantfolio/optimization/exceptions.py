"""
Exceptions raised by the portfolio optimization core.
"""


class OptimizationError(Exception):
    """Base class for optimization failures."""

    pass


class InvalidInputError(OptimizationError, ValueError):
    """Exception raised when optimizer inputs are structurally invalid."""

    pass


class DegenerateVolatilityError(OptimizationError, ArithmeticError):
    """Exception raised when portfolio volatility evaluates to zero."""

    pass


class OptimizationCancelledError(OptimizationError):
    """Exception raised when a caller stops an optimization between iterations."""

    pass
