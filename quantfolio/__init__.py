"""
QuantFolio - Quantum-Inspired Portfolio Optimization

Sharpe ratio optimization for an interactive portfolio dashboard, using a
constrained gradient-descent heuristic over a constant-correlation risk model.
"""

__version__ = "0.1.0"
__author__ = "QuantFolio Team"

from typing import List

__all__: List[str] = []
