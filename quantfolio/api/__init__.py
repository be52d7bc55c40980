"""
QuantFolio API module.

FastAPI application providing REST endpoints for quantum-inspired
Sharpe ratio optimization.
"""

from typing import List

__all__: List[str] = []
