"""
Performance monitoring utilities.
"""

from typing import List

from .performance import PerformanceMonitor, TimingStats

__all__: List[str] = ["PerformanceMonitor", "TimingStats"]
