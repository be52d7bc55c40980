"""
Timing instrumentation for optimization calls.

A PerformanceMonitor is created by the caller and handed to whatever it
should observe; nothing in the optimization core reaches for a shared
instance.
"""

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimingStats:
    """Summary of recorded durations for one operation, in milliseconds."""

    avg: float
    min: float
    max: float
    count: int


class PerformanceMonitor:
    """Records wall-clock durations per named operation."""

    def __init__(
        self, slow_operation_threshold_ms: float = 1000.0, warn_on_slow: bool = False
    ):
        """
        Initialize the monitor.

        Args:
            slow_operation_threshold_ms: Duration above which an operation is slow
            warn_on_slow: Log a warning for each slow operation
        """
        self.slow_operation_threshold_ms = slow_operation_threshold_ms
        self.warn_on_slow = warn_on_slow
        self._samples: Dict[str, List[float]] = {}
        self._lock = threading.Lock()

    def start_timer(self, operation: str) -> Callable[[], float]:
        """
        Start timing an operation.

        Args:
            operation: Operation name

        Returns:
            Callable that stops the timer and returns the elapsed milliseconds
        """
        start_time = time.perf_counter()

        def stop() -> float:
            duration = (time.perf_counter() - start_time) * 1000.0
            self.record(operation, duration)
            return duration

        return stop

    @contextmanager
    def measure(self, operation: str) -> Iterator[None]:
        """Context manager form of start_timer."""
        stop = self.start_timer(operation)
        try:
            yield
        finally:
            stop()

    def record(self, operation: str, duration_ms: float) -> None:
        """Record a duration for an operation."""
        with self._lock:
            self._samples.setdefault(operation, []).append(duration_ms)

        if self.warn_on_slow and duration_ms > self.slow_operation_threshold_ms:
            logger.warning(
                f"Slow operation: {operation} took {duration_ms:.2f}ms"
            )

    def get_metrics(self, operation: str) -> Optional[TimingStats]:
        """Get timing statistics for an operation, or None if never recorded."""
        with self._lock:
            times = list(self._samples.get(operation, ()))

        if not times:
            return None

        return TimingStats(
            avg=sum(times) / len(times),
            min=min(times),
            max=max(times),
            count=len(times),
        )

    def operations(self) -> List[str]:
        """Names of all recorded operations."""
        with self._lock:
            return sorted(self._samples)

    def get_all_metrics(self) -> Dict[str, TimingStats]:
        """Timing statistics for every recorded operation."""
        metrics = {}
        for operation in self.operations():
            stats = self.get_metrics(operation)
            if stats is not None:
                metrics[operation] = stats
        return metrics

    def log_all_metrics(self) -> None:
        """Log a summary line per operation."""
        for operation, stats in self.get_all_metrics().items():
            logger.info(
                f"{operation}: average={stats.avg:.2f}ms min={stats.min:.2f}ms "
                f"max={stats.max:.2f}ms calls={stats.count}"
            )

    def reset(self) -> None:
        """Discard all recorded samples."""
        with self._lock:
            self._samples.clear()
