import threading
import time
from collections import defaultdict
from typing import Any, Dict


class MetricsCollector:
    """Counters and timings for sitemap scans and renders."""

    def __init__(self):
        self._counters: Dict[str, int] = defaultdict(int)
        # Running aggregates per timer: count, total, min, max.
        self._timers: Dict[str, list[float]] = {}
        self._lock = threading.Lock()
        self._start_time = time.time()

    def increment(self, name: str, value: int = 1) -> None:
        """Increment a counter."""
        with self._lock:
            self._counters[name] += value

    def timing(self, name: str, duration_ms: float) -> None:
        """Record timing in milliseconds."""
        with self._lock:
            agg = self._timers.get(name)
            if agg is None:
                self._timers[name] = [1, duration_ms, duration_ms, duration_ms]
                return
            agg[0] += 1
            agg[1] += duration_ms
            agg[2] = min(agg[2], duration_ms)
            agg[3] = max(agg[3], duration_ms)

    def timer(self, name: str) -> "Timer":
        """Context manager for timing."""
        return Timer(self, name)

    def count(self, name: str) -> int:
        return self._counters.get(name, 0)

    def get_stats(self) -> Dict[str, Any]:
        """Get all stats."""
        uptime = time.time() - self._start_time

        with self._lock:
            counters = dict(self._counters)
            timer_stats = {}
            for name, (count, total, low, high) in self._timers.items():
                timer_stats[name] = {
                    "count": int(count),
                    "avg_ms": total / count,
                    "min_ms": low,
                    "max_ms": high,
                }

        return {
            "uptime_seconds": uptime,
            "counters": counters,
            "timers": timer_stats,
        }

    def reset(self) -> None:
        """Reset all metrics."""
        with self._lock:
            self._counters.clear()
            self._timers.clear()


class Timer:
    """Context manager for timing."""

    def __init__(self, collector: MetricsCollector, name: str):
        self._collector = collector
        self._name = name
        self._start = 0.0

    def __enter__(self):
        self._start = time.time()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration_ms = (time.time() - self._start) * 1000
        self._collector.timing(self._name, duration_ms)
