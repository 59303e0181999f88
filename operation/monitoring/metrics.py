"""
In-process metrics for the advice pipeline and the proxy.

Counters record remote successes, fallbacks and per-model attempts; timers
record remote call latency. Tests read the counters to verify how many
network attempts were made.
"""

import threading
from typing import Dict, Any, List

# Metric names used across the project
ADVICE_MODEL_ATTEMPT = "advice_model_attempt"
ADVICE_REMOTE_SUCCESS = "advice_remote_success"
ADVICE_FALLBACK = "advice_fallback"
ADVICE_TRANSPORT_FAILURE = "advice_transport_failure"
PROXY_REQUESTS = "proxy_requests"
PROXY_UPSTREAM_ERRORS = "proxy_upstream_errors"

# Keep only the most recent observations per histogram
_MAX_OBSERVATIONS = 1000


class Counter:
    """Counter metric that can only increase (until reset)"""

    def __init__(self, name: str):
        self.name = name
        self._value = 0
        self._lock = threading.Lock()

    def inc(self, value: int = 1):
        with self._lock:
            self._value += value

    def get(self) -> int:
        return self._value

    def reset(self):
        with self._lock:
            self._value = 0


class Histogram:
    """Distribution of observed values"""

    def __init__(self, name: str):
        self.name = name
        self._values: List[float] = []
        self._lock = threading.Lock()

    def observe(self, value: float):
        with self._lock:
            self._values.append(value)
            if len(self._values) > _MAX_OBSERVATIONS:
                self._values = self._values[-_MAX_OBSERVATIONS:]

    def get_stats(self) -> Dict[str, float]:
        """count/min/max/mean of the retained observations"""
        with self._lock:
            values = list(self._values)
        if not values:
            return {"count": 0, "min": 0, "max": 0, "mean": 0}
        return {
            "count": len(values),
            "min": min(values),
            "max": max(values),
            "mean": sum(values) / len(values),
        }

    def reset(self):
        with self._lock:
            self._values.clear()


class Timer:
    """Execution time in seconds, backed by a histogram"""

    def __init__(self, name: str):
        self.name = name
        self._histogram = Histogram(f"{name}_duration")

    def record(self, duration: float):
        self._histogram.observe(duration)

    def get_stats(self) -> Dict[str, float]:
        return self._histogram.get_stats()

    def reset(self):
        self._histogram.reset()


class MetricsRegistry:
    """Central registry for all metrics"""

    def __init__(self):
        self._counters: Dict[str, Counter] = {}
        self._timers: Dict[str, Timer] = {}
        self._lock = threading.Lock()

    def counter(self, name: str) -> Counter:
        """Get or create a counter"""
        with self._lock:
            if name not in self._counters:
                self._counters[name] = Counter(name)
            return self._counters[name]

    def timer(self, name: str) -> Timer:
        """Get or create a timer"""
        with self._lock:
            if name not in self._timers:
                self._timers[name] = Timer(name)
            return self._timers[name]

    def counter_value(self, name: str) -> int:
        """Current value of a counter, 0 if it was never touched"""
        with self._lock:
            counter = self._counters.get(name)
        return counter.get() if counter else 0

    def get_all_metrics(self) -> Dict[str, Any]:
        """All metrics as a flat dictionary, prefixed by metric type"""
        metrics: Dict[str, Any] = {}
        for name, counter in self._counters.items():
            metrics[f"counter_{name}"] = counter.get()
        for name, timer in self._timers.items():
            metrics[f"timer_{name}"] = timer.get_stats()
        return metrics

    def reset_all(self):
        with self._lock:
            for counter in self._counters.values():
                counter.reset()
            for timer in self._timers.values():
                timer.reset()


# Global metrics registry
_metrics_registry = MetricsRegistry()


def get_metrics_registry() -> MetricsRegistry:
    """Get the global metrics registry"""
    return _metrics_registry
