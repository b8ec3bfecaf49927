# MIT License (see LICENSE)
"""
Lightweight timing for orchestrator frames.

Orchestrators time each update() under named sections and count events
such as evictions, so a host can see what a frame costs without external
tools.

Example:
    profiler = Profiler()
    sim = MotionOrchestrator(profiler=profiler)
    for _ in range(600):
        sim.update(1 / 60)
    print(profiler.stats.summary())
"""
from __future__ import annotations
import time
from dataclasses import dataclass, field


@dataclass
class ProfileStats:
    """
    Timing samples per section plus integer event counters.
    """
    samples: dict[str, list[float]] = field(default_factory=dict)
    counters: dict[str, int] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        """Record a timing sample (in seconds) for a named section."""
        self.samples.setdefault(name, []).append(dt)

    def count(self, name: str, n: int = 1) -> None:
        """Increment an event counter."""
        self.counters[name] = self.counters.get(name, 0) + n

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-section statistics.

        Returns:
            Dict mapping section name to {'n', 'mean_ms', 'max_ms'}, plus a
            'counters' entry holding the raw event counts.
        """
        out: dict[str, dict[str, float]] = {}
        for name, times in self.samples.items():
            n = len(times)
            out[name] = {
                "n": n,
                "mean_ms": 1e3 * (sum(times) / n),
                "max_ms": 1e3 * max(times),
            }
        if self.counters:
            out["counters"] = dict(self.counters)
        return out

    def reset(self) -> None:
        self.samples.clear()
        self.counters.clear()


class _Section:
    """Context manager that records its wall time into a ProfileStats."""

    def __init__(self, stats: ProfileStats, name: str):
        self.stats = stats
        self.name = name
        self.t0 = 0.0

    def __enter__(self) -> _Section:
        self.t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stats.add(self.name, time.perf_counter() - self.t0)


class Profiler:
    """Hands out timed sections that all report into one ProfileStats."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    def section(self, name: str) -> _Section:
        """Return a context manager timing the enclosed code as `name`."""
        return _Section(self.stats, name)
