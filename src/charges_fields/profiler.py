# MIT License (see LICENSE)
"""
Timing of tracing work.

The line services accept an optional Profiler and file every trace under a
named section ("field_line", "equipotential") together with the number of
points it produced, so that cost can be compared per point as well as per
curve.

Example:
    profiler = Profiler()
    service = FieldLineService(FieldMath(configuration), profiler=profiler)
    service.trace_from_charges(16)
    print(profiler.stats.summary()["field_line"]["us_per_point"])
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class TraceSample:
    """Handle yielded by Profiler.section(); set `points` inside the block."""
    points: int = 0


@dataclass
class ProfileStats:
    times: dict[str, list[float]] = field(default_factory=dict)
    points: dict[str, int] = field(default_factory=dict)

    def add(self, name: str, dt: float, points: int = 0) -> None:
        self.times.setdefault(name, []).append(dt)
        self.points[name] = self.points.get(name, 0) + points

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-section statistics.

        Returns:
            Dict mapping section name to:
            - 'n': number of traces
            - 'points': total points produced
            - 'total_ms', 'mean_ms', 'max_ms': wall time in milliseconds
            - 'us_per_point': microseconds per produced point (0 if none)
        """
        out = {}
        for name, dts in self.times.items():
            total = sum(dts)
            pts = self.points.get(name, 0)
            out[name] = {
                "n": len(dts),
                "points": pts,
                "total_ms": 1e3 * total,
                "mean_ms": 1e3 * total / len(dts),
                "max_ms": 1e3 * max(dts),
                "us_per_point": 1e6 * total / pts if pts else 0.0,
            }
        return out


class Profiler:
    """
    Section timer for traces.

    Usage:
        with profiler.section("equipotential") as sample:
            curve = service.trace(seed)
            sample.points = len(curve)
    """

    def __init__(self) -> None:
        self.stats = ProfileStats()

    def reset(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[TraceSample]:
        sample = TraceSample()
        t0 = time.perf_counter()
        try:
            yield sample
        finally:
            self.stats.add(name, time.perf_counter() - t0, sample.points)
