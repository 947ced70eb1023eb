# MIT License (see LICENSE)
"""
Generic curve tracer.

Walks a direction field from a seed point with a fixed step length until a
termination condition fires. Field lines and equipotential lines are both
traced with this class; they differ only in the direction field and in
which termination conditions are enabled (see lines.py).

Termination conditions are checked on the current point before every step,
first match wins:
    1. MAX_STEPS         the step budget is spent
    2. OUT_OF_BOUNDS     the point left config.bounds
    3. CAPTURED          the point is within capture_radius of an attractor
    4. CLOSED_LOOP       the point is back within close_tolerance of the seed
                         (only after min_close_steps, only for closable traces)
    5. DEGENERATE_FIELD  the direction at the point is undefined

None of these is an error: every trace returns a TracedCurve with at least
the seed point in it.
"""
from __future__ import annotations
import logging

import numpy as np

from ..config import TracerConfig
from ..types import ArrowMarker, TerminationReason, TracedCurve
from ..util import f64, angle_of
from .integrators import STEPPERS, DirectionField

logger = logging.getLogger(__name__)


def arrow_markers(points: np.ndarray, every: int, offset: int) -> tuple[ArrowMarker, ...]:
    """
    Arrow annotations at every point index i with i % every == offset.

    The arrow angle is the direction of the segment arriving at the point,
    so index 0 never carries an arrow.
    """
    markers = []
    for i in range(offset, len(points), every):
        if i == 0:
            continue
        p = points[i]
        markers.append(ArrowMarker(
            index=i,
            position=(float(p[0]), float(p[1])),
            angle=angle_of(p - points[i - 1]),
        ))
    return tuple(markers)


class CurveTracer:
    """
    Fixed-step path integrator over a direction field.

    Attributes:
        config: Step length, budget, bounds and tolerances.

    Usage:
        tracer = CurveTracer(TracerConfig(step=0.01))
        curve = tracer.trace(direction, seed=(0.1, 0.0), attractors=positions)
    """

    def __init__(self, config: TracerConfig | None = None) -> None:
        self.config = config or TracerConfig()
        self._step = STEPPERS[self.config.method]

    def trace(
        self,
        direction: DirectionField,
        seed,
        *,
        attractors: np.ndarray | None = None,
        release: np.ndarray | None = None,
        closable: bool = False,
        arrows: bool = False,
    ) -> TracedCurve:
        """
        Trace one curve from `seed`.

        Args:
            direction: Unit direction field; returns None where undefined.
            seed: Start point [x, y].
            attractors: Points [N, 2] that capture the curve (field lines).
            release: Boolean mask [N] of attractors the curve may start inside
                     of. Those are ignored until the curve has left their
                     capture radius once (a line leaving its source charge).
            closable: Enable CLOSED_LOOP detection (equipotentials).
            arrows: Attach arrow markers at the configured cadence.

        Returns:
            The traced polyline and why it stopped.
        """
        cfg = self.config
        seed = f64(seed)
        current = seed
        points = [seed]
        steps = 0

        radius = cfg.capture_radius
        captured_by = None
        if attractors is not None and len(attractors):
            attractors = f64(attractors).reshape(-1, 2)
            inside = np.linalg.norm(attractors - seed, axis=1) <= radius
            if release is None:
                ignored = np.zeros(len(attractors), dtype=bool)
            else:
                ignored = inside & np.asarray(release, dtype=bool)
        else:
            attractors = None

        while True:
            if steps >= cfg.max_steps:
                reason = TerminationReason.MAX_STEPS
                break
            if not cfg.bounds.contains(current):
                reason = TerminationReason.OUT_OF_BOUNDS
                break
            if attractors is not None:
                inside = np.linalg.norm(attractors - current, axis=1) <= radius
                ignored &= inside
                hits = np.flatnonzero(inside & ~ignored)
                if hits.size:
                    captured_by = int(hits[0])
                    reason = TerminationReason.CAPTURED
                    break
            if (
                closable
                and steps >= cfg.min_close_steps
                and np.linalg.norm(current - seed) <= cfg.close_tolerance
            ):
                reason = TerminationReason.CLOSED_LOOP
                break

            nxt = self._step(direction, current, cfg.step)
            if nxt is None:
                reason = TerminationReason.DEGENERATE_FIELD
                break
            current = nxt
            points.append(current)
            steps += 1

        pts = np.array(points, dtype=np.float64)
        logger.debug(
            "Traced %d points from (%.4f, %.4f): %s%s",
            len(pts), seed[0], seed[1], reason.name,
            "" if captured_by is None else f" by attractor {captured_by}",
        )
        return TracedCurve(
            points=pts,
            reason=reason,
            closed=reason is TerminationReason.CLOSED_LOOP,
            seed=(float(seed[0]), float(seed[1])),
            arrows=arrow_markers(pts, cfg.arrow_every, cfg.arrow_offset) if arrows else (),
        )
