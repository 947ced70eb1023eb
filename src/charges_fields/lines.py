# MIT License (see LICENSE)
"""
Field lines and equipotential lines.

Thin policy layers over CurveTracer:

- FieldLineService follows dir(P) = E(P)/|E(P)|. Lines end when captured by
  a charge, on leaving the bounds, or after the step budget. A field-free
  seed yields a single-point DEGENERATE_FIELD curve.
- EquipotentialLineService follows E(P) rotated by +90° from the seed and by
  -90° back from the seed, then joins both halves into one polyline. A curve
  that returns to its seed is reported closed and only the forward half is
  kept.

Neither service caches traces: when charges move the caller discards its
curves and traces again (see EquipotentialLineService.retrace()).
"""
from __future__ import annotations
import logging
import math

import numpy as np

from .config import TracerConfig
from .constants import DEGENERATE_FIELD_EPS, ARROW_HEAD_LENGTH, ARROW_HEAD_ALPHA
from .core.field import FieldMath
from .core.tracer import CurveTracer, arrow_markers
from .profiler import Profiler
from .types import ArrowMarker, TerminationReason, TracedCurve
from .util import f64, norm, perp

logger = logging.getLogger(__name__)


def field_direction(field_math: FieldMath, sign: float = 1.0):
    """Direction field sign · E/|E|; None where |E| ≈ 0."""
    def direction(p: np.ndarray) -> np.ndarray | None:
        e = field_math.field_at(p)
        n = norm(e)
        if n < DEGENERATE_FIELD_EPS:
            return None
        return (sign / n) * e
    return direction


def equipotential_direction(field_math: FieldMath, sign: float = 1.0):
    """Direction field E/|E| rotated by sign · 90°; None where |E| ≈ 0."""
    def direction(p: np.ndarray) -> np.ndarray | None:
        e = field_math.field_at(p)
        n = norm(e)
        if n < DEGENERATE_FIELD_EPS:
            return None
        return perp(e, sign) / n
    return direction


def arrow_head(
    marker: ArrowMarker,
    length: float = ARROW_HEAD_LENGTH,
    alpha: float = ARROW_HEAD_ALPHA,
) -> np.ndarray:
    """
    Vertices of the chevron drawn at an arrow marker.

    The chevron is the closed path tip → wing → wing → tip: starting at the
    marker position, step `length` at angle+alpha, cross over to the mirrored
    wing, and return to the tip. `length` is in the same units as the
    marker position (scale it when drawing in view coordinates).

    Returns:
        Array [4, 2]: tip, first wing, second wing, tip.
    """
    a = marker.angle
    tip = f64(marker.position)
    wing1 = tip + length * np.array([math.cos(a + alpha), math.sin(a + alpha)])
    wing2 = wing1 + np.array([
        2 * length * math.sin(alpha) * math.sin(a),
        -2 * length * math.sin(alpha) * math.cos(a),
    ])
    back = wing2 + np.array([-length * math.cos(a - alpha), -length * math.sin(a - alpha)])
    return np.array([tip, wing1, wing2, back], dtype=np.float64)


class FieldLineService:
    """
    Traces electric field lines over a live charge configuration.

    Usage:
        service = FieldLineService(FieldMath(configuration))
        curve = service.trace((-0.9, 0.0))
        curve.reason   # TerminationReason.CAPTURED
    """

    def __init__(
        self,
        field_math: FieldMath,
        config: TracerConfig | None = None,
        profiler: Profiler | None = None,
    ) -> None:
        self.field_math = field_math
        self.config = config or TracerConfig()
        self.tracer = CurveTracer(self.config)
        self.profiler = profiler

    def _trace(self, seed, sign: float) -> TracedCurve:
        positions, q = self.field_math.arrays()
        # A line may start inside the capture radius of a charge it is leaving
        release = (q * sign) > 0
        return self.tracer.trace(
            field_direction(self.field_math, sign),
            seed,
            attractors=positions,
            release=release,
            arrows=True,
        )

    def trace(self, seed) -> TracedCurve:
        """
        Trace one field line from `seed` along +E.

        Returns:
            A TracedCurve with arrow markers; length >= 1.
        """
        if self.profiler:
            with self.profiler.section("field_line") as sample:
                curve = self._trace(seed, 1.0)
                sample.points = len(curve)
            return curve
        return self._trace(seed, 1.0)

    def trace_from_charges(self, n_per_charge: int = 16) -> list[TracedCurve]:
        """
        Fan field lines out of the active charges.

        Seeds n_per_charge points evenly on a ring of radius config.seed_radius
        around every positive charge and traces each along +E. When only
        negative charges are present, the rings are placed around them
        instead, traced along -E and reversed so every polyline runs in the
        field direction.
        """
        positions, q = self.field_math.arrays()
        if len(q) == 0:
            return []
        sign = 1.0 if np.any(q > 0) else -1.0
        angles = np.linspace(0.0, 2.0 * np.pi, n_per_charge, endpoint=False)
        r = self.config.seed_radius

        curves = []
        for center, charge in zip(positions, q):
            if charge * sign <= 0:
                continue
            for a in angles:
                seed = center + r * np.array([np.cos(a), np.sin(a)])
                if sign > 0:
                    curves.append(self.trace(seed))
                else:
                    curves.append(self._reversed(self._trace(seed, -1.0)))
        logger.debug("Fanned %d field lines from %d charges", len(curves), int(np.sum(q * sign > 0)))
        return curves

    def _reversed(self, curve: TracedCurve) -> TracedCurve:
        pts = curve.points[::-1]
        return TracedCurve(
            points=pts,
            reason=curve.reason,
            closed=curve.closed,
            seed=curve.seed,
            arrows=arrow_markers(pts, self.config.arrow_every, self.config.arrow_offset),
        )


class EquipotentialLineService:
    """
    Traces equipotential lines and keeps the ones the user asked for.

    trace() is pure. add_line()/clear_lines()/retrace() manage the list of
    lines currently on the board.
    """

    def __init__(
        self,
        field_math: FieldMath,
        config: TracerConfig | None = None,
        profiler: Profiler | None = None,
    ) -> None:
        self.field_math = field_math
        self.config = config or TracerConfig()
        self.tracer = CurveTracer(self.config)
        self.profiler = profiler
        self.lines: list[TracedCurve] = []

    def _half(self, seed, sign: float) -> TracedCurve:
        return self.tracer.trace(
            equipotential_direction(self.field_math, sign),
            seed,
            closable=True,
        )

    def _trace(self, seed) -> TracedCurve:
        seed = f64(seed)
        positions, _ = self.field_math.arrays()
        # Loops tighter than one step around a charge cannot be resolved
        if len(positions) and np.min(np.linalg.norm(positions - seed, axis=1)) < self.config.step:
            logger.debug("Equipotential seed (%.4f, %.4f) sits on a charge", seed[0], seed[1])
            return TracedCurve(
                points=seed,
                reason=TerminationReason.DEGENERATE_FIELD,
                seed=(float(seed[0]), float(seed[1])),
            )

        forward = self._half(seed, 1.0)
        if forward.closed or (forward.is_degenerate and forward.reason is TerminationReason.DEGENERATE_FIELD):
            return forward

        backward = self._half(seed, -1.0)
        # backward[0] is the seed; keep it once at the join
        pts = np.concatenate([backward.points[::-1], forward.points[1:]], axis=0)
        return TracedCurve(
            points=pts,
            reason=forward.reason,
            closed=False,
            seed=forward.seed,
            start_reason=backward.reason,
        )

    def trace(self, seed) -> TracedCurve:
        """
        Trace the equipotential line through `seed`.

        Returns:
            A closed loop, or the two-sided open contour ordered from the
            backward end through the seed to the forward end.
        """
        if self.profiler:
            with self.profiler.section("equipotential") as sample:
                curve = self._trace(seed)
                sample.points = len(curve)
            return curve
        return self._trace(seed)

    def add_line(self, seed) -> TracedCurve:
        """Trace the line through `seed` and keep it."""
        curve = self.trace(seed)
        self.lines.append(curve)
        return curve

    def clear_lines(self) -> None:
        self.lines.clear()

    def retrace(self) -> list[TracedCurve]:
        """Replace every kept line by a fresh trace from the same seed."""
        self.lines = [self.trace(c.seed) for c in self.lines]
        return self.lines
