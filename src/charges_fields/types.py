# MIT License (see LICENSE)
"""
Core type definitions for the field kernel.

Defines the fundamental data structures:
- PointCharge: a unit charge (±1) at a 2D position.
- Bounds: the rectangular region a traced curve may occupy.
- TerminationReason / ArrowMarker / TracedCurve: the result of a curve trace.
- DeltaEntry: one queued positional change consumed by a renderer.

Field and potential follow superposition in normalized units (k = 1):
  V(P) = Σ qᵢ / |P − rᵢ|
  E(P) = Σ qᵢ · (P − rᵢ) / |P − rᵢ|³
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .util import f64


# =============================================================================
# Charges
# =============================================================================

@dataclass(eq=False)
class PointCharge:
    """
    An idealized charge with no spatial extent.

    Attributes:
        charge: Either +1 or -1. Any other value is rejected.
        position: Position [x, y] in model units.
        active: Inactive charges are ignored by field computation
                (e.g. while animating back to their tray).
        id: Unique identifier assigned by ChargeConfiguration.add().

    Note:
        Position is converted to a float64 numpy array on init. Once the
        charge is on a ChargeConfiguration, change position and active through
        the configuration so that FieldMath and trackers see the change.
    """
    charge: int
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    active: bool = True
    id: int = -1

    def __post_init__(self) -> None:
        """Validate the charge sign and normalize the position."""
        if self.charge not in (1, -1):
            raise ValueError(f"Point charges must be +1 or -1, got {self.charge!r}")
        self.charge = int(self.charge)
        self.position = f64(self.position)
        if self.position.shape != (2,):
            raise ValueError(f"Position must be a 2D point, got shape {self.position.shape}")

    @property
    def is_positive(self) -> bool:
        return self.charge > 0


# =============================================================================
# Tracing
# =============================================================================

@dataclass(frozen=True)
class Bounds:
    """
    Axis-aligned rectangle [min_x, max_x] × [min_y, max_y], edges inclusive.
    """
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def __post_init__(self) -> None:
        if not (self.min_x < self.max_x and self.min_y < self.max_y):
            raise ValueError(
                f"Bounds must have positive extent, got "
                f"({self.min_x}, {self.min_y}, {self.max_x}, {self.max_y})"
            )

    @classmethod
    def from_sequence(cls, values) -> "Bounds":
        """Build from (min_x, min_y, max_x, max_y)."""
        if len(values) != 4:
            raise ValueError(f"Bounds need 4 values, got {len(values)}")
        return cls(*(float(v) for v in values))

    def contains(self, p: np.ndarray) -> bool:
        return bool(self.min_x <= p[0] <= self.max_x and self.min_y <= p[1] <= self.max_y)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)


class TerminationReason(Enum):
    """Why a traced curve stopped. All of these are normal outcomes."""
    MAX_STEPS = "max_steps"
    OUT_OF_BOUNDS = "out_of_bounds"
    CAPTURED = "captured"
    CLOSED_LOOP = "closed_loop"
    DEGENERATE_FIELD = "degenerate_field"


@dataclass(frozen=True)
class ArrowMarker:
    """
    Direction annotation on a field line.

    Attributes:
        index: Index of the polyline point the arrow is drawn at.
        position: That point [x, y].
        angle: Local tangent angle in radians (from the previous point).
    """
    index: int
    position: tuple[float, float]
    angle: float


@dataclass(frozen=True)
class TracedCurve:
    """
    A polyline produced by one trace request.

    Traces are replaced, never edited: the points array is made read-only.

    Attributes:
        points: Array [N, 2] of positions, N >= 1. points[0] is the start of
                the polyline (the seed for one-sided traces).
        reason: Why the (forward end of the) curve stopped.
        closed: True when the curve returned to its seed (CLOSED_LOOP).
        seed: The seed point the trace was requested at.
        arrows: Arrow markers along the curve (field lines only).
        start_reason: For two-sided traces (equipotentials) that did not close,
                      why the backward half stopped. None otherwise.
    """
    points: np.ndarray
    reason: TerminationReason
    closed: bool = False
    seed: tuple[float, float] = (0.0, 0.0)
    arrows: tuple[ArrowMarker, ...] = ()
    start_reason: TerminationReason | None = None

    def __post_init__(self) -> None:
        pts = np.array(self.points, dtype=np.float64).reshape(-1, 2)
        pts.flags.writeable = False
        object.__setattr__(self, "points", pts)

    def __len__(self) -> int:
        return len(self.points)

    @property
    def start(self) -> np.ndarray:
        return self.points[0]

    @property
    def end(self) -> np.ndarray:
        return self.points[-1]

    @property
    def is_degenerate(self) -> bool:
        """A single-point curve: nothing to draw but a dot."""
        return len(self.points) == 1

    def length(self) -> float:
        """Arc length of the polyline."""
        if len(self.points) < 2:
            return 0.0
        return float(np.sum(np.linalg.norm(np.diff(self.points, axis=0), axis=1)))


# =============================================================================
# Change tracking
# =============================================================================

@dataclass(eq=False)
class DeltaEntry:
    """
    One charge's positional change since the consumer last cleared the queue.

    old_position is None  → the charge was added at new_position.
    new_position is None  → the charge was removed from old_position.
    both set              → the charge moved from old_position to new_position.

    Entries compare by identity: the tracker mutates them in place while
    merging events for the same charge.
    """
    charge_id: int
    charge: int
    old_position: np.ndarray | None = None
    new_position: np.ndarray | None = None

    @property
    def is_added(self) -> bool:
        return self.old_position is None and self.new_position is not None

    @property
    def is_removed(self) -> bool:
        return self.old_position is not None and self.new_position is None

    @property
    def is_moved(self) -> bool:
        return self.old_position is not None and self.new_position is not None

    @property
    def kind(self) -> str:
        if self.is_added:
            return "added"
        if self.is_removed:
            return "removed"
        return "moved"
