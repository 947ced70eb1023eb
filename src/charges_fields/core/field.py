# MIT License (see LICENSE)
"""
Electric field and potential of a set of point charges.

Implements superposition in normalized units (k = 1 by default):
    V(P) = k Σ qᵢ / |P − rᵢ|
    E(P) = k Σ qᵢ (P − rᵢ) / |P − rᵢ|³
over active charges only.

Singularity handling: the distance |P − rᵢ| is clamped to eps before
dividing. A query on (or extremely near) a charge therefore returns a large
but finite value; nothing in this module raises for numeric reasons.

The module-level functions take plain arrays (positions [N, 2], charges [N])
and are pure. FieldMath binds them to a live ChargeConfiguration and caches
the arrays until the configuration's revision changes.
"""
from __future__ import annotations
import logging
from typing import Iterable

import numpy as np

from ..constants import K_COULOMB, DEFAULT_EPS
from ..types import PointCharge
from ..util import f64

logger = logging.getLogger(__name__)


def charge_arrays(charges: Iterable[PointCharge]) -> tuple[np.ndarray, np.ndarray]:
    """
    Pack active charges into (positions [N, 2], charges [N]) arrays.

    Iteration order is preserved so sums are evaluated in the same order
    every time.
    """
    active = [c for c in charges if c.active]
    if not active:
        return np.zeros((0, 2), dtype=np.float64), np.zeros(0, dtype=np.float64)
    positions = np.array([c.position for c in active], dtype=np.float64)
    q = np.array([c.charge for c in active], dtype=np.float64)
    return positions, q


def _clamped_offsets(
    positions: np.ndarray, point: np.ndarray, eps: float
) -> tuple[np.ndarray, np.ndarray]:
    """Offsets P − rᵢ and their lengths clamped to eps."""
    d = point - positions
    r = np.sqrt(d[:, 0] * d[:, 0] + d[:, 1] * d[:, 1])
    return d, np.maximum(r, eps)


def potential_at(
    positions: np.ndarray,
    charges: np.ndarray,
    point,
    k: float = K_COULOMB,
    eps: float = DEFAULT_EPS,
) -> float:
    """
    Scalar potential at a point.

    Args:
        positions: Charge positions [N, 2].
        charges: Charge values [N] (±1).
        point: Query point [x, y].
        k: Coulomb constant.
        eps: Distance clamp.

    Returns:
        V(P). 0.0 for an empty configuration.
    """
    if len(charges) == 0:
        return 0.0
    _, r = _clamped_offsets(positions, f64(point), eps)
    return float(k * np.sum(charges / r))


def field_at(
    positions: np.ndarray,
    charges: np.ndarray,
    point,
    k: float = K_COULOMB,
    eps: float = DEFAULT_EPS,
) -> np.ndarray:
    """
    Electric field vector at a point.

    Returns:
        E(P) as a float64 array [Ex, Ey]. The zero vector for an empty
        configuration.
    """
    if len(charges) == 0:
        return np.zeros(2, dtype=np.float64)
    d, r = _clamped_offsets(positions, f64(point), eps)
    w = charges / (r * r * r)
    return k * np.array([np.sum(w * d[:, 0]), np.sum(w * d[:, 1])], dtype=np.float64)


def potential_grid(
    positions: np.ndarray,
    charges: np.ndarray,
    xs,
    ys,
    k: float = K_COULOMB,
    eps: float = DEFAULT_EPS,
) -> np.ndarray:
    """
    Potential sampled on the lattice xs × ys.

    Returns:
        Array [len(ys), len(xs)]; row j, column i is V(xs[i], ys[j]).
    """
    X, Y = np.meshgrid(f64(xs), f64(ys))
    V = np.zeros_like(X)
    # One charge at a time keeps memory at O(grid) regardless of N
    for (cx, cy), q in zip(positions, charges):
        r = np.maximum(np.hypot(X - cx, Y - cy), eps)
        V += q / r
    return k * V


def field_grid(
    positions: np.ndarray,
    charges: np.ndarray,
    xs,
    ys,
    k: float = K_COULOMB,
    eps: float = DEFAULT_EPS,
) -> np.ndarray:
    """
    Field vectors sampled on the lattice xs × ys.

    Returns:
        Array [len(ys), len(xs), 2] of (Ex, Ey).
    """
    X, Y = np.meshgrid(f64(xs), f64(ys))
    E = np.zeros(X.shape + (2,), dtype=np.float64)
    for (cx, cy), q in zip(positions, charges):
        dx = X - cx
        dy = Y - cy
        r = np.maximum(np.hypot(dx, dy), eps)
        w = q / (r * r * r)
        E[..., 0] += w * dx
        E[..., 1] += w * dy
    return k * E


class FieldMath:
    """
    Field and potential of a charge source, sampled on demand.

    The source is either a ChargeConfiguration (anything with a `revision`
    counter and `active_charges()`), or a plain iterable of PointCharge.
    With a configuration, packed arrays are reused until its revision
    changes; plain iterables are re-read on every call.

    Charges on a configuration must be moved, toggled and removed through
    ChargeConfiguration; assigning PointCharge.position or .active directly
    does not bump the revision, so call invalidate() after doing so.

    Usage:
        fm = FieldMath(configuration)
        fm.potential_at((0.0, 0.0))
        fm.field_at((0.5, 0.0))
    """

    def __init__(self, source, k: float = K_COULOMB, eps: float = DEFAULT_EPS) -> None:
        self.source = source
        self.k = float(k)
        self.eps = float(eps)
        self._revision: int | None = None
        self._arrays: tuple[np.ndarray, np.ndarray] | None = None

    def arrays(self) -> tuple[np.ndarray, np.ndarray]:
        """Current (positions, charges) of the active charges."""
        revision = getattr(self.source, "revision", None)
        if revision is None:
            return charge_arrays(self.source)
        if self._arrays is None or revision != self._revision:
            self._arrays = charge_arrays(self.source.active_charges())
            self._revision = revision
            logger.debug("Repacked %d active charges (revision %d)", len(self._arrays[1]), revision)
        return self._arrays

    def invalidate(self) -> None:
        """Drop the packed arrays; the next query re-reads the source."""
        self._arrays = None
        self._revision = None

    def potential_at(self, point) -> float:
        """Scalar potential at a point. Never fails."""
        positions, q = self.arrays()
        return potential_at(positions, q, point, self.k, self.eps)

    def field_at(self, point) -> np.ndarray:
        """Field vector [Ex, Ey] at a point. Never fails."""
        positions, q = self.arrays()
        return field_at(positions, q, point, self.k, self.eps)

    def potentials_at(self, points) -> np.ndarray:
        """Potential at each of an array of points [M, 2]."""
        pts = f64(points).reshape(-1, 2)
        return np.array([self.potential_at(p) for p in pts], dtype=np.float64)

    def potential_grid(self, xs, ys) -> np.ndarray:
        positions, q = self.arrays()
        return potential_grid(positions, q, xs, ys, self.k, self.eps)

    def field_grid(self, xs, ys) -> np.ndarray:
        positions, q = self.arrays()
        return field_grid(positions, q, xs, ys, self.k, self.eps)
