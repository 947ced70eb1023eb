# MIT License (see LICENSE)
"""
Utility functions for 2D vector math.

Positions, field vectors and tangents are numpy float64 arrays of shape (2,).
These helpers are shared by the field kernel, the tracer and the change
tracker.
"""
from __future__ import annotations
import os

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Lets callers pass tuples or lists for positions while the kernel
    always works on arrays.
    """
    return np.array(x, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 2D vector."""
    return float(v[0] * v[0] + v[1] * v[1])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return float(np.sqrt(norm2(v)))


def unit(v: np.ndarray, eps: float = 1e-12) -> np.ndarray | None:
    """
    Return a unit vector in the same direction as v.

    Returns None if |v| < eps: the direction is undefined there and the
    caller decides what that means (for tracing, a degenerate field).
    """
    n = norm(v)
    if n < eps:
        return None
    return v / n


def perp(v: np.ndarray, sign: float = 1.0) -> np.ndarray:
    """
    Rotate a 2D vector by ±90 degrees.

    sign=+1 rotates counterclockwise: (x, y) → (-y, x).
    sign=-1 rotates clockwise:        (x, y) → (y, -x).
    """
    return np.array([-sign * v[1], sign * v[0]], dtype=np.float64)


def angle_of(v: np.ndarray) -> float:
    """Angle of a 2D vector in radians, counterclockwise from +x."""
    return float(np.arctan2(v[1], v[0]))


def same_point(a: np.ndarray | None, b: np.ndarray | None) -> bool:
    """Exact positional equality; two missing positions compare equal."""
    if a is None or b is None:
        return a is None and b is None
    return bool(a[0] == b[0] and a[1] == b[1])


def env_value(name: str, default: str | None = None) -> str | None:
    """Read a CHARGES_FIELDS_* style override from the environment."""
    return os.environ.get(name, default)
