# MIT License (see LICENSE)
"""
Fixed-step integrators for curves that follow a direction field.

A direction field maps a point to a unit vector, or to None where the
direction is undefined (a field-free point). Both steppers advance a point by
exactly one step length h along the field:

    euler_step:  next = p + h · dir(p)
    rk4_step:    next = p + h · (k1 + 2k2 + 2k3 + k4) / 6, renormalized

Step length is never adapted, so identical inputs give bit-identical output.

Reference:
    Runge-Kutta methods: https://en.wikipedia.org/wiki/Runge-Kutta_methods
"""
from __future__ import annotations
from typing import Callable

import numpy as np

from ..util import unit

DirectionField = Callable[[np.ndarray], "np.ndarray | None"]


def euler_step(direction: DirectionField, point: np.ndarray, h: float) -> np.ndarray | None:
    """
    Advance one explicit Euler step along the direction field.

    Returns:
        The next point, or None if the direction at `point` is undefined.
    """
    k1 = direction(point)
    if k1 is None:
        return None
    return point + h * k1


def rk4_step(direction: DirectionField, point: np.ndarray, h: float) -> np.ndarray | None:
    """
    Advance one classical RK4 step along a unit direction field.

    The weighted average of the four stage directions is renormalized so the
    step covers exactly h. If an intermediate stage lands on a field-free point
    the step falls back to Euler with the (valid) first stage.

    Returns:
        The next point, or None if the direction at `point` is undefined.
    """
    k1 = direction(point)
    if k1 is None:
        return None

    k2 = direction(point + 0.5 * h * k1)
    if k2 is None:
        return point + h * k1
    k3 = direction(point + 0.5 * h * k2)
    if k3 is None:
        return point + h * k1
    k4 = direction(point + h * k3)
    if k4 is None:
        return point + h * k1

    avg = unit((k1 + 2 * k2 + 2 * k3 + k4) / 6.0)
    if avg is None:
        # Stages cancelled out (e.g. straddling a turning point)
        return point + h * k1
    return point + h * avg


STEPPERS: dict[str, Callable[[DirectionField, np.ndarray, float], "np.ndarray | None"]] = {
    "euler": euler_step,
    "rk4": rk4_step,
}
