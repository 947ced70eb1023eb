# MIT License (see LICENSE)
"""
Numeric core of the field kernel.

This subpackage provides:
    - Field math: superposition of potential and field, point and grid sampling.
    - Integrators: fixed-step Euler and RK4 along a unit direction field.
    - CurveTracer: the termination-aware path walker built on them.

Typical usage:
    from charges_fields.core import FieldMath, CurveTracer

    fm = FieldMath(configuration)
    fm.field_at((0.0, 0.0))
"""
from .field import (
    FieldMath,
    charge_arrays,
    potential_at,
    field_at,
    potential_grid,
    field_grid,
)
from .integrators import euler_step, rk4_step
from .tracer import CurveTracer, arrow_markers

__all__ = [
    # Field math
    "FieldMath",
    "charge_arrays",
    "potential_at",
    "field_at",
    "potential_grid",
    "field_grid",
    # Integrators
    "euler_step",
    "rk4_step",
    # Tracing
    "CurveTracer",
    "arrow_markers",
]
