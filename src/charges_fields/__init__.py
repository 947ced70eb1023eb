# MIT License (see LICENSE)
"""
charges_fields - Electric field and potential of 2D point charges.

This package provides the numeric kernel behind an interactive charges and
fields board: superposition of field and potential, field-line and
equipotential-line tracing, and coalesced change tracking for renderers.

Main entry points:
    - ChargeConfiguration: The mutable set of charges on the board.
    - PointCharge: A unit charge (+1 or -1) at a 2D position.
    - FieldMath: Potential and field at any point.
    - FieldLineService, EquipotentialLineService: Curve tracing.
    - ChargeTracker: Queue of positional deltas, drained once per frame.

Submodules:
    - core: Field math, integrators and the curve tracer.
    - io: JSON serialization/deserialization.
    - renderer: Optional delta/curve consumers.

Example:
    from charges_fields import ChargeConfiguration, FieldMath, FieldLineService

    board = ChargeConfiguration()
    board.add_positive((-1, 0))
    board.add_negative((1, 0))
    fm = FieldMath(board)
    fm.potential_at((0, 0))                  # 0.0
    FieldLineService(fm).trace((-0.9, 0.0))  # captured near (1, 0)
"""
from .configuration import ChargeConfiguration
from .config import TracerConfig
from .core.field import FieldMath
from .core.tracer import CurveTracer
from .lines import FieldLineService, EquipotentialLineService
from .sensors import ElectricPotentialSensor, ElectricFieldSensor
from .tracker import ChargeTracker
from .types import (
    PointCharge,
    Bounds,
    TerminationReason,
    ArrowMarker,
    TracedCurve,
    DeltaEntry,
)

__all__ = [
    # Model
    "ChargeConfiguration",
    "PointCharge",
    # Field kernel
    "FieldMath",
    # Tracing
    "CurveTracer",
    "TracerConfig",
    "FieldLineService",
    "EquipotentialLineService",
    "Bounds",
    "TerminationReason",
    "ArrowMarker",
    "TracedCurve",
    # Sensors
    "ElectricPotentialSensor",
    "ElectricFieldSensor",
    # Change tracking
    "ChargeTracker",
    "DeltaEntry",
]
