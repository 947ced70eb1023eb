# MIT License (see LICENSE)
"""
Measurement probes placed on the board.

Sensors hold a position and the last reading taken there. They are updated
explicitly (typically once per frame, or whenever they or a charge move):

    sensor.update(field_math)

The electric potential sensor can also ask an EquipotentialLineService to
draw the line through its crosshair.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from .core.field import FieldMath
from .util import f64, norm, angle_of

if TYPE_CHECKING:
    from .lines import EquipotentialLineService
    from .types import TracedCurve


@dataclass(eq=False)
class ElectricPotentialSensor:
    """
    Crosshair probe reading the scalar potential.

    Attributes:
        position: Crosshair position [x, y].
        potential: Last reading (0 before the first update).
    """
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    potential: float = 0.0

    def __post_init__(self) -> None:
        self.position = f64(self.position)

    def move_to(self, position) -> None:
        self.position = f64(position)

    def update(self, field_math: FieldMath) -> float:
        """Read the potential at the crosshair and return it."""
        self.potential = field_math.potential_at(self.position)
        return self.potential

    def trace_equipotential(self, service: "EquipotentialLineService") -> "TracedCurve":
        """Add the equipotential line through the crosshair to `service`."""
        return service.add_line(self.position)


@dataclass(eq=False)
class ElectricFieldSensor:
    """
    Probe reading the electric field vector.

    Attributes:
        position: Probe position [x, y].
        vector: Last field vector [Ex, Ey].
    """
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    vector: np.ndarray = field(default_factory=lambda: np.zeros(2, dtype=np.float64))

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.vector = f64(self.vector)

    @property
    def magnitude(self) -> float:
        return norm(self.vector)

    @property
    def angle(self) -> float:
        """Direction of the last reading in radians, counterclockwise from +x."""
        return angle_of(self.vector)

    def move_to(self, position) -> None:
        self.position = f64(position)

    def update(self, field_math: FieldMath) -> np.ndarray:
        """Read the field at the probe position and return it."""
        self.vector = field_math.field_at(self.position)
        return self.vector
