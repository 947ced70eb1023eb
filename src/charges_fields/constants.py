# MIT License (see LICENSE)
"""
Numeric defaults used throughout the field kernel.

All quantities are in Coulomb-constant-normalized units: the potential of a
unit charge at unit distance is 1. Presentation layers are responsible for
any conversion to volts or metres.
"""
from __future__ import annotations

import math

# Coulomb's constant in normalized units (k = 1).
# Superposition sums are scaled by this factor only.
K_COULOMB: float = 1.0

# Distances below this value are clamped before dividing, so a query point
# sitting on a charge yields a large but finite potential/field instead of a
# division by zero: |P - r| → max(|P - r|, ε).
DEFAULT_EPS: float = 1e-6

# A field magnitude below this is treated as a field-free point when
# normalizing the tracing direction.
DEGENERATE_FIELD_EPS: float = 1e-12

# Curve tracing defaults
DEFAULT_STEP: float = 0.01
DEFAULT_MAX_STEPS: int = 5000
DEFAULT_CAPTURE_RADIUS: float = 0.05
DEFAULT_MIN_CLOSE_STEPS: int = 10
DEFAULT_BOUNDS: tuple[float, float, float, float] = (-5.0, -5.0, 5.0, 5.0)

# Field line arrows: one marker at every point index i with
# i % DEFAULT_ARROW_EVERY == DEFAULT_ARROW_OFFSET.
DEFAULT_ARROW_EVERY: int = 50
DEFAULT_ARROW_OFFSET: int = 2

# Arrow head chevron: arm length (view units) and opening angle.
ARROW_HEAD_LENGTH: float = 6.0
ARROW_HEAD_ALPHA: float = math.pi * 6.5 / 8

# Radius of the ring of seeds used when fanning field lines out of a charge.
DEFAULT_SEED_RADIUS: float = 0.1
