# MIT License (see LICENSE)
"""
Tracing parameters.

TracerConfig gathers every knob of the curve tracer in one immutable value so
that two traces run with the same config over the same charges produce the
same polyline. Values can come from keyword arguments, a JSON-style dict
(see io/json_io.py) or CHARGES_FIELDS_* environment variables.
"""
from __future__ import annotations
from dataclasses import dataclass, field, fields, asdict
from typing import Any

from .constants import (
    DEFAULT_STEP,
    DEFAULT_MAX_STEPS,
    DEFAULT_CAPTURE_RADIUS,
    DEFAULT_MIN_CLOSE_STEPS,
    DEFAULT_BOUNDS,
    DEFAULT_ARROW_EVERY,
    DEFAULT_ARROW_OFFSET,
    DEFAULT_SEED_RADIUS,
)
from .types import Bounds
from .util import env_value

METHODS = ("rk4", "euler")


@dataclass(frozen=True)
class TracerConfig:
    """
    Parameters of one curve trace.

    Attributes:
        step: Fixed step length h. Never adapted during a trace.
        max_steps: Hard cap on steps per traced half-curve.
        bounds: Region the curve may occupy; leaving it ends the trace.
        capture_radius: Field lines end within this distance of a charge.
        close_tolerance: Equipotentials close when they return this close to
                         the seed. Defaults to the step length.
        min_close_steps: Steps required before closure is considered.
        arrow_every: Cadence of arrow markers on field lines.
        arrow_offset: Index of the first arrow within each cadence window.
        seed_radius: Ring radius used when fanning lines out of charges.
        method: "rk4" (default) or "euler".
    """
    step: float = DEFAULT_STEP
    max_steps: int = DEFAULT_MAX_STEPS
    bounds: Bounds = field(default_factory=lambda: Bounds.from_sequence(DEFAULT_BOUNDS))
    capture_radius: float = DEFAULT_CAPTURE_RADIUS
    close_tolerance: float | None = None
    min_close_steps: int = DEFAULT_MIN_CLOSE_STEPS
    arrow_every: int = DEFAULT_ARROW_EVERY
    arrow_offset: int = DEFAULT_ARROW_OFFSET
    seed_radius: float = DEFAULT_SEED_RADIUS
    method: str = "rk4"

    def __post_init__(self) -> None:
        if not isinstance(self.bounds, Bounds):
            object.__setattr__(self, "bounds", Bounds.from_sequence(self.bounds))
        if self.close_tolerance is None:
            object.__setattr__(self, "close_tolerance", float(self.step))

        if self.step <= 0:
            raise ValueError(f"step must be positive, got {self.step}")
        if self.max_steps < 1:
            raise ValueError(f"max_steps must be at least 1, got {self.max_steps}")
        if self.capture_radius < 0 or self.close_tolerance < 0 or self.seed_radius < 0:
            raise ValueError("capture_radius, close_tolerance and seed_radius must be non-negative")
        if self.min_close_steps < 1:
            raise ValueError(f"min_close_steps must be at least 1, got {self.min_close_steps}")
        if self.arrow_every < 1 or not (0 <= self.arrow_offset < self.arrow_every):
            raise ValueError(
                f"arrow cadence must satisfy 0 <= offset < every, got "
                f"every={self.arrow_every} offset={self.arrow_offset}"
            )
        if self.method not in METHODS:
            raise ValueError(f"Unknown tracing method: {self.method}")

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "TracerConfig":
        """
        Build a config from a plain dict, ignoring unknown keys.

        "bounds" may be given as [min_x, min_y, max_x, max_y].
        """
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in d.items() if k in known}
        return cls(**kwargs)

    @classmethod
    def from_env(cls, prefix: str = "CHARGES_FIELDS_", **overrides: Any) -> "TracerConfig":
        """
        Build a config whose defaults may be overridden by environment variables.

        Recognized: {prefix}STEP, {prefix}MAX_STEPS, {prefix}CAPTURE_RADIUS,
        {prefix}METHOD. Explicit keyword overrides win over the environment.
        """
        kwargs: dict[str, Any] = {}
        casts = {
            "step": float,
            "max_steps": int,
            "capture_radius": float,
            "method": str,
        }
        for name, cast in casts.items():
            raw = env_value(prefix + name.upper())
            if raw is not None:
                kwargs[name] = cast(raw)
        kwargs.update(overrides)
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict (bounds as a list)."""
        d = asdict(self)
        d["bounds"] = list(self.bounds.as_tuple())
        return d
