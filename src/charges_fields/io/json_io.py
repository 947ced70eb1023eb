# MIT License (see LICENSE)
"""
JSON serialization and deserialization of charge configurations.

Persistence is a caller-side concern: the field kernel never reads or writes
files. This module gives presentation layers and scripts a human-readable
format to save a board and load it back.

JSON Schema Overview:
---------------------
{
  "k": float,                      # Coulomb constant, default: 1.0
  "eps": float,                    # Distance clamp, default: 1e-6
  "charges": [
    {
      "charge": 1 | -1,            # Required
      "position": [x, y],          # Default: [0, 0]
      "active": bool,              # Default: true
      "id": int                    # Optional; assigned on load if missing
    }
  ],
  "tracer": {                      # Optional, see TracerConfig
    "step": float,
    "max_steps": int,
    "bounds": [min_x, min_y, max_x, max_y],
    "capture_radius": float,
    "close_tolerance": float,
    "min_close_steps": int,
    "arrow_every": int,
    "arrow_offset": int,
    "seed_radius": float,
    "method": "rk4" | "euler"
  }
}
"""
from __future__ import annotations
import json
import logging
from typing import Any

import numpy as np

from ..config import TracerConfig
from ..configuration import ChargeConfiguration
from ..constants import K_COULOMB, DEFAULT_EPS
from ..core.field import FieldMath
from ..types import PointCharge

logger = logging.getLogger(__name__)


def load_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a board file without object construction.

    Args:
        path: Absolute or relative path to the JSON file.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def charge_from_json(d: dict[str, Any]) -> PointCharge:
    """
    Parse a single charge definition.

    Raises:
        ValueError: If 'charge' is missing or not ±1, or the position is
                    not a pair of numbers.
    """
    if "charge" not in d:
        raise ValueError("Charge definition missing required 'charge' field.")
    raw = d["charge"]
    if isinstance(raw, bool) or raw not in (1, -1):
        raise ValueError(f"Charge must be 1 or -1, got {raw!r}")
    position = d.get("position", [0.0, 0.0])
    if len(position) != 2:
        raise ValueError(f"Charge position must have 2 coordinates, got {position!r}")

    charge = PointCharge(
        charge=int(raw),
        position=(float(position[0]), float(position[1])),
        active=bool(d.get("active", True)),
    )
    if "id" in d:
        charge.id = int(d["id"])
    return charge


def configuration_from_json(data: dict[str, Any]) -> ChargeConfiguration:
    """Build a ChargeConfiguration from parsed JSON data."""
    configuration = ChargeConfiguration()
    for charge_data in data.get("charges", []):
        configuration.add(charge_from_json(charge_data))
    return configuration


def tracer_config_from_json(data: dict[str, Any]) -> TracerConfig:
    """Tracer settings from parsed JSON data (defaults when absent)."""
    return TracerConfig.from_dict(data.get("tracer", {}))


def field_math_from_json(data: dict[str, Any], configuration: ChargeConfiguration) -> FieldMath:
    """FieldMath over `configuration` with the file's k and eps."""
    return FieldMath(
        configuration,
        k=float(data.get("k", K_COULOMB)),
        eps=float(data.get("eps", DEFAULT_EPS)),
    )


def load_configuration(path: str) -> ChargeConfiguration:
    """
    Load a board file and return its charges.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If a charge definition is invalid or ids collide.
    """
    configuration = configuration_from_json(load_raw(path))
    logger.info("Loaded %d charges from %s", len(configuration), path)
    return configuration


def charge_to_json(charge: PointCharge) -> dict[str, Any]:
    """Serialize a charge; 'active' is only written when false."""
    result: dict[str, Any] = {
        "id": charge.id,
        "charge": charge.charge,
        "position": _to_list(charge.position),
    }
    if not charge.active:
        result["active"] = False
    return result


def configuration_to_json(
    configuration: ChargeConfiguration,
    tracer: TracerConfig | None = None,
    field_math: FieldMath | None = None,
) -> dict[str, Any]:
    """
    Serialize a board to a dict.

    k/eps are written only when they differ from the defaults, the tracer
    block only when a config is given.
    """
    result: dict[str, Any] = {
        "charges": [charge_to_json(c) for c in configuration],
    }
    if field_math is not None:
        if field_math.k != K_COULOMB:
            result["k"] = field_math.k
        if field_math.eps != DEFAULT_EPS:
            result["eps"] = field_math.eps
    if tracer is not None:
        result["tracer"] = tracer.to_dict()
    return result


def save_configuration(
    configuration: ChargeConfiguration,
    path: str,
    tracer: TracerConfig | None = None,
    indent: int = 2,
    field_math: FieldMath | None = None,
) -> None:
    """Save a board to a JSON file on disk (k/eps only when field_math is given)."""
    data = configuration_to_json(configuration, tracer=tracer, field_math=field_math)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent)
    logger.info("Saved %d charges to %s", len(configuration), path)


def _to_list(arr: Any) -> list[float]:
    """Helper: Convert numpy array or tuple to a clean list of floats."""
    if isinstance(arr, np.ndarray):
        return arr.tolist()
    return list(arr)
