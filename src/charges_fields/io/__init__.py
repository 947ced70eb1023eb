# MIT License (see LICENSE)
"""
Input/Output utilities for charge boards.

This subpackage provides:
    - JSON serialization: Save and load charge configurations to/from JSON files.
    - Tracer settings stored alongside the charges.

Typical usage:
    from charges_fields.io import load_configuration, save_configuration

    configuration = load_configuration("dipole.json")
    save_configuration(configuration, "output.json")
"""
from .json_io import (
    load_raw,
    load_configuration,
    save_configuration,
    configuration_from_json,
    configuration_to_json,
    tracer_config_from_json,
    field_math_from_json,
    charge_from_json,
    charge_to_json,
)

__all__ = [
    # Loading
    "load_raw",
    "load_configuration",
    "configuration_from_json",
    "tracer_config_from_json",
    "field_math_from_json",
    "charge_from_json",
    # Saving
    "save_configuration",
    "configuration_to_json",
    "charge_to_json",
]
