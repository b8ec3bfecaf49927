# MIT License (see LICENSE)
"""
Input/Output utilities for kinematics setups.

This subpackage provides:
    - JSON setups: Save and load entity configurations to/from JSON files.
    - Configuration only: runtime state (elapsed time, status) is never stored.

Typical usage:
    from kinematics_sim.io import load_setup, save_setup

    sim = load_setup("sandbox.json")
    save_setup(sim, "output.json")
"""
from .json_io import (
    load_setup,
    load_setup_raw,
    save_setup,
    setup_to_json,
    entity_to_json,
    entity_from_json,
)

__all__ = [
    # Loading
    "load_setup",
    "load_setup_raw",
    # Saving
    "save_setup",
    # Serialization
    "setup_to_json",
    "entity_to_json",
    "entity_from_json",
]
