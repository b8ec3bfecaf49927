# MIT License (see LICENSE)
"""
JSON setup files for kinematics sandboxes.

A setup describes which entities to spawn and how to configure them. Only
configuration is stored: elapsed time, status and bounce re-basing are
runtime state and are never written. Launched entities are saved at their
spawn state.

JSON Schema Overview:
---------------------
{
  "time_scale": float,             # Default: 1.0
  "entities": [
    {
      "position": [x, y, z],       # Spawn point, default: [0, 0, 0]
      "motion_type": string,       # Optional, same as params.motion_type
      "params": {                  # Optional, keys of MotionEntity.configure()
        "velocity": [vx, vy, vz],
        "gravity": float,
        "restitution": float,
        ...
      },
      "launch": bool               # Launch after loading, default: false
    }
  ]
}
"""
from __future__ import annotations
import json
from typing import TYPE_CHECKING, Any

import numpy as np

from ..entity import MotionEntity

if TYPE_CHECKING:
    from ..orchestrator import MotionOrchestrator


def load_setup_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a setup file without building entities.

    Args:
        path: Absolute or relative path to the JSON file.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_setup(path: str) -> "MotionOrchestrator":
    """
    Build a MotionOrchestrator from a JSON setup file.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If an entity definition is malformed.
    """
    # Import locally to avoid a circular import through the package root
    from ..orchestrator import MotionOrchestrator

    data = load_setup_raw(path)
    if not isinstance(data, dict):
        raise ValueError("Setup file must contain a JSON object")

    entities = data.get("entities", [])
    if not isinstance(entities, list):
        raise ValueError("Setup \"entities\" must be a JSON array")

    sim = MotionOrchestrator(time_scale=float(data.get("time_scale", 1.0)))
    for entity_data in entities:
        entity = entity_from_json(entity_data)
        sim.add_entity(entity)
        if entity_data.get("launch", False):
            entity.launch()
    return sim


def entity_from_json(d: dict[str, Any]) -> MotionEntity:
    """
    Build an idle MotionEntity from a dictionary.

    Raises:
        ValueError: On a non-object entry, a bad position or params, or
            unknown parameter names.
    """
    if not isinstance(d, dict):
        raise ValueError(f"Entity definition must be a JSON object, got {d!r}")

    position = d.get("position", [0.0, 0.0, 0.0])
    if not isinstance(position, list) or len(position) != 3:
        raise ValueError(f"Entity position must be a list of 3 numbers, got {position!r}")
    try:
        position = tuple(float(x) for x in position)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Entity position must be a list of 3 numbers, got {d['position']!r}") from exc

    params = d.get("params", {})
    if not isinstance(params, dict):
        raise ValueError(f"Entity params must be a JSON object, got {params!r}")
    params = dict(params)
    if "motion_type" in d:
        params.setdefault("motion_type", d["motion_type"])

    entity = MotionEntity(position=position)
    try:
        entity.configure(**params)
    except TypeError as exc:
        raise ValueError(f"Invalid entity params: {exc}") from exc
    return entity


def entity_to_json(entity: MotionEntity) -> dict[str, Any]:
    """Serialize an entity's configuration at its spawn state."""
    position, velocity, acceleration = entity.spawn_state()
    return {
        "position": _to_list(position),
        "motion_type": entity.motion_type.value,
        "params": {
            "velocity": _to_list(velocity),
            "acceleration": _to_list(acceleration),
            "mass": entity.mass,
            "gravity": entity.gravity,
            "drop_height": entity.drop_height,
            "circular_radius": entity.orbit.radius,
            "angular_velocity": entity.orbit.angular_velocity,
            "clockwise": entity.orbit.clockwise,
            "frame_velocity": _to_list(entity.frame.velocity),
            "view_in_world_frame": entity.frame.view_in_world_frame,
            "drag_mode": entity.drag_mode.value,
            "drag_coefficient": entity.drag_coefficient,
            "restitution": entity.material.restitution,
            "bounce_enabled": entity.material.bounce_enabled,
            "bounce_threshold": entity.material.bounce_threshold,
        },
    }


def setup_to_json(sim: "MotionOrchestrator") -> dict[str, Any]:
    """Serialize an orchestrator's entities and time scale."""
    return {
        "time_scale": sim.time_scale,
        "entities": [entity_to_json(e) for e in sim.entities],
    }


def save_setup(sim: "MotionOrchestrator", path: str, indent: int = 2) -> None:
    """Save an orchestrator's setup to a JSON file on disk."""
    data = setup_to_json(sim)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent)


def _to_list(arr: Any) -> list[float]:
    """Helper: Convert numpy array or tuple to a clean list of floats."""
    if isinstance(arr, np.ndarray):
        return arr.tolist()
    return [float(x) for x in arr]
