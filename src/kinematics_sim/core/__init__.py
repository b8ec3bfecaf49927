# MIT License (see LICENSE)
"""
Core kinematics components.

This subpackage provides:
    - Motion models: closed-form update and preview per MotionType.
    - Drag: velocity decay for entities with air resistance.
    - Bounce: ground contact with restitution and re-basing.
    - Stats: derived quantities for display.

Typical usage:
    from kinematics_sim.core import model_for, compute_stats

    model_for(entity.motion_type).advance(entity, dt)
    stats = compute_stats(entity)
"""
from .models import (
    MotionModel,
    MOTION_MODELS,
    model_for,
    ballistic_position,
    ballistic_velocity,
    orbit_position,
)
from .drag import apply_drag, drag_acceleration
from .bounce import resolve_ground_contact, rebase
from .stats import compute_stats

__all__ = [
    # Models
    "MotionModel",
    "MOTION_MODELS",
    "model_for",
    "ballistic_position",
    "ballistic_velocity",
    "orbit_position",
    # Drag
    "apply_drag",
    "drag_acceleration",
    # Bounce
    "resolve_ground_contact",
    "rebase",
    # Stats
    "compute_stats",
]
