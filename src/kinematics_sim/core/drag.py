# MIT License (see LICENSE)
"""
Air resistance for kinematic entities.

Drag makes the equations of motion velocity-dependent, so entities with
drag enabled leave the closed-form path and integrate step by step. This
module only updates velocity; the motion models advance position.

Models (k = drag coefficient, m = mass):
    linear:    F = -k v        ->  dv = -(k v / m) dt
    quadratic: F = -k |v| v    ->  dv = -(k |v| v / m) dt

The quadratic form scales every axis by the vector magnitude |v|, which is
F = -k |v|^2 v_hat written without normalizing.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from ..constants import DRAG_SPEED_EPS
from ..types import DragMode
from ..util import norm, zeros3

if TYPE_CHECKING:
    from ..entity import MotionEntity


def drag_acceleration(velocity: np.ndarray, mode: DragMode, k: float, mass: float) -> np.ndarray:
    """
    Acceleration produced by drag at the given velocity.

    Returns the zero vector when drag is off, mass <= 0, or the speed is
    below DRAG_SPEED_EPS.
    """
    if mode is DragMode.NONE or mass <= 0:
        return zeros3()
    speed = norm(velocity)
    if speed < DRAG_SPEED_EPS:
        return zeros3()
    if mode is DragMode.LINEAR:
        return -(k / mass) * velocity
    if mode is DragMode.QUADRATIC:
        return -(k * speed / mass) * velocity
    raise ValueError(f"Unknown drag mode: {mode}")


def apply_drag(entity: MotionEntity, dt: float) -> None:
    """
    Apply one explicit drag step to entity.velocity.

    For k dt / m < 1 a linear step shrinks each component without changing
    its sign.

    Note:
        Modifies entity.velocity. No effect if drag is off.
    """
    if entity.drag_mode is DragMode.NONE:
        return
    a = drag_acceleration(entity.velocity, entity.drag_mode, entity.drag_coefficient, entity.mass)
    entity.velocity = entity.velocity + a * dt
