# MIT License (see LICENSE)
"""
Derived quantities for display.

compute_stats() is a pure function of entity state and is cheap enough to
run every frame. Degenerate inputs (g <= 0, non-positive drop height) give
zeros rather than NaN or infinity, and every output is floored at 0.

Formulas (g = gravity magnitude, h = drop height, uy = initial vertical
speed, u_h = initial horizontal speed):
    circular:   a_c = ω² r
    freefall:   t_impact = sqrt(2h / g),   v_impact = g t_impact
    projectile: T = 2 uy / g,   H = uy² / (2g),   R = u_h T
                v_impact = sqrt(u_h² + (uy - g T)²)

Note:
    displacement is measured from the last re-basing point, so after a
    bounce it restarts from the contact point rather than the spawn point.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from ..types import MotionStats, MotionType
from ..util import norm

if TYPE_CHECKING:
    from ..entity import MotionEntity


def freefall_impact_time(drop_height: float, g: float) -> float:
    """Time to fall drop_height from rest. 0 if either input is non-positive."""
    if g <= 0 or drop_height <= 0:
        return 0.0
    return float(np.sqrt(2.0 * drop_height / g))


def projectile_flight_time(uy: float, g: float) -> float:
    """Time to return to launch height. 0 for non-upward launches or g <= 0."""
    if g <= 0 or uy <= 0:
        return 0.0
    return 2.0 * uy / g


def projectile_max_height(uy: float, g: float) -> float:
    """Peak height above the launch point."""
    if g <= 0 or uy <= 0:
        return 0.0
    return uy * uy / (2.0 * g)


def compute_stats(entity: MotionEntity) -> MotionStats:
    """Build a MotionStats snapshot from the entity's current state."""
    stats = MotionStats(
        speed=norm(entity.velocity),
        displacement=norm(entity.position - entity.initial_position),
        acceleration_mag=norm(entity.acceleration),
    )

    mode = entity.motion_type
    g = entity.gravity

    if mode is MotionType.CIRCULAR:
        w = entity.orbit.angular_velocity
        stats.centripetal_accel = max(0.0, w * w * entity.orbit.radius)

    elif mode is MotionType.FREEFALL:
        if entity.initial_position[1] > 0:
            t_impact = freefall_impact_time(entity.drop_height, g)
            stats.time_to_impact = max(0.0, t_impact - entity.elapsed_time)
            stats.impact_velocity = max(0.0, g * t_impact)

    elif mode is MotionType.PROJECTILE and g > 0:
        u = entity.initial_velocity
        uy = float(u[1])
        u_h = float(np.hypot(u[0], u[2]))
        t_flight = projectile_flight_time(uy, g)
        stats.flight_time = t_flight
        stats.time_to_impact = max(0.0, t_flight - entity.elapsed_time)
        stats.max_height = projectile_max_height(uy, g)
        stats.range = u_h * t_flight
        stats.impact_velocity = float(np.hypot(u_h, uy - g * t_flight))

    return stats
