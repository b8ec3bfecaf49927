# MIT License (see LICENSE)
"""
Motion models: one closed-form algorithm per MotionType.

Each model advances an entity from its analytic basis (initial_position,
initial_velocity, elapsed_time) rather than accumulating per-frame steps,
so the result at time t does not depend on how t was sliced into frames.
With drag enabled there is no closed form and the model falls back to
semi-implicit Euler: drag -> velocity, acceleration -> velocity,
velocity -> position.

Models (t = elapsed time, u = initial velocity, g = gravity magnitude):
    linear:      p = p0 + u t
    accelerated: p = p0 + u t + 1/2 a t²          v = u + a t
    freefall:    y = y0 + uy t - 1/2 g t²          vy = uy - g t   (x, z fixed)
    projectile:  p = p0 + u t - 1/2 g t² ŷ         v = u - g t ŷ
    circular:    x = cx + r cos(sωt), z = cz + r sin(sωt), y = cy
    relative:    p += (v + v_frame) dt             (always incremental)

For freefall uy is 0 at launch; after a bounce it is the rebound speed.

Dispatch is a registry keyed by MotionType. Adding a tag without a model
fails at import time.

Reference:
    Equations of motion: https://en.wikipedia.org/wiki/Equations_of_motion
    Circular motion: https://en.wikipedia.org/wiki/Circular_motion
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

import numpy as np

from ..types import DragMode, MotionType, Orbit
from ..util import f64, zeros3
from .drag import apply_drag

if TYPE_CHECKING:
    from ..entity import MotionEntity


# =============================================================================
# Shared equations
# =============================================================================

def gravity_vector(g: float) -> np.ndarray:
    """Gravity magnitude g as an acceleration pointing down (-y)."""
    return np.array([0.0, -g, 0.0], dtype=np.float64)


def suvat_position(p0: np.ndarray, u: np.ndarray, a: np.ndarray, t: float) -> np.ndarray:
    """s = p0 + u t + 1/2 a t²"""
    return p0 + u * t + 0.5 * a * t * t


def suvat_velocity(u: np.ndarray, a: np.ndarray, t: float) -> np.ndarray:
    """v = u + a t"""
    return u + a * t


def ballistic_position(p0: np.ndarray, u: np.ndarray, g: float, t: float) -> np.ndarray:
    """Projectile position under gravity g, no drag."""
    return suvat_position(p0, u, gravity_vector(g), t)


def ballistic_velocity(u: np.ndarray, g: float, t: float) -> np.ndarray:
    return suvat_velocity(u, gravity_vector(g), t)


def orbit_position(center: np.ndarray, orbit: Orbit, t: float) -> np.ndarray:
    """Point on a horizontal circle around center at time t."""
    theta = orbit.sign * orbit.angular_velocity * t
    return np.array(
        [
            center[0] + orbit.radius * np.cos(theta),
            center[1],
            center[2] + orbit.radius * np.sin(theta),
        ],
        dtype=np.float64,
    )


def orbit_velocity(orbit: Orbit, t: float) -> np.ndarray:
    """Time derivative of orbit_position: tangential, |v| = ω r."""
    s = orbit.sign
    w = orbit.angular_velocity
    r = orbit.radius
    theta = s * w * t
    return np.array(
        [-r * w * np.sin(theta) * s, 0.0, r * w * np.cos(theta) * s],
        dtype=np.float64,
    )


def _integrate(entity: MotionEntity, dt: float, accel: np.ndarray) -> None:
    """Semi-implicit Euler step with drag, used when no closed form exists."""
    apply_drag(entity, dt)
    entity.velocity = entity.velocity + accel * dt
    entity.position = entity.position + entity.velocity * dt


# =============================================================================
# Models
# =============================================================================

class MotionModel(ABC):
    """
    Update algorithm for one motion type.

    Subclasses implement advance() for live updates and sample() for
    non-mutating previews. Models are stateless; all state lives on the
    entity.
    """

    motion_type: ClassVar[MotionType]
    # Whether the ground plane is tested after advance().
    ground_contact: ClassVar[bool] = True

    def on_launch(self, entity: MotionEntity) -> None:
        """Adjust entity state when it is launched in this mode."""

    @abstractmethod
    def advance(self, entity: MotionEntity, dt: float) -> None:
        """
        Move the entity to entity.elapsed_time.

        elapsed_time has already been incremented by dt; dt is only used
        by the incremental (drag) path.
        """
        ...

    @abstractmethod
    def sample(self, entity: MotionEntity, t: float) -> np.ndarray:
        """Position at time t from the entity's current basis, without mutation."""
        ...

    def display_position(self, entity: MotionEntity) -> np.ndarray:
        """Position a renderer should draw."""
        return entity.position.copy()


class LinearMotion(MotionModel):
    motion_type = MotionType.LINEAR

    def advance(self, entity: MotionEntity, dt: float) -> None:
        if entity.drag_mode is DragMode.NONE:
            entity.position = entity.initial_position + entity.initial_velocity * entity.elapsed_time
            entity.velocity = entity.initial_velocity.copy()
        else:
            _integrate(entity, dt, zeros3())

    def sample(self, entity: MotionEntity, t: float) -> np.ndarray:
        return entity.initial_position + entity.initial_velocity * t


class AcceleratedMotion(MotionModel):
    motion_type = MotionType.ACCELERATED

    def advance(self, entity: MotionEntity, dt: float) -> None:
        if entity.drag_mode is DragMode.NONE:
            t = entity.elapsed_time
            entity.position = suvat_position(entity.initial_position, entity.initial_velocity, entity.acceleration, t)
            entity.velocity = suvat_velocity(entity.initial_velocity, entity.acceleration, t)
        else:
            _integrate(entity, dt, entity.acceleration)

    def sample(self, entity: MotionEntity, t: float) -> np.ndarray:
        return suvat_position(entity.initial_position, entity.initial_velocity, entity.acceleration, t)


class FreefallMotion(MotionModel):
    motion_type = MotionType.FREEFALL

    def on_launch(self, entity: MotionEntity) -> None:
        entity.acceleration = gravity_vector(entity.gravity)
        entity.velocity = zeros3()
        entity.initial_velocity = zeros3()

    def advance(self, entity: MotionEntity, dt: float) -> None:
        if entity.drag_mode is DragMode.NONE:
            t = entity.elapsed_time
            g = entity.gravity
            p0 = entity.initial_position
            uy = entity.initial_velocity[1]
            entity.position = f64((p0[0], p0[1] + uy * t - 0.5 * g * t * t, p0[2]))
            entity.velocity = f64((0.0, uy - g * t, 0.0))
        else:
            _integrate(entity, dt, gravity_vector(entity.gravity))

    def sample(self, entity: MotionEntity, t: float) -> np.ndarray:
        p0 = entity.initial_position
        # Launch zeroes the velocity; before that the configured one is ignored.
        uy = entity.initial_velocity[1] if entity.launched else 0.0
        return f64((p0[0], p0[1] + uy * t - 0.5 * entity.gravity * t * t, p0[2]))


class ProjectileMotion(MotionModel):
    motion_type = MotionType.PROJECTILE

    def on_launch(self, entity: MotionEntity) -> None:
        entity.acceleration = gravity_vector(entity.gravity)

    def advance(self, entity: MotionEntity, dt: float) -> None:
        if entity.drag_mode is DragMode.NONE:
            t = entity.elapsed_time
            entity.position = ballistic_position(entity.initial_position, entity.initial_velocity, entity.gravity, t)
            entity.velocity = ballistic_velocity(entity.initial_velocity, entity.gravity, t)
        else:
            _integrate(entity, dt, gravity_vector(entity.gravity))

    def sample(self, entity: MotionEntity, t: float) -> np.ndarray:
        return ballistic_position(entity.initial_position, entity.initial_velocity, entity.gravity, t)


class CircularMotion(MotionModel):
    motion_type = MotionType.CIRCULAR
    ground_contact = False

    def on_launch(self, entity: MotionEntity) -> None:
        # The spawn point becomes the centre; start at angle 0 on the circle.
        entity.orbit_center = entity.position.copy()
        entity.position = entity.orbit_center + f64((entity.orbit.radius, 0.0, 0.0))
        entity.initial_position = entity.position.copy()

    def advance(self, entity: MotionEntity, dt: float) -> None:
        t = entity.elapsed_time
        entity.position = orbit_position(entity.orbit_center, entity.orbit, t)
        entity.velocity = orbit_velocity(entity.orbit, t)

    def sample(self, entity: MotionEntity, t: float) -> np.ndarray:
        return orbit_position(entity.orbit_center, entity.orbit, t)


class RelativeMotion(MotionModel):
    motion_type = MotionType.RELATIVE

    def advance(self, entity: MotionEntity, dt: float) -> None:
        apply_drag(entity, dt)
        entity.position = entity.position + (entity.velocity + entity.frame.velocity) * dt

    def sample(self, entity: MotionEntity, t: float) -> np.ndarray:
        return entity.initial_position + (entity.velocity + entity.frame.velocity) * t

    def display_position(self, entity: MotionEntity) -> np.ndarray:
        if entity.frame.view_in_world_frame:
            return entity.position.copy()
        # Observer riding the frame sees the frame's displacement removed.
        return entity.position - entity.frame.velocity * entity.elapsed_time


MOTION_MODELS: dict[MotionType, MotionModel] = {
    m.motion_type: m
    for m in (
        LinearMotion(),
        AcceleratedMotion(),
        FreefallMotion(),
        ProjectileMotion(),
        CircularMotion(),
        RelativeMotion(),
    )
}

_missing = set(MotionType) - set(MOTION_MODELS)
if _missing:
    raise RuntimeError(f"No motion model registered for: {sorted(m.value for m in _missing)}")


def model_for(motion_type: MotionType) -> MotionModel:
    """Look up the model for a motion type."""
    return MOTION_MODELS[motion_type]
