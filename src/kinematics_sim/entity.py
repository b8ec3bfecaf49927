# MIT License (see LICENSE)
"""
MotionEntity: state and lifecycle for one simulated point.

An entity is created idle, configured any number of times, launched, then
updated once per frame until it comes to rest. Position is computed from an
analytic basis (initial_position, initial_velocity, elapsed_time) whenever
a closed form exists; see core/models.py for the per-mode equations.

Lifecycle:
    idle --launch()--> active --ground contact--> stopped
      ^                  |
      +-----reset()------+
"""
from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass, field, replace
from typing import Any

import numpy as np

from .constants import DEFAULT_GRAVITY, GROUND_LEVEL, MAX_TRAIL_POINTS, PREVIEW_DT, PREVIEW_POINTS
from .core.bounce import resolve_ground_contact
from .core.models import model_for
from .core.stats import compute_stats
from .materials import Material
from .renderer.resources import VisualHandle
from .types import DragMode, EntityStatus, MotionStats, MotionType, Orbit, ReferenceFrame
from .util import direction_vector, f64, is_finite

logger = logging.getLogger(__name__)

# Keys accepted by MotionEntity.configure().
CONFIG_KEYS = frozenset({
    "motion_type",
    # velocity
    "velocity_mag", "direction_angle", "vertical_angle",
    "velocity", "vx", "vy", "vz",
    # acceleration
    "accel_mag", "accel_direction", "accel_vertical_angle",
    "acceleration", "ax", "ay", "az",
    # freefall / projectile
    "gravity", "drop_height",
    # circular
    "circular_radius", "angular_velocity", "clockwise",
    # relative
    "frame_velocity_mag", "frame_direction", "frame_velocity", "view_in_world_frame",
    # drag
    "drag_mode", "drag_coefficient",
    # bounce
    "restitution", "bounce_enabled", "bounce_threshold",
    "mass",
})


@dataclass(eq=False)
class MotionEntity:
    """
    A point entity following one of the six motion models.

    Attributes:
        position: World position [x, y, z] in metres (+y up).
        motion_type: Algorithm used by update().
        velocity: Velocity [vx, vy, vz] in m/s.
        acceleration: Constant acceleration for the accelerated model. Launch
                      overwrites it with gravity for freefall/projectile.
        mass: Mass in kg, only used by drag.
        gravity: Gravity magnitude (positive, applied along -y).
        drop_height: Height used for freefall impact stats. Defaults to the
                     spawn height.
        orbit: Circular motion parameters.
        frame: Moving reference frame for relative motion.
        drag_mode: Air resistance model.
        drag_coefficient: k in F = -k v or F = -k |v| v.
        material: Ground contact properties.
        mesh: Visual handle released on dispose().
        trail_visual: Optional handle for the host's trail line.
        id: Identifier assigned by the orchestrator.

    Runtime state (not user-specified):
        initial_position, initial_velocity: Analytic basis, re-taken at
            launch and at every bounce.
        elapsed_time: Seconds since the last (re-)basing.
        orbit_center: Centre of the circle, fixed at launch.
        status: Lifecycle state.
        stats: Derived quantities, recomputed each update.
        trail: The last MAX_TRAIL_POINTS positions.
    """
    position: np.ndarray | tuple[float, float, float] = (0.0, 0.0, 0.0)
    motion_type: MotionType | str = MotionType.LINEAR
    velocity: np.ndarray | tuple[float, float, float] = (0.0, 0.0, 0.0)
    acceleration: np.ndarray | tuple[float, float, float] = (0.0, 0.0, 0.0)
    mass: float = 1.0
    gravity: float = DEFAULT_GRAVITY
    drop_height: float | None = None
    orbit: Orbit = field(default_factory=Orbit)
    frame: ReferenceFrame = field(default_factory=ReferenceFrame)
    drag_mode: DragMode | str = DragMode.NONE
    drag_coefficient: float = 0.1
    material: Material = field(default_factory=Material)
    mesh: VisualHandle | None = field(default_factory=lambda: VisualHandle("mesh"))
    trail_visual: VisualHandle | None = None
    id: int = -1

    # Runtime state
    initial_position: np.ndarray = field(init=False)
    initial_velocity: np.ndarray = field(init=False)
    orbit_center: np.ndarray = field(init=False)
    elapsed_time: float = field(default=0.0, init=False)
    status: EntityStatus = field(default=EntityStatus.IDLE, init=False)
    launched: bool = field(default=False, init=False)
    stats: MotionStats = field(default_factory=MotionStats, init=False)
    trail: deque = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Normalize vectors and tags, and take the pre-launch basis."""
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)
        self.acceleration = f64(self.acceleration)
        self.motion_type = MotionType.parse(self.motion_type)
        self.drag_mode = DragMode.parse(self.drag_mode)
        if self.mass <= 0:
            logger.warning("Non-positive mass %r replaced with 1.0", self.mass)
            self.mass = 1.0
        if self.drop_height is None:
            self.drop_height = float(self.position[1])

        self.initial_position = self.position.copy()
        self.initial_velocity = self.velocity.copy()
        self.orbit_center = self.position.copy()
        self.trail = deque(maxlen=MAX_TRAIL_POINTS)
        self._spawn: tuple[np.ndarray, np.ndarray, np.ndarray] | None = None

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def configure(self, **params: Any) -> None:
        """
        Merge the given parameters into the entity.

        Only supplied keys change; see CONFIG_KEYS for the accepted names.
        Derived vectors are rebuilt immediately:
            velocity_mag (+ direction_angle, vertical_angle in degrees)
            accel_mag (+ accel_direction, accel_vertical_angle)
            frame_velocity_mag (+ frame_direction)
        Missing angles default to 0. Angles given without their magnitude
        are ignored.

        Velocity changes are copied into the analytic basis. Changing the
        motion type of an active entity is allowed but keeps the basis
        taken under the old mode, so the trajectory jumps.

        Raises:
            TypeError: If an unknown key is passed.
        """
        unknown = set(params) - CONFIG_KEYS
        if unknown:
            raise TypeError(f"Unknown parameter(s): {', '.join(sorted(unknown))}")

        if "motion_type" in params:
            new_type = MotionType.parse(params["motion_type"])
            if new_type is not self.motion_type and self.status is EntityStatus.ACTIVE:
                logger.warning(
                    "Entity %d switched %s -> %s mid-flight without re-launch",
                    self.id, self.motion_type.value, new_type.value,
                )
            self.motion_type = new_type

        # Velocity
        if "velocity_mag" in params:
            self._set_velocity(direction_vector(
                float(params["velocity_mag"]),
                float(params.get("direction_angle", 0.0)),
                float(params.get("vertical_angle", 0.0)),
            ))
        if "velocity" in params:
            self._set_velocity(f64(params["velocity"]))
        for axis, key in enumerate(("vx", "vy", "vz")):
            if key in params:
                self.velocity[axis] = float(params[key])
                self.initial_velocity[axis] = float(params[key])

        # Acceleration
        if "accel_mag" in params:
            self.acceleration = direction_vector(
                float(params["accel_mag"]),
                float(params.get("accel_direction", 0.0)),
                float(params.get("accel_vertical_angle", 0.0)),
            )
        if "acceleration" in params:
            self.acceleration = f64(params["acceleration"])
        for axis, key in enumerate(("ax", "ay", "az")):
            if key in params:
                self.acceleration[axis] = float(params[key])

        # Freefall
        if "gravity" in params:
            self.gravity = float(params["gravity"])
        if "drop_height" in params:
            h = float(params["drop_height"])
            self.drop_height = h
            self.position[1] = h
            self.initial_position[1] = h

        # Circular
        orbit_changes = {}
        if "circular_radius" in params:
            orbit_changes["radius"] = float(params["circular_radius"])
        if "angular_velocity" in params:
            orbit_changes["angular_velocity"] = float(params["angular_velocity"])
        if "clockwise" in params:
            orbit_changes["clockwise"] = bool(params["clockwise"])
        if orbit_changes:
            self.orbit = replace(self.orbit, **orbit_changes)

        # Relative
        if "frame_velocity_mag" in params:
            self.frame = replace(self.frame, velocity=direction_vector(
                float(params["frame_velocity_mag"]),
                float(params.get("frame_direction", 0.0)),
            ))
        if "frame_velocity" in params:
            self.frame = replace(self.frame, velocity=f64(params["frame_velocity"]))
        if "view_in_world_frame" in params:
            self.frame = replace(self.frame, view_in_world_frame=bool(params["view_in_world_frame"]))

        # Drag
        if "drag_mode" in params:
            self.drag_mode = DragMode.parse(params["drag_mode"])
        if "drag_coefficient" in params:
            self.drag_coefficient = float(params["drag_coefficient"])

        # Bounce
        material_changes = {}
        if "restitution" in params:
            e = float(params["restitution"])
            clamped = min(max(e, 0.0), 1.0)
            if clamped != e:
                logger.warning("Restitution %r clamped to %.1f for entity %d", e, clamped, self.id)
            material_changes["restitution"] = clamped
        if "bounce_enabled" in params:
            material_changes["bounce_enabled"] = bool(params["bounce_enabled"])
        if "bounce_threshold" in params:
            material_changes["bounce_threshold"] = float(params["bounce_threshold"])
        if material_changes:
            self.material = replace(self.material, **material_changes)

        if "mass" in params:
            mass = float(params["mass"])
            if mass > 0:
                self.mass = mass
            else:
                logger.warning("Ignoring non-positive mass %r for entity %d", mass, self.id)

    def _set_velocity(self, v: np.ndarray) -> None:
        self.velocity = v.copy()
        self.initial_velocity = v.copy()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def launch(self) -> None:
        """
        Start the simulation for this entity.

        Records the spawn state for reset(), takes the analytic basis and
        lets the motion model adjust state (gravity for freefall and
        projectile, orbit placement for circular). Does nothing if the
        entity is already launched.
        """
        if self.launched:
            return

        self._spawn = (self.position.copy(), self.velocity.copy(), self.acceleration.copy())
        self.launched = True
        self.status = EntityStatus.ACTIVE
        self.elapsed_time = 0.0
        self.initial_position = self.position.copy()
        self.initial_velocity = self.velocity.copy()

        model_for(self.motion_type).on_launch(self)
        self.stats = compute_stats(self)
        logger.debug("Launched entity %d (%s) at %s", self.id, self.motion_type.value, self.position)

    def reset(self) -> None:
        """
        Return to the idle state at the original spawn point.

        Bounces re-base the analytic snapshot; reset ignores those and
        restores the state recorded at launch().
        """
        if self._spawn is not None:
            pos, vel, acc = self._spawn
            self.position = pos.copy()
            self.velocity = vel.copy()
            self.acceleration = acc.copy()
            self._spawn = None

        self.initial_position = self.position.copy()
        self.initial_velocity = self.velocity.copy()
        self.orbit_center = self.position.copy()
        self.elapsed_time = 0.0
        self.launched = False
        self.status = EntityStatus.IDLE
        self.stats = MotionStats()
        self.trail.clear()

    def update(self, dt: float) -> EntityStatus:
        """
        Advance the entity by dt seconds (already time-scaled).

        Does nothing unless the entity is active and dt > 0, so a frozen
        time scale leaves all state untouched.

        Returns:
            The status after the update.
        """
        if self.status is not EntityStatus.ACTIVE or dt <= 0:
            return self.status

        self.elapsed_time += dt
        model = model_for(self.motion_type)
        model.advance(self, dt)
        if model.ground_contact:
            resolve_ground_contact(self)

        if not (is_finite(self.position) and is_finite(self.velocity)):
            logger.error("Entity %d produced non-finite state, stopping it", self.id)
            # Back to the last finite position, or the current basis on the first frame
            self.position = self.trail[-1].copy() if self.trail else self.initial_position.copy()
            self.velocity = np.zeros(3, dtype=np.float64)
            self.status = EntityStatus.STOPPED

        self.trail.append(self.position.copy())
        self.stats = compute_stats(self)
        return self.status

    def dispose(self) -> None:
        """Release owned visual resources. Safe to call more than once."""
        if self.mesh is not None:
            self.mesh.release()
        if self.trail_visual is not None:
            self.trail_visual.release()
        self.trail.clear()

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def display_position(self) -> np.ndarray:
        """Position a renderer should draw (frame-relative in relative mode)."""
        return model_for(self.motion_type).display_position(self)

    @property
    def opacity(self) -> float:
        return 1.0

    def spawn_state(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        (position, velocity, acceleration) the entity would reset to.

        Before launch this is the current configured state.
        """
        if self._spawn is not None:
            pos, vel, acc = self._spawn
        else:
            pos, vel, acc = self.position, self.initial_velocity, self.acceleration
        return pos.copy(), vel.copy(), acc.copy()

    def compute_preview_points(self, n: int = PREVIEW_POINTS, dt: float = PREVIEW_DT) -> np.ndarray:
        """
        Sample up to n future positions without touching live state.

        Samples are taken every dt seconds from the current analytic basis
        (t = 0 is initial_position) with the same equations update() uses.
        Heights are clamped at the ground and sampling ends at the first
        ground hit, except for circular motion which never lands.

        Returns:
            Array of shape (k, 3) with k <= n.
        """
        model = model_for(self.motion_type)
        points = []
        for i in range(max(0, n)):
            p = np.array(model.sample(self, i * dt), dtype=np.float64)
            if p[1] < GROUND_LEVEL:
                p[1] = GROUND_LEVEL
            points.append(p)
            if model.ground_contact and i > 0 and p[1] <= GROUND_LEVEL:
                break
        return np.array(points, dtype=np.float64).reshape(-1, 3)
