# MIT License (see LICENSE)
"""
Projectile: a single-mode ballistic launcher.

A simpler sibling of MotionEntity restricted to projectile motion:
    Vx = V cos(θ)                 horizontal speed along launch_direction
    Vy = V sin(θ)                 initial vertical speed
    x(t) = x0 + Vx t              (uniform)
    y(t) = y0 + Vy t - 1/2 g t²   (uniformly accelerated)

There is no bounce and no resting state. On ground contact the projectile
is flagged landed, fades out linearly over LANDED_FADE_TIME seconds and
then reports REMOVED so its orchestrator evicts it.

Lifecycle:
    idle --launch()--> active --ground--> landed --fade elapsed--> remove
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field

import numpy as np

from .constants import GROUND_LEVEL, LANDED_FADE_TIME, PREVIEW_DT, PREVIEW_POINTS, PROJECTILE_GRAVITY
from .core.models import ballistic_position, ballistic_velocity
from .core.stats import projectile_flight_time, projectile_max_height
from .renderer.resources import VisualHandle
from .types import EntityStatus
from .util import f64, horizontal_unit, norm, zeros3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectileStats:
    """
    Ideal flat-ground figures for the current parameters.

        flight time  T = 2 Vy / g
        max height   H = Vy² / (2g)
        range        R = V² sin(2θ) / g
    """
    flight_time: float = 0.0
    max_height: float = 0.0
    range: float = 0.0


@dataclass(eq=False)
class Projectile:
    """
    Ballistic projectile with a timed fade-out after landing.

    Attributes:
        launch_position: Spawn point [x, y, z].
        speed: Launch speed V in m/s.
        angle: Elevation θ in degrees.
        gravity: Gravity magnitude (positive, applied along -y).
        mass: Mass in kg. Unused by the ideal model, kept for drag hooks.
        launch_direction: Horizontal heading; y is ignored and the vector
                          is normalized.
        ground_level: Height of the landing plane.
        mesh: Visual handle for the projectile body.
        ring: Pre-launch indicator, released at launch().
        trajectory_line: Optional preview line, released at launch().
        id: Identifier assigned by the orchestrator.
    """
    launch_position: np.ndarray | tuple[float, float, float] = (0.0, 0.0, 0.0)
    speed: float = 20.0
    angle: float = 45.0
    gravity: float = PROJECTILE_GRAVITY
    mass: float = 1.0
    launch_direction: np.ndarray | tuple[float, float, float] = (1.0, 0.0, 0.0)
    ground_level: float = GROUND_LEVEL
    mesh: VisualHandle | None = field(default_factory=lambda: VisualHandle("mesh"))
    ring: VisualHandle | None = field(default_factory=lambda: VisualHandle("ring"))
    trajectory_line: VisualHandle | None = None
    id: int = -1

    # Runtime state
    position: np.ndarray = field(init=False)
    elapsed_time: float = field(default=0.0, init=False)
    launched: bool = field(default=False, init=False)
    landed: bool = field(default=False, init=False)
    landed_timer: float = field(default=0.0, init=False)
    opacity: float = field(default=1.0, init=False)
    status: EntityStatus = field(default=EntityStatus.IDLE, init=False)
    vx: float = field(default=0.0, init=False)
    vy: float = field(default=0.0, init=False)

    def __post_init__(self) -> None:
        self.launch_position = f64(self.launch_position)
        direction = horizontal_unit(self.launch_direction)
        if norm(direction) == 0.0:
            direction = f64((1.0, 0.0, 0.0))
        self.launch_direction = direction
        self.position = self.launch_position.copy()

    def set_launch_direction(self, direction) -> None:
        """
        Set the horizontal heading in the XZ plane.

        A direction with no horizontal component leaves the heading
        unchanged.
        """
        d = horizontal_unit(direction)
        if norm(d) > 0.0:
            self.launch_direction = d

    def configure(
        self,
        velocity: float | None = None,
        angle: float | None = None,
        gravity: float | None = None,
        mass: float | None = None,
    ) -> None:
        """Update launch parameters. Only supplied values change."""
        if velocity is not None:
            self.speed = float(velocity)
        if angle is not None:
            self.angle = float(angle)
        if gravity is not None:
            self.gravity = float(gravity)
        if mass is not None:
            self.mass = float(mass)

    def launch(self) -> None:
        """
        Precompute velocity components and start the flight.

        The components are fixed for the whole flight. The ring indicator
        and any trajectory preview are released. Does nothing if already
        launched.
        """
        if self.launched:
            return

        theta = np.radians(self.angle)
        self.vx = float(self.speed * np.cos(theta))
        self.vy = float(self.speed * np.sin(theta))

        self.elapsed_time = 0.0
        self.launched = True
        self.landed = False
        self.landed_timer = 0.0
        self.status = EntityStatus.ACTIVE

        if self.ring is not None:
            self.ring.release()
            self.ring = None
        self.clear_trajectory_line()
        logger.debug("Launched projectile %d: V=%.2f θ=%.1f°", self.id, self.speed, self.angle)

    def reset(self) -> None:
        """Return to the unlaunched state at the spawn point."""
        self.launched = False
        self.landed = False
        self.elapsed_time = 0.0
        self.landed_timer = 0.0
        self.vx = 0.0
        self.vy = 0.0
        self.opacity = 1.0
        self.position = self.launch_position.copy()
        self.status = EntityStatus.IDLE

    def update(self, dt: float) -> EntityStatus:
        """
        Advance by dt seconds (already time-scaled).

        In flight the position is evaluated in closed form from the launch
        point. After landing dt only drives the fade timer.

        Returns:
            IDLE, ACTIVE, LANDED, or REMOVED once the fade has elapsed.
        """
        if not self.launched or dt <= 0 or self.status is EntityStatus.REMOVED:
            return self.status

        if self.landed:
            self.landed_timer += dt
            if self.landed_timer >= LANDED_FADE_TIME:
                self.opacity = 0.0
                self.status = EntityStatus.REMOVED
                return self.status
            self.opacity = max(0.0, 1.0 - self.landed_timer / LANDED_FADE_TIME)
            return self.status

        self.elapsed_time += dt
        p = ballistic_position(self.launch_position, self.initial_velocity, self.gravity, self.elapsed_time)

        if p[1] <= self.ground_level:
            p[1] = self.ground_level
            self.landed = True
            self.landed_timer = 0.0
            self.status = EntityStatus.LANDED
            logger.debug("Projectile %d landed at t=%.3fs", self.id, self.elapsed_time)

        self.position = p
        return self.status

    def apply_drag(self, vx: float, vy: float) -> tuple[float, float]:
        """
        Hook for air resistance on the launch components.

        The ideal model has none; subclasses may return adjusted values.
        """
        return vx, vy

    @property
    def initial_velocity(self) -> np.ndarray:
        """Launch velocity vector after the drag hook."""
        vx, vy = self.apply_drag(self.vx, self.vy)
        return self.launch_direction * vx + f64((0.0, vy, 0.0))

    @property
    def velocity(self) -> np.ndarray:
        """Current velocity; zero before launch and after landing."""
        if not self.launched or self.landed:
            return zeros3()
        return ballistic_velocity(self.initial_velocity, self.gravity, self.elapsed_time)

    @property
    def display_position(self) -> np.ndarray:
        return self.position.copy()

    def compute_trajectory_points(self, n: int = PREVIEW_POINTS) -> np.ndarray:
        """
        Predict the flight path without touching projectile state.

        The path is sampled over the estimated time to reach the ground from
        the launch height:
            T = (Vy + sqrt(Vy² + 2 g (y0 - ground))) / g
        and ends at the first sample on or below the ground.

        Returns:
            Array of shape (k, 3) with k <= n + 1.
        """
        theta = np.radians(self.angle)
        vx = self.speed * np.cos(theta)
        vy = self.speed * np.sin(theta)
        u = self.launch_direction * vx + f64((0.0, vy, 0.0))
        g = self.gravity

        if g > 0 and n > 0:
            height = max(0.0, float(self.launch_position[1] - self.ground_level))
            t_flight = (vy + np.sqrt(vy * vy + 2.0 * g * height)) / g
            dt_sim = max(t_flight / n, 0.01)
        else:
            dt_sim = PREVIEW_DT

        points = []
        for i in range(max(0, n) + 1):
            p = ballistic_position(self.launch_position, u, g, i * dt_sim)
            if p[1] <= self.ground_level and i > 0:
                p[1] = self.ground_level
                points.append(p)
                break
            points.append(p)
        return np.array(points, dtype=np.float64).reshape(-1, 3)

    def attach_trajectory_line(self, handle: VisualHandle) -> None:
        """Take ownership of a preview line, releasing any previous one."""
        self.clear_trajectory_line()
        self.trajectory_line = handle

    def clear_trajectory_line(self) -> None:
        if self.trajectory_line is not None:
            self.trajectory_line.release()
            self.trajectory_line = None

    def compute_stats(self) -> ProjectileStats:
        """Ideal flat-ground stats, floored at 0. Zero when g <= 0."""
        if self.gravity <= 0:
            return ProjectileStats()
        theta = np.radians(self.angle)
        vy = float(self.speed * np.sin(theta))
        g = self.gravity
        return ProjectileStats(
            flight_time=projectile_flight_time(vy, g),
            max_height=projectile_max_height(vy, g),
            range=max(0.0, float(self.speed * self.speed * np.sin(2.0 * theta) / g)),
        )

    def dispose(self) -> None:
        """Release every owned visual. Safe to call more than once."""
        self.clear_trajectory_line()
        if self.mesh is not None:
            self.mesh.release()
        if self.ring is not None:
            self.ring.release()
            self.ring = None
