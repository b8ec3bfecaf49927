# MIT License (see LICENSE)
"""
Orchestrators: per-frame scheduling for a collection of entities.

An orchestrator owns entities only for scheduling. Each frame the host
calls update(delta_time); the orchestrator scales the delta by its own
time_scale and advances every entity with the same scaled step, so
relative motion between entities is preserved at any speed:
    time_scale = 0    frozen
    time_scale < 1    slow motion
    time_scale > 1    fast-forward

Entities reporting REMOVED are evicted and disposed during the same pass.
The list is walked from the end so deleting the current index never skips
or revisits an entity.

Structure:
    - Host creates an orchestrator (or several, each with its own scale).
    - Host adds entities via add_entity() or spawn().
    - Host calls update(dt) once per frame, then syncs visuals.
"""
from __future__ import annotations
import logging
from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import Any, Protocol

from .entity import MotionEntity
from .profiler import Profiler
from .projectile import Projectile
from .types import EntityStatus
from .util import profiling_enabled

logger = logging.getLogger(__name__)


class Simulated(Protocol):
    """What an orchestrator needs from an entity."""
    id: int

    def update(self, dt: float) -> EntityStatus: ...

    def dispose(self) -> None: ...


def _default_profiler() -> Profiler | None:
    return Profiler() if profiling_enabled() else None


@dataclass(eq=False)
class Orchestrator:
    """
    Insertion-ordered entity collection driven by a frame loop.

    Attributes:
        time_scale: Multiplier applied to every frame delta. Values <= 0
                    freeze all entities.
        profiler: Optional Profiler; created automatically when the
                  KINEMATICS_SIM_PROFILE environment variable is "1".
        entities: Live entities, in insertion order.
        time: Accumulated scaled time in seconds.
    """
    time_scale: float = 1.0
    profiler: Profiler | None = field(default_factory=_default_profiler)

    # Internal state
    entities: list[Any] = field(default_factory=list)
    time: float = 0.0

    def __post_init__(self) -> None:
        self._next_id = 1

    def add_entity(self, entity: Simulated) -> int:
        """
        Register an entity for per-frame updates.

        Returns:
            The id assigned to the entity.
        """
        entity.id = self._next_id
        self._next_id += 1
        self.entities.append(entity)
        return entity.id

    def remove_entity(self, entity: Simulated) -> None:
        """Remove an entity if present and dispose it."""
        if entity in self.entities:
            self.entities.remove(entity)
        entity.dispose()

    def remove_all(self) -> None:
        """Dispose every entity and clear the collection."""
        for entity in self.entities:
            entity.dispose()
        self.entities.clear()

    def update(self, delta_time: float) -> None:
        """
        Advance all entities by one frame.

        Args:
            delta_time: Raw frame delta in seconds, clamped by the host.
        """
        scaled_dt = delta_time * self.time_scale
        prof = self.profiler

        with prof.section("update") if prof else nullcontext():
            for i in range(len(self.entities) - 1, -1, -1):
                entity = self.entities[i]
                status = entity.update(scaled_dt)
                if status == EntityStatus.REMOVED:
                    del self.entities[i]
                    entity.dispose()
                    logger.debug("Evicted entity %d", entity.id)
                    if prof:
                        prof.stats.count("evicted")

        if scaled_dt > 0:
            self.time += scaled_dt

    @property
    def count(self) -> int:
        """Number of live entities."""
        return len(self.entities)


@dataclass(eq=False)
class MotionOrchestrator(Orchestrator):
    """Schedules MotionEntity instances. Entities are never auto-removed."""
    entities: list[MotionEntity] = field(default_factory=list)

    def spawn(self, position, launch: bool = False, **params: Any) -> MotionEntity:
        """
        Create, configure and register an entity at position.

        Args:
            position: Spawn point [x, y, z].
            launch: Launch immediately after configuring.
            **params: Keys accepted by MotionEntity.configure().
        """
        entity = MotionEntity(position=position)
        self.add_entity(entity)
        if params:
            entity.configure(**params)
        if launch:
            entity.launch()
        return entity

    def launch_all(self) -> None:
        """Launch every idle entity."""
        for entity in self.entities:
            entity.launch()


@dataclass(eq=False)
class ProjectileOrchestrator(Orchestrator):
    """Schedules Projectile instances; landed projectiles evict themselves."""
    entities: list[Projectile] = field(default_factory=list)

    def spawn(self, position, direction=None, launch: bool = False, **params: Any) -> Projectile:
        """
        Create, configure and register a projectile at position.

        Args:
            position: Spawn point [x, y, z].
            direction: Optional horizontal heading.
            launch: Launch immediately after configuring.
            **params: velocity, angle, gravity, mass.
        """
        projectile = Projectile(launch_position=position)
        self.add_entity(projectile)
        if direction is not None:
            projectile.set_launch_direction(direction)
        if params:
            projectile.configure(**params)
        if launch:
            projectile.launch()
        return projectile
