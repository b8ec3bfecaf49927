# MIT License (see LICENSE)
"""
kinematics_sim - An analytical kinematics engine.

This package computes exact, closed-form motion for independent point
entities under six motion models (linear, accelerated, freefall,
projectile, circular, relative), with optional drag and ground bounce, and
drives collections of entities from a host frame loop.

Main entry points:
    - MotionEntity: One point entity with configurable motion model.
    - Projectile: Single-mode ballistic launcher that fades out after landing.
    - MotionOrchestrator, ProjectileOrchestrator: Per-frame scheduling with
      a per-instance time scale.
    - Material: Ground contact properties (restitution, bounce threshold).

Submodules:
    - core: Motion models, drag, bounce, stats.
    - io: JSON setup files.
    - renderer: Visual handles and optional rendering adapters.
    - recorder: Time-series sampling for graphs.

Example:
    from kinematics_sim import MotionOrchestrator

    sim = MotionOrchestrator()
    ball = sim.spawn((0, 20, 0), motion_type="freefall", restitution=0.5)
    ball.launch()
    while ball.status == "active":
        sim.update(1 / 60)
"""
from .entity import MotionEntity
from .projectile import Projectile, ProjectileStats
from .orchestrator import MotionOrchestrator, ProjectileOrchestrator
from .materials import Material
from .types import DragMode, EntityStatus, MotionStats, MotionType, Orbit, ReferenceFrame

__all__ = [
    # Entities
    "MotionEntity",
    "Projectile",
    "ProjectileStats",
    # Orchestration
    "MotionOrchestrator",
    "ProjectileOrchestrator",
    # Types
    "MotionType",
    "DragMode",
    "EntityStatus",
    "MotionStats",
    "Orbit",
    "ReferenceFrame",
    # Materials
    "Material",
]
