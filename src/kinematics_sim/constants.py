# MIT License (see LICENSE)
"""
Numeric defaults and guards used throughout the kinematics engine.

All quantities are SI: metres, seconds, kilograms, radians (angles taken
from configuration are degrees and converted at the boundary).
"""
from __future__ import annotations

# Gravitational acceleration magnitude for MotionEntity (positive, applied -y).
DEFAULT_GRAVITY: float = 9.8

# Projectile launcher uses the more precise standard value.
PROJECTILE_GRAVITY: float = 9.81

# The ground is the plane y = GROUND_LEVEL.
GROUND_LEVEL: float = 0.0

# Below this speed drag is not applied. Quadratic drag scales with |v| and
# linear drag with 1/m; near zero both only add noise.
DRAG_SPEED_EPS: float = 1e-3

# A bounce whose rebound speed falls below this stops the entity.
DEFAULT_BOUNCE_THRESHOLD: float = 0.1

# Seconds a landed projectile stays visible while fading out.
LANDED_FADE_TIME: float = 2.0

# Trajectory preview sampling.
PREVIEW_DT: float = 0.05
PREVIEW_POINTS: int = 60

# Bounded histories.
MAX_TRAIL_POINTS: int = 200
GRAPH_MAX_SAMPLES: int = 300
