# MIT License (see LICENSE)
"""
Core type definitions for the kinematics engine.

Defines:
- MotionType, DragMode, EntityStatus: closed sets of tags.
- Orbit, ReferenceFrame: per-mode payloads for circular and relative motion.
- MotionStats: derived, display-oriented quantities for one entity.

Tags are str-valued enums so configuration coming from JSON or a UI can be
passed as plain strings.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from .util import f64, zeros3

logger = logging.getLogger(__name__)


# =============================================================================
# Tags
# =============================================================================

class MotionType(str, Enum):
    """The six motion models an entity can follow."""
    LINEAR = "linear"
    ACCELERATED = "accelerated"
    FREEFALL = "freefall"
    PROJECTILE = "projectile"
    CIRCULAR = "circular"
    RELATIVE = "relative"

    @classmethod
    def parse(cls, value: MotionType | str) -> MotionType:
        """
        Convert a tag or string to a MotionType.

        Unknown values fall back to LINEAR so a bad UI value never stops
        the frame loop.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            logger.warning("Unknown motion type %r, falling back to linear", value)
            return cls.LINEAR


class DragMode(str, Enum):
    """Air resistance model."""
    NONE = "none"
    LINEAR = "linear"          # F = -k v
    QUADRATIC = "quadratic"    # F = -k |v| v

    @classmethod
    def parse(cls, value: DragMode | str) -> DragMode:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            logger.warning("Unknown drag mode %r, drag disabled", value)
            return cls.NONE


class EntityStatus(str, Enum):
    """
    Lifecycle state returned by update().

    MotionEntity uses IDLE -> ACTIVE -> STOPPED. Projectile uses
    IDLE -> ACTIVE -> LANDED -> REMOVED. Orchestrators evict on REMOVED.
    """
    IDLE = "idle"
    ACTIVE = "active"
    STOPPED = "stopped"
    LANDED = "landed"
    REMOVED = "remove"


# =============================================================================
# Mode payloads
# =============================================================================

@dataclass(frozen=True)
class Orbit:
    """
    Circular motion parameters.

    Attributes:
        radius: Orbit radius r in metres.
        angular_velocity: ω in rad/s.
        clockwise: Direction of travel seen from above (+y).
    """
    radius: float = 5.0
    angular_velocity: float = 1.0
    clockwise: bool = False

    @property
    def sign(self) -> float:
        return -1.0 if self.clockwise else 1.0


@dataclass(frozen=True)
class ReferenceFrame:
    """
    Moving frame for relative motion.

    Attributes:
        velocity: Frame velocity in world space (m/s).
        view_in_world_frame: If False, renderers should draw the entity
                             as seen by an observer riding the frame.
    """
    velocity: np.ndarray = field(default_factory=zeros3)
    view_in_world_frame: bool = True

    def __post_init__(self) -> None:
        """Ensure velocity is stored as float64."""
        object.__setattr__(self, "velocity", f64(self.velocity))


# =============================================================================
# Stats
# =============================================================================

@dataclass
class MotionStats:
    """
    Derived quantities for display. All values are >= 0.

    Mode-specific fields stay 0 for modes they do not apply to.
    """
    speed: float = 0.0
    displacement: float = 0.0
    acceleration_mag: float = 0.0
    centripetal_accel: float = 0.0
    time_to_impact: float = 0.0
    impact_velocity: float = 0.0
    flight_time: float = 0.0
    max_height: float = 0.0
    range: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return {
            "speed": self.speed,
            "displacement": self.displacement,
            "acceleration_mag": self.acceleration_mag,
            "centripetal_accel": self.centripetal_accel,
            "time_to_impact": self.time_to_impact,
            "impact_velocity": self.impact_velocity,
            "flight_time": self.flight_time,
            "max_height": self.max_height,
            "range": self.range,
        }
