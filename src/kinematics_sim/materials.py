# MIT License (see LICENSE)
"""
Surface properties for ground contact.

A Material decides what happens when an entity reaches the ground plane:
whether it rebounds, how much vertical speed it keeps, and when the
rebound is too weak to continue.
"""
from __future__ import annotations
from dataclasses import dataclass

from .constants import DEFAULT_BOUNCE_THRESHOLD


@dataclass(frozen=True)
class Material:
    """
    Ground contact properties.

    Attributes:
        restitution: Coefficient of restitution e in [0, 1]. The vertical
                     velocity after impact is v' = -e * v.
                     0 = no bounce, 1 = perfectly elastic.
        bounce_enabled: If False the entity stops on first contact
                        regardless of restitution.
        bounce_threshold: Rebound speed (m/s) below which bouncing stops
                          and the entity comes to rest.
    """
    restitution: float = 0.7
    bounce_enabled: bool = True
    bounce_threshold: float = DEFAULT_BOUNCE_THRESHOLD

    @property
    def bounces(self) -> bool:
        """True if contact produces a rebound at all."""
        return self.bounce_enabled and self.restitution > 0
