# MIT License (see LICENSE)
"""
Ground contact against the plane y = 0.

When an entity reaches the ground moving downward its vertical velocity is
reflected and scaled by the restitution coefficient:
    v_y' = -e * v_y

Every closed-form motion model measures time from the entity's initial
snapshot, so a rebound that continues must re-base that snapshot at the
contact point with the post-bounce velocity.
"""
from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from ..constants import GROUND_LEVEL
from ..types import EntityStatus

if TYPE_CHECKING:
    from ..entity import MotionEntity

logger = logging.getLogger(__name__)


def touching_ground(entity: MotionEntity) -> bool:
    """True if the entity is at or below the ground and moving down."""
    return entity.position[1] <= GROUND_LEVEL and entity.velocity[1] < 0


def rebase(entity: MotionEntity) -> None:
    """Take a new analytic basis at the entity's current state."""
    entity.initial_position = entity.position.copy()
    entity.initial_velocity = entity.velocity.copy()
    entity.elapsed_time = 0.0


def resolve_ground_contact(entity: MotionEntity) -> bool:
    """
    Clamp the entity to the ground and apply restitution.

    Outcomes:
        - Rebound strong enough: velocity reflected, entity re-based.
        - Rebound below material.bounce_threshold: stopped.
        - Bouncing disabled or restitution 0: stopped.

    Returns:
        True if contact occurred this call.
    """
    if not touching_ground(entity):
        return False

    entity.position[1] = GROUND_LEVEL
    mat = entity.material

    if mat.bounces:
        entity.velocity[1] = -mat.restitution * entity.velocity[1]
        if abs(entity.velocity[1]) < mat.bounce_threshold:
            entity.velocity[1] = 0.0
            entity.status = EntityStatus.STOPPED
            logger.debug("Entity %d settled (rebound below %.3f m/s)", entity.id, mat.bounce_threshold)
        else:
            rebase(entity)
            logger.debug("Entity %d bounced, vy=%.3f", entity.id, entity.velocity[1])
    else:
        entity.velocity[1] = 0.0
        entity.status = EntityStatus.STOPPED
        logger.debug("Entity %d stopped on ground contact", entity.id)

    return True
