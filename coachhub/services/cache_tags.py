"""
CoachHub API - Cache Tags.

Closed set of invalidation groups for cached reads, and the dispatcher that
mutations call before reporting success. Every mutating data-access function
declares its tags as a module-level constant next to its definition.
"""

import logging
from enum import Enum
from typing import FrozenSet, Iterable

from .cache import cache_service

logger = logging.getLogger(__name__)


class CacheTag(str, Enum):
    """Named invalidation groups."""

    # Coach
    COACH_STATS = "coach-stats"
    COACH_NOTIFICATIONS = "coach-notifications"

    # Athletes
    ATHLETES = "athletes"
    ATHLETE_DETAILS = "athlete-details"
    ATHLETE_NOTIFICATIONS = "athlete-notifications"

    # Library and plans
    ROUTINES = "routines"
    EXERCISES = "exercises"

    # Training
    TRAINING_LOGS = "training-logs"
    SCHEDULE = "schedule"
    MEASUREMENTS = "measurements"

    NOTIFICATIONS = "notifications"


# Invalidated after any coach-side mutation
COACH_SCOPE: FrozenSet[CacheTag] = frozenset({
    CacheTag.COACH_STATS,
    CacheTag.ATHLETES,
    CacheTag.ROUTINES,
    CacheTag.EXERCISES,
})

# Invalidated after an athlete logs activity; includes coach-stats so the
# coach dashboard reflects it
ATHLETE_SCOPE: FrozenSet[CacheTag] = frozenset({
    CacheTag.TRAINING_LOGS,
    CacheTag.ATHLETE_NOTIFICATIONS,
    CacheTag.COACH_STATS,
})


async def revalidate_tags(tags: Iterable[CacheTag]) -> None:
    """
    Mark every cached read registered under any of ``tags`` as stale.

    Calling it twice in a row has the same observable effect as once: the
    next read under each tag recomputes, then is cached again.
    """
    tags = frozenset(CacheTag(tag) for tag in tags)
    deleted = await cache_service.invalidate_tags(tags)
    logger.debug(f"Revalidated tags {sorted(t.value for t in tags)} ({deleted} entries)")


async def revalidate_coach_scope() -> None:
    """Revalidate all coach data (stats, athletes, routines, exercises)."""
    await revalidate_tags(COACH_SCOPE)


async def revalidate_athlete_scope() -> None:
    """Revalidate athlete data after a training session is logged."""
    await revalidate_tags(ATHLETE_SCOPE)
