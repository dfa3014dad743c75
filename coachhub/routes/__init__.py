"""CoachHub API - Routes Package."""

from coachhub.routes import (
    athletes,
    history,
    training,
    routines,
    exercises,
    notifications,
    users,
    dashboard,
    media,
    measurements,
    analytics,
    schedule,
)

__all__ = [
    "athletes",
    "history",
    "training",
    "routines",
    "exercises",
    "notifications",
    "users",
    "dashboard",
    "media",
    "measurements",
    "analytics",
    "schedule",
]
