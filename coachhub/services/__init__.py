"""CoachHub API - Services Package."""

from .auth import create_access_token, verify_token
from .cache import cache_service, CacheService, cached
from .cache_tags import (
    CacheTag,
    COACH_SCOPE,
    ATHLETE_SCOPE,
    revalidate_tags,
    revalidate_coach_scope,
    revalidate_athlete_scope,
)
from .session import resolve_session, require_role
from .athletes import list_athletes, get_athlete_details
from .history import get_workout_history, get_monthly_stats
from .training import log_workout, get_progression_suggestion
from .routines import (
    list_routines,
    get_routine,
    get_active_routine,
    save_routine,
    delete_routine,
    assign_routine,
)
from .exercises import list_exercises, create_exercise, update_exercise, delete_exercise
from .coach_stats import get_coach_stats
from .notifications import list_notifications, mark_notification_read
from .users import (
    get_profile,
    update_profile,
    complete_onboarding,
    link_with_coach,
    unlink_coach,
    list_users,
    update_user_role,
)
from .measurements import log_body_measurements, get_body_measurements_history
from .analytics import (
    get_weekly_activity,
    get_weekly_progress,
    get_personal_records,
    get_strength_progress,
)
from .schedule import (
    assign_routine_day,
    assign_routine_week,
    check_assignment_conflicts,
    get_athlete_assignments,
    get_today_assignment,
)
from .media import issue_upload_credentials

__all__ = [
    "create_access_token",
    "verify_token",
    "cache_service",
    "CacheService",
    "cached",
    "CacheTag",
    "COACH_SCOPE",
    "ATHLETE_SCOPE",
    "revalidate_tags",
    "revalidate_coach_scope",
    "revalidate_athlete_scope",
    "resolve_session",
    "require_role",
    "list_athletes",
    "get_athlete_details",
    "get_workout_history",
    "get_monthly_stats",
    "log_workout",
    "get_progression_suggestion",
    "list_routines",
    "get_routine",
    "get_active_routine",
    "save_routine",
    "delete_routine",
    "assign_routine",
    "list_exercises",
    "create_exercise",
    "update_exercise",
    "delete_exercise",
    "get_coach_stats",
    "list_notifications",
    "mark_notification_read",
    "get_profile",
    "update_profile",
    "complete_onboarding",
    "link_with_coach",
    "unlink_coach",
    "list_users",
    "update_user_role",
    "log_body_measurements",
    "get_body_measurements_history",
    "get_weekly_activity",
    "get_weekly_progress",
    "get_personal_records",
    "get_strength_progress",
    "assign_routine_day",
    "assign_routine_week",
    "check_assignment_conflicts",
    "get_athlete_assignments",
    "get_today_assignment",
    "issue_upload_credentials",
]
