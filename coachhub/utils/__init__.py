"""CoachHub API - Utilities Package."""

from coachhub.utils.dates import utcnow, as_naive_utc, start_of_month, start_of_week, to_iso
from coachhub.utils.errors import CoachHubException, ConfigurationError
from coachhub.utils.numbers import round_half_up

__all__ = [
    "utcnow",
    "as_naive_utc",
    "start_of_month",
    "start_of_week",
    "to_iso",
    "CoachHubException",
    "ConfigurationError",
    "round_half_up",
]
