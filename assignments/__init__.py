# User resolution and assignment validation

from assignments.cache import DEFAULT_TTL_SECONDS, TTLCache
from assignments.user_resolver import ResolvedUser, UserResolver, looks_like_user_id
from assignments.validator import (
    Assignment,
    AssignmentEligibility,
    AssignmentError,
    AssignmentErrorType,
    AssignmentValidator,
    ValidationResult,
)

__all__ = [
    "DEFAULT_TTL_SECONDS",
    "TTLCache",
    "ResolvedUser",
    "UserResolver",
    "looks_like_user_id",
    "Assignment",
    "AssignmentEligibility",
    "AssignmentError",
    "AssignmentErrorType",
    "AssignmentValidator",
    "ValidationResult",
]
