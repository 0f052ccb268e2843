"""Validators for athlete profiles and account credentials.

Every check runs independently so a form can show all of its problems at
once. Nothing here raises; callers decide whether to enforce the result.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from strength_compass.core.constants import (
    AGE_MAX,
    AGE_MIN,
    BODYWEIGHT_MAX_KG,
    BODYWEIGHT_MIN_KG,
    EMAIL_PATTERN,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
)
from strength_compass.schemas.athlete import AthleteProfile, Equipment, Sex


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: list[str] = field(default_factory=list)


def _as_number(value: Any) -> float | None:
    # bool is an int subclass but never a valid age or bodyweight
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return float(value)


def _in_range(value: Any, low: float, high: float) -> bool:
    number = _as_number(value)
    return bool(number) and low <= number <= high


def validate_athlete_profile(profile: AthleteProfile | Mapping[str, Any]) -> ValidationResult:
    """Check age, bodyweight, sex and equipment against their declared bounds/sets.

    Args:
        profile: A built AthleteProfile or raw (possibly partial) form data

    Returns:
        ValidationResult with one message per failed check, in check order
    """
    data = profile.model_dump() if isinstance(profile, AthleteProfile) else profile
    errors: list[str] = []

    if not _in_range(data.get("age"), AGE_MIN, AGE_MAX):
        errors.append(f"Age must be between {AGE_MIN} and {AGE_MAX}")

    if not _in_range(data.get("bodyweight"), BODYWEIGHT_MIN_KG, BODYWEIGHT_MAX_KG):
        errors.append(f"Bodyweight must be between {BODYWEIGHT_MIN_KG} and {BODYWEIGHT_MAX_KG} kg")

    if data.get("sex") not in {s.value for s in Sex}:
        errors.append("Sex must be specified")

    if data.get("equipment") not in {e.value for e in Equipment}:
        errors.append("Equipment type must be specified")

    return ValidationResult(is_valid=not errors, errors=errors)


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def validate_password(password: str) -> ValidationResult:
    errors: list[str] = []

    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    elif len(password) > PASSWORD_MAX_LENGTH:
        errors.append(f"Password must be at most {PASSWORD_MAX_LENGTH} characters")

    if not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter")

    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")

    if not re.search(r"\d", password):
        errors.append("Password must contain at least one number")

    return ValidationResult(is_valid=not errors, errors=errors)
