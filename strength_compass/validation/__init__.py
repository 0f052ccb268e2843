from strength_compass.validation.validators import (
    ValidationResult,
    is_valid_email,
    validate_athlete_profile,
    validate_password,
)

__all__ = [
    "ValidationResult",
    "is_valid_email",
    "validate_athlete_profile",
    "validate_password",
]
