"""Error types for Strength Compass.

Distinct error types separate what the caller must handle from what the
library recovers from on its own:
- Validation errors: profile fields out of range or missing, never sent over the wire
- Logical errors: operations attempted in the wrong state (e.g. what-if without a profile)
- Transport errors: API failures, normalized to ApiError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from strength_compass.schemas.api import ApiError


class StrengthCompassError(Exception):
    """Base exception for all strength_compass errors."""


class ProfileValidationError(StrengthCompassError):
    """Raised when a caller enforces validation and the profile fails it.

    Attributes:
        errors: Every violation, in check order
    """

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors) or "Invalid athlete profile")


class ProfileNotSetError(StrengthCompassError):
    """Raised when a what-if scenario is requested before any profile is set."""

    def __init__(self, message: str = "No current profile set for what-if scenario"):
        self.message = message
        super().__init__(message)


class ApiClientError(StrengthCompassError):
    """A prediction API call failed.

    Wraps the normalized ApiError so callers see one shape for network
    failures, non-2xx responses and malformed bodies alike.
    """

    def __init__(self, error: ApiError):
        self.error = error
        super().__init__(f"{error.code}: {error.message}")

    @property
    def code(self) -> str:
        return self.error.code

    @property
    def status_code(self) -> int | None:
        status = self.error.details.get("status")
        return status if isinstance(status, int) else None


class MeetNotFoundError(StrengthCompassError):
    """Raised when updating or deleting a meet entry that does not exist."""

    def __init__(self, meet_id: str):
        self.meet_id = meet_id
        super().__init__("Meet not found")
