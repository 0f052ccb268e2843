"""Athlete profile models.

The profile is the input contract for every prediction. Range bounds are
checked by strength_compass.validation, not here, so a partially filled
form can still be validated and report all of its problems at once.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Sex(StrEnum):
    MALE = "M"
    FEMALE = "F"
    MIXED = "Mx"


class Equipment(StrEnum):
    RAW = "Raw"
    WRAPS = "Wraps"
    SINGLE_PLY = "Single-ply"
    MULTI_PLY = "Multi-ply"
    STRAPS = "Straps"
    UNLIMITED = "Unlimited"


class ExperienceLevel(StrEnum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    ELITE = "Elite"


class AthleteProfile(BaseModel):
    """Demographic and training profile captured from the athlete."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str | None = None
    sex: Sex
    age: int
    bodyweight: float = Field(description="Bodyweight in kg")
    equipment: Equipment
    weight_class: str | None = Field(default=None, alias="weightClass")
    experience: ExperienceLevel | None = None
    goals: str | None = None
