"""Competition (meet) log models."""

import datetime as dt

from pydantic import BaseModel, Field

from strength_compass.core.constants import LIFT_MAX_KG, LIFT_MIN_KG
from strength_compass.schemas.athlete import Equipment


class MeetResult(BaseModel):
    """Fields supplied when logging a meet; id and timestamps are assigned on save."""

    athlete_id: str
    meet_name: str
    meet_date: dt.date
    federation: str | None = None
    weight_class: str
    bodyweight: float = Field(gt=0)
    equipment: Equipment
    actual_squat: float = Field(ge=LIFT_MIN_KG, le=LIFT_MAX_KG)
    actual_bench: float = Field(ge=LIFT_MIN_KG, le=LIFT_MAX_KG)
    actual_deadlift: float = Field(ge=LIFT_MIN_KG, le=LIFT_MAX_KG)
    actual_total: float = Field(ge=0)
    wilks_score: float | None = None
    predicted_total: float | None = None
    delta: float | None = Field(default=None, description="actual_total - predicted_total")
    placement: int | None = Field(default=None, ge=1)
    notes: str | None = None


class MeetEntry(MeetResult):
    """A stored meet log entry."""

    id: str
    created_at: dt.datetime
    updated_at: dt.datetime


class MeetPerformance(BaseModel):
    """One point on an athlete's progress chart."""

    date: dt.date
    total: float
    predicted: float
    bodyweight: float
    wilks: float
    equipment: Equipment
