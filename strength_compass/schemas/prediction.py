"""Prediction request/response contracts.

PredictionRequest is the wire projection of an AthleteProfile sent to the
remote predictor. PredictionResponse is immutable once received; a new
prediction replaces the stored one instead of mutating it.
"""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field

from strength_compass.core.constants import (
    AGE_ADJUSTMENT_LIMIT,
    BODYWEIGHT_ADJUSTMENT_LIMIT_KG,
    FALLBACK_MODEL_VERSION,
)
from strength_compass.schemas.athlete import AthleteProfile, Equipment, Sex


class PredictionRequest(BaseModel):
    """Body of POST /api/predict.

    No bounds are enforced: what-if requests may carry derived ages and
    bodyweights outside the profile validation range.
    """

    model_config = ConfigDict(frozen=True)

    sex: Sex
    age: int
    bw: float = Field(description="Bodyweight in kg")
    equip: str = Field(description="Equipment class; unrecognised values are left for the API to reject")

    @classmethod
    def from_profile(cls, profile: AthleteProfile) -> Self:
        return cls(sex=profile.sex, age=profile.age, bw=profile.bodyweight, equip=profile.equipment.value)


class PredictionMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_version: str
    prediction_date: str = Field(description="ISO 8601 timestamp")
    features_used: list[str] = Field(default_factory=list)


class PredictionResponse(BaseModel):
    """Predicted competition total with optional per-lift breakdown."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    total_pred: float
    squat_pred: float | None = None
    bench_pred: float | None = None
    deadlift_pred: float | None = None
    wilks_pred: float | None = None
    pi_low: float | None = Field(default=None, description="Prediction interval low")
    pi_high: float | None = Field(default=None, description="Prediction interval high")
    percentile: float | None = None
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    metadata: PredictionMetadata | None = None

    @property
    def is_fallback(self) -> bool:
        """True when produced by the local heuristic instead of the remote model."""
        return self.metadata is not None and self.metadata.model_version == FALLBACK_MODEL_VERSION


class WhatIfScenario(BaseModel):
    """Hypothetical perturbation applied to the current profile."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    age_adjustment: int = Field(
        default=0, ge=-AGE_ADJUSTMENT_LIMIT, le=AGE_ADJUSTMENT_LIMIT, alias="ageAdjustment"
    )
    bodyweight_adjustment: float = Field(
        default=0.0,
        ge=-BODYWEIGHT_ADJUSTMENT_LIMIT_KG,
        le=BODYWEIGHT_ADJUSTMENT_LIMIT_KG,
        alias="bodyweightAdjustment",
    )
    equipment_change: Equipment | None = Field(default=None, alias="equipmentChange")
    scenario_name: str | None = None

    @property
    def has_changes(self) -> bool:
        return self.age_adjustment != 0 or self.bodyweight_adjustment != 0 or self.equipment_change is not None


class WhatIfResult(BaseModel):
    """A scenario and the prediction it produced, in history order."""

    model_config = ConfigDict(frozen=True)

    scenario: WhatIfScenario
    prediction: PredictionResponse


class DistributionBucket(BaseModel):
    range: str
    count: int
    percentage: float


class PeerComparison(BaseModel):
    """Response of POST /api/peer-comparison (display only)."""

    model_config = ConfigDict(populate_by_name=True)

    percentile: float
    average_for_demographic: float = Field(alias="averageForDemographic")
    sample_size: int = Field(alias="sampleSize")
    distribution: list[DistributionBucket] = Field(default_factory=list)


class FeatureImportance(BaseModel):
    name: str
    importance: float
    description: str = ""


class ModelInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    algorithm: str
    accuracy: float
    last_trained: str = Field(alias="lastTrained")
    sample_size: int = Field(alias="sampleSize")


class ModelExplanation(BaseModel):
    """Response of GET /api/model/explanation (display only)."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    features: list[FeatureImportance] = Field(default_factory=list)
    model_info: ModelInfo = Field(alias="modelInfo")
