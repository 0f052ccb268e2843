"""Domain models shared across the package."""

from strength_compass.schemas.api import ApiEnvelope, ApiError
from strength_compass.schemas.athlete import AthleteProfile, Equipment, ExperienceLevel, Sex
from strength_compass.schemas.meet import MeetEntry, MeetPerformance, MeetResult
from strength_compass.schemas.prediction import (
    DistributionBucket,
    FeatureImportance,
    ModelExplanation,
    ModelInfo,
    PeerComparison,
    PredictionMetadata,
    PredictionRequest,
    PredictionResponse,
    WhatIfResult,
    WhatIfScenario,
)

__all__ = [
    "ApiEnvelope",
    "ApiError",
    "AthleteProfile",
    "DistributionBucket",
    "Equipment",
    "ExperienceLevel",
    "FeatureImportance",
    "MeetEntry",
    "MeetPerformance",
    "MeetResult",
    "ModelExplanation",
    "ModelInfo",
    "PeerComparison",
    "PredictionMetadata",
    "PredictionRequest",
    "PredictionResponse",
    "Sex",
    "WhatIfResult",
    "WhatIfScenario",
]
