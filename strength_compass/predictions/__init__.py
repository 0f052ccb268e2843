"""Prediction pipeline: service with local fallback, and the session state store."""

from strength_compass.predictions.fallback import compute_fallback_prediction
from strength_compass.predictions.service import PredictionService, build_what_if_request
from strength_compass.predictions.store import PredictionState, PredictionStore, StorePhase

__all__ = [
    "PredictionService",
    "PredictionState",
    "PredictionStore",
    "StorePhase",
    "build_what_if_request",
    "compute_fallback_prediction",
]
