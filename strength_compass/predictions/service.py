"""Prediction service.

Turns profiles into prediction requests and calls the prediction API.

Failure policy for /api/predict: any transport failure (network error,
timeout, non-2xx, malformed envelope, success=false, missing or malformed
data) is logged and answered with a local fallback prediction instead of
an error. Callers can only tell the two apart via metadata.model_version
(PredictionResponse.is_fallback). Exactly one remote attempt is made.

Peer comparison and model explanation are display-only endpoints; their
errors propagate.
"""

from __future__ import annotations

import datetime as dt
import random
from collections.abc import Callable
from typing import TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

from strength_compass.core.errors import ApiClientError
from strength_compass.integrations.predictor.client import ApiClient
from strength_compass.predictions.fallback import compute_fallback_prediction
from strength_compass.schemas.api import ApiEnvelope, ApiError
from strength_compass.schemas.athlete import AthleteProfile
from strength_compass.schemas.prediction import (
    ModelExplanation,
    PeerComparison,
    PredictionRequest,
    PredictionResponse,
    WhatIfScenario,
)

PREDICT_PATH = "/api/predict"
PEER_COMPARISON_PATH = "/api/peer-comparison"
MODEL_EXPLANATION_PATH = "/api/model/explanation"

_M = TypeVar("_M", bound=BaseModel)


def _utc_now() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


def build_what_if_request(base_profile: AthleteProfile, scenario: WhatIfScenario) -> PredictionRequest:
    """Apply scenario deltas to the base profile.

    Derived age/bodyweight are not clamped or re-validated; they are sent as-is.
    """
    return PredictionRequest(
        sex=base_profile.sex,
        age=base_profile.age + scenario.age_adjustment,
        bw=base_profile.bodyweight + scenario.bodyweight_adjustment,
        equip=(scenario.equipment_change or base_profile.equipment).value,
    )


class PredictionService:
    """Strength predictions with a local fallback when the API is unavailable."""

    def __init__(
        self,
        client: ApiClient,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], dt.datetime] = _utc_now,
    ) -> None:
        """Initialize the service.

        Args:
            client: Prediction API client
            rng: Random source for the fallback heuristic (seed it for reproducible tests)
            clock: Returns the timestamp recorded on fallback predictions
        """
        self._client = client
        self._rng = rng or random.Random()
        self._clock = clock

    async def get_prediction(self, request: PredictionRequest) -> PredictionResponse:
        logger.info("Requesting strength prediction", sex=str(request.sex), age=request.age, bw=request.bw, equip=request.equip)

        try:
            envelope = await self._client.post(PREDICT_PATH, request.model_dump(mode="json"))
            if not envelope.success or envelope.data is None:
                raise ApiClientError(
                    ApiError(code="PREDICTION_FAILED", message=envelope.error or "Failed to get prediction")
                )
            prediction = PredictionResponse.model_validate(envelope.data)
        except (ApiClientError, ValidationError) as e:
            logger.warning(f"Prediction API unavailable, using fallback heuristic: {type(e).__name__}")
            prediction = compute_fallback_prediction(request, self._rng, self._clock())
            logger.info("Fallback prediction computed", total_pred=prediction.total_pred)
            return prediction

        logger.info("Prediction received", total_pred=prediction.total_pred)
        return prediction

    async def get_what_if_prediction(self, base_profile: AthleteProfile, scenario: WhatIfScenario) -> PredictionResponse:
        request = build_what_if_request(base_profile, scenario)
        logger.info(
            "Requesting what-if prediction",
            scenario_name=scenario.scenario_name,
            age_adjustment=scenario.age_adjustment,
            bodyweight_adjustment=scenario.bodyweight_adjustment,
            equipment_change=scenario.equipment_change,
        )
        return await self.get_prediction(request)

    async def get_peer_comparison(self, profile: AthleteProfile) -> PeerComparison:
        """Fetch percentile and distribution for the athlete's demographic.

        Raises:
            ApiClientError: If the call fails, the API reports failure, or the data is malformed
        """
        envelope = await self._client.post(
            PEER_COMPARISON_PATH,
            {
                "sex": profile.sex.value,
                "age": profile.age,
                "bodyweight": profile.bodyweight,
                "equipment": profile.equipment.value,
            },
        )
        return self._decode(envelope, PeerComparison, "peer comparison")

    async def get_model_explanation(self) -> ModelExplanation:
        """Fetch feature importances and model metadata.

        Raises:
            ApiClientError: If the call fails, the API reports failure, or the data is malformed
        """
        envelope = await self._client.get(MODEL_EXPLANATION_PATH)
        return self._decode(envelope, ModelExplanation, "model explanation")

    @staticmethod
    def _decode(envelope: ApiEnvelope, model: type[_M], what: str) -> _M:
        if not envelope.success or envelope.data is None:
            raise ApiClientError(ApiError(code="REQUEST_FAILED", message=envelope.error or f"Failed to get {what}"))
        try:
            return model.model_validate(envelope.data)
        except ValidationError as e:
            raise ApiClientError(
                ApiError(code="INVALID_RESPONSE", message=f"Malformed {what} data", details={"errors": e.error_count()})
            ) from e
