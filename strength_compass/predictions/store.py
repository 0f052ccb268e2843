"""Prediction state store.

Holds the current profile, the current prediction and the ordered what-if
history for one session. State is an immutable snapshot replaced on every
transition.

Phases:
    idle                  no profile
    profile_set           profile, no prediction
    prediction_loaded     profile + prediction
    what_if_accumulating  at least one what-if result recorded

Overlapping calls are resolved by sequence numbers instead of
last-writer-wins: a prediction only lands if it is the latest one issued,
and nothing started before the profile was replaced (or predictions were
cleared) is applied afterwards. Stale results are still returned to their
callers.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum

from loguru import logger

from strength_compass.core.errors import ProfileNotSetError
from strength_compass.predictions.service import PredictionService
from strength_compass.schemas.athlete import AthleteProfile
from strength_compass.schemas.prediction import (
    PredictionRequest,
    PredictionResponse,
    WhatIfResult,
    WhatIfScenario,
)


class StorePhase(StrEnum):
    IDLE = "idle"
    PROFILE_SET = "profile_set"
    PREDICTION_LOADED = "prediction_loaded"
    WHAT_IF_ACCUMULATING = "what_if_accumulating"


@dataclass(frozen=True)
class PredictionState:
    current_profile: AthleteProfile | None = None
    current_prediction: PredictionResponse | None = None
    what_if_scenarios: tuple[WhatIfResult, ...] = ()
    is_loading: bool = False
    error: str | None = None


class PredictionStore:
    """Session-scoped prediction state with explicit transitions."""

    def __init__(self, service: PredictionService) -> None:
        self._service = service
        self._state = PredictionState()
        self._generation = 0
        self._prediction_seq = 0
        self._in_flight = 0

    @property
    def state(self) -> PredictionState:
        return self._state

    @property
    def phase(self) -> StorePhase:
        state = self._state
        if state.what_if_scenarios:
            return StorePhase.WHAT_IF_ACCUMULATING
        if state.current_prediction is not None:
            return StorePhase.PREDICTION_LOADED
        if state.current_profile is not None:
            return StorePhase.PROFILE_SET
        return StorePhase.IDLE

    def update_profile(self, profile: AthleteProfile) -> None:
        """Replace the profile and drop everything computed for the previous one.

        Always clears, even when the new profile equals the old one.
        """
        self._generation += 1
        self._state = replace(
            self._state,
            current_profile=profile,
            current_prediction=None,
            what_if_scenarios=(),
        )
        logger.info("Athlete profile updated", sex=str(profile.sex), age=profile.age, bodyweight=profile.bodyweight)

    async def get_prediction(self, profile: AthleteProfile | None = None) -> PredictionResponse:
        """Predict for *profile* (or the current profile) and store the result.

        Raises:
            ProfileNotSetError: If no profile is given and none is set
        """
        seq = self._prediction_seq = self._prediction_seq + 1
        generation = self._generation
        self._start()

        try:
            target = profile or self._state.current_profile
            if target is None:
                raise ProfileNotSetError("No profile provided for prediction")
            prediction = await self._service.get_prediction(PredictionRequest.from_profile(target))
        except Exception as e:
            if self._is_current(seq, generation):
                self._state = replace(self._state, error=str(e) or "Failed to get prediction")
            logger.error(f"Prediction failed: {e}")
            raise
        else:
            if self._is_current(seq, generation):
                self._state = replace(self._state, current_prediction=prediction, error=None)
                logger.info("Prediction retrieved successfully", total_pred=prediction.total_pred)
            else:
                logger.debug("Discarding stale prediction", seq=seq, latest_seq=self._prediction_seq)
            return prediction
        finally:
            self._finish()

    async def get_what_if_prediction(self, scenario: WhatIfScenario) -> PredictionResponse:
        """Predict a what-if scenario against the current profile and append it to history.

        The current prediction is left untouched; the base prediction stays
        available for side-by-side comparison.

        Raises:
            ProfileNotSetError: If no profile is set (the service is not called)
        """
        profile = self._state.current_profile
        if profile is None:
            raise ProfileNotSetError()

        generation = self._generation
        self._start()

        try:
            prediction = await self._service.get_what_if_prediction(profile, scenario)
        except Exception as e:
            if generation == self._generation:
                self._state = replace(self._state, error=str(e) or "Failed to get what-if prediction")
            logger.error(f"What-if prediction failed: {e}")
            raise
        else:
            if generation == self._generation:
                result = WhatIfResult(scenario=scenario, prediction=prediction)
                self._state = replace(
                    self._state, what_if_scenarios=(*self._state.what_if_scenarios, result), error=None
                )
                logger.info(
                    "What-if prediction retrieved", scenario_name=scenario.scenario_name, total_pred=prediction.total_pred
                )
            else:
                logger.debug("Discarding what-if result for a replaced profile", scenario_name=scenario.scenario_name)
            return prediction
        finally:
            self._finish()

    def clear_predictions(self) -> None:
        """Drop the stored prediction, history and error; keep the profile."""
        self._generation += 1
        self._state = replace(self._state, current_prediction=None, what_if_scenarios=(), error=None)
        logger.debug("Predictions cleared")

    def clear_error(self) -> None:
        self._state = replace(self._state, error=None)

    def _is_current(self, seq: int, generation: int) -> bool:
        return seq == self._prediction_seq and generation == self._generation

    def _start(self) -> None:
        self._in_flight += 1
        self._state = replace(self._state, is_loading=True, error=None)

    def _finish(self) -> None:
        # Runs for success, failure and cancellation alike
        self._in_flight -= 1
        self._state = replace(self._state, is_loading=self._in_flight > 0)
