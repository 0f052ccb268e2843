"""Local heuristic prediction used when the remote model cannot be reached.

The result is randomized (a ±5% noise band on the total, plus a random
confidence and percentile). Pass a seeded random.Random for reproducible
output. Draw order is fixed: noise, confidence, percentile.
"""

from __future__ import annotations

import datetime as dt
import math
import random

from strength_compass.core.constants import BENCH_SHARE, DEADLIFT_SHARE, FALLBACK_MODEL_VERSION, SQUAT_SHARE
from strength_compass.schemas.athlete import Equipment, Sex
from strength_compass.schemas.prediction import PredictionMetadata, PredictionRequest, PredictionResponse

BASE_TOTAL_KG = 400.0
MALE_BONUS_KG = 150.0

PEAK_AGE = 28
AGE_DECLINE_PER_YEAR = 0.015
MIN_AGE_FACTOR = 0.7

REFERENCE_BODYWEIGHT_KG = 70.0
MIN_WEIGHT_FACTOR = 0.5
MAX_WEIGHT_FACTOR = 2.0

NOISE_FRACTION = 0.1

EQUIPMENT_MULTIPLIERS: dict[str, float] = {
    Equipment.RAW: 1.0,
    Equipment.WRAPS: 1.1,
    Equipment.SINGLE_PLY: 1.2,
    Equipment.MULTI_PLY: 1.4,
    Equipment.STRAPS: 1.05,
    Equipment.UNLIMITED: 1.5,
}

INTERVAL_LOW = 0.9
INTERVAL_HIGH = 1.1

MIN_CONFIDENCE = 0.75
CONFIDENCE_SPAN = 0.2
MIN_PERCENTILE = 50
MAX_PERCENTILE = 80

FEATURES_USED = ["sex", "age", "bodyweight", "equipment"]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up (not to even)."""
    return math.floor(value + 0.5)


def age_factor(age: float) -> float:
    return max(MIN_AGE_FACTOR, 1 - abs(age - PEAK_AGE) * AGE_DECLINE_PER_YEAR)


def weight_factor(bodyweight: float) -> float:
    return max(MIN_WEIGHT_FACTOR, min(MAX_WEIGHT_FACTOR, bodyweight / REFERENCE_BODYWEIGHT_KG))


def equipment_multiplier(equipment: str) -> float:
    return EQUIPMENT_MULTIPLIERS.get(equipment, 1.0)


def deterministic_total(request: PredictionRequest) -> float:
    """Heuristic total before the noise term is applied."""
    base = BASE_TOTAL_KG
    if request.sex == Sex.MALE:
        base += MALE_BONUS_KG
    base *= age_factor(request.age)
    base *= weight_factor(request.bw)
    base *= equipment_multiplier(request.equip)
    return base


def compute_fallback_prediction(
    request: PredictionRequest,
    rng: random.Random | None = None,
    now: dt.datetime | None = None,
) -> PredictionResponse:
    """Build a PredictionResponse from the heuristic formula.

    Args:
        request: The request that could not be served remotely
        rng: Random source; a fresh unseeded one when omitted
        now: Timestamp recorded in metadata; current UTC time when omitted

    Returns:
        PredictionResponse tagged with model_version "fallback-v1.0"
    """
    rng = rng or random.Random()
    now = now or dt.datetime.now(dt.UTC)

    base = deterministic_total(request)
    variance = base * NOISE_FRACTION
    total = round_half_up(base + (rng.random() - 0.5) * variance)

    confidence = MIN_CONFIDENCE + rng.random() * CONFIDENCE_SPAN
    percentile = rng.randint(MIN_PERCENTILE, MAX_PERCENTILE)

    return PredictionResponse(
        total_pred=total,
        squat_pred=round_half_up(total * SQUAT_SHARE),
        bench_pred=round_half_up(total * BENCH_SHARE),
        deadlift_pred=round_half_up(total * DEADLIFT_SHARE),
        pi_low=round_half_up(total * INTERVAL_LOW),
        pi_high=round_half_up(total * INTERVAL_HIGH),
        confidence=confidence,
        percentile=percentile,
        metadata=PredictionMetadata(
            model_version=FALLBACK_MODEL_VERSION,
            prediction_date=now.isoformat(),
            features_used=list(FEATURES_USED),
        ),
    )
