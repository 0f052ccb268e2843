"""Derived display metrics for a stored prediction.

Everything here is computed from a profile plus a PredictionResponse and
must behave the same whether the prediction came from the remote model or
the local fallback.
"""

from __future__ import annotations

from dataclasses import dataclass

from strength_compass.core.constants import BENCH_SHARE, DEADLIFT_SHARE, SQUAT_SHARE
from strength_compass.schemas.athlete import AthleteProfile, Equipment, Sex
from strength_compass.schemas.prediction import PredictionResponse
from strength_compass.scoring.formatters import (
    DeltaDisplay,
    calculate_wilks,
    format_delta,
    get_age_group,
    get_weight_class,
)


DEFAULT_PERCENTILE = 65.0
DEFAULT_CONFIDENCE = 0.85
DEFAULT_RANGE_HALF_WIDTH_KG = 15.0
MASTERS_AGE = 40

_SEX_LABELS = {Sex.FEMALE: "female", Sex.MALE: "male", Sex.MIXED: "mixed"}


@dataclass(frozen=True)
class LiftBreakdown:
    squat: float
    bench: float
    deadlift: float


@dataclass(frozen=True)
class PredictionSummary:
    total: float
    lifts: LiftBreakdown
    wilks: float
    age_group: str
    weight_class: str
    percentile: float
    confidence: float
    range_half_width: float
    peer_bucket: str
    demographic: str
    sex_label: str
    is_fallback: bool


@dataclass(frozen=True)
class DistributionPoint:
    percentile: str
    value: int
    is_user: bool


@dataclass(frozen=True)
class ScenarioComparison:
    base_total: float
    scenario_total: float
    delta: float
    display: DeltaDisplay


def lift_breakdown(prediction: PredictionResponse) -> LiftBreakdown:
    """Per-lift predictions, estimated from the total when the response omits them."""
    total = prediction.total_pred
    return LiftBreakdown(
        squat=prediction.squat_pred or total * SQUAT_SHARE,
        bench=prediction.bench_pred or total * BENCH_SHARE,
        deadlift=prediction.deadlift_pred or total * DEADLIFT_SHARE,
    )


def peer_bucket(percentile: float) -> str:
    """Decile label a percentile falls into, e.g. 67 -> "70th"."""
    return f"{int(percentile / 10 + 0.5) * 10}th"


def summarize_prediction(profile: AthleteProfile, prediction: PredictionResponse) -> PredictionSummary:
    age_group = get_age_group(profile.age)
    percentile = prediction.percentile or DEFAULT_PERCENTILE
    if prediction.pi_low and prediction.pi_high:
        half_width = (prediction.pi_high - prediction.pi_low) / 2
    else:
        half_width = DEFAULT_RANGE_HALF_WIDTH_KG

    return PredictionSummary(
        total=prediction.total_pred,
        lifts=lift_breakdown(prediction),
        wilks=calculate_wilks(prediction.total_pred, profile.bodyweight, profile.sex),
        age_group=age_group,
        weight_class=profile.weight_class or get_weight_class(profile.bodyweight, profile.sex),
        percentile=percentile,
        confidence=prediction.confidence or DEFAULT_CONFIDENCE,
        range_half_width=half_width,
        peer_bucket=peer_bucket(percentile),
        demographic=f"{profile.sex}, {age_group}, {profile.equipment}",
        sex_label=_SEX_LABELS[profile.sex],
        is_fallback=prediction.is_fallback,
    )


def peer_distribution(user_value: float, percentile: float) -> list[DistributionPoint]:
    """Decile distribution (10th..90th) implied by the user's total and percentile."""
    if percentile <= 0:
        raise ValueError("percentile must be positive")
    base_value = user_value / (percentile / 100)
    return [
        DistributionPoint(
            percentile=f"{i}th",
            value=int(base_value * (i / 100) + 0.5),
            is_user=abs(i - percentile) < 5,
        )
        for i in range(10, 100, 10)
    ]


def equity_insights(profile: AthleteProfile) -> list[str]:
    """Context messages about equity factors relevant to this athlete."""
    insights: list[str] = []

    if profile.sex == Sex.FEMALE:
        insights.append(
            "Women in powerlifting often face unique challenges including equipment access and societal stereotypes. "
            "Your predicted potential is based on data from thousands of female athletes who have overcome these barriers."
        )

    if profile.age > MASTERS_AGE:
        insights.append(
            "Masters athletes (40+) bring unique advantages including experience and consistency. "
            "Age-related strength decline is typically gradual and can be mitigated with proper training."
        )

    if profile.equipment == Equipment.RAW:
        insights.append(
            "Raw powerlifting represents the most accessible form of the sport, requiring minimal equipment. "
            "This creates a more level playing field across economic backgrounds."
        )

    return insights


def compare_to_base(base: PredictionResponse, scenario: PredictionResponse) -> ScenarioComparison:
    """Difference between a what-if prediction and the base prediction it started from."""
    delta = scenario.total_pred - base.total_pred
    return ScenarioComparison(
        base_total=base.total_pred,
        scenario_total=scenario.total_pred,
        delta=delta,
        display=format_delta(delta),
    )
