"""Display formatters and scoring helpers.

Pure functions over raw numbers: Wilks score, age group, weight class and
the strings shown next to predictions.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Literal

from strength_compass.core.constants import KG_TO_LBS
from strength_compass.schemas.athlete import Sex

# Simplified, non-official Wilks polynomials; index i multiplies bodyweight**i
WILKS_COEFFICIENTS_FEMALE: tuple[float, ...] = (
    -125.425539779,
    13.71219419,
    -0.03307250631,
    -0.001050400051,
    9.38773881e-06,
    -2.3334613e-08,
)
WILKS_COEFFICIENTS_MALE: tuple[float, ...] = (
    -216.0475144,
    16.2606339,
    -0.002388645,
    -0.00113732,
    7.01863e-06,
    -1.291e-08,
)

FEMALE_WEIGHT_CLASSES: tuple[int, ...] = (47, 52, 57, 63, 69, 76, 84)
MALE_WEIGHT_CLASSES: tuple[int, ...] = (59, 66, 74, 83, 93, 105, 120)


@dataclass(frozen=True)
class DeltaDisplay:
    text: str
    color: Literal["success", "danger", "muted"]


def calculate_wilks(total: float, bodyweight: float, sex: Sex | str) -> float:
    """Bodyweight-normalized score: total * 500 / polynomial(bodyweight).

    The female polynomial is used for "F"; "M" and "Mx" share the other one.
    """
    coefficients = WILKS_COEFFICIENTS_FEMALE if sex == Sex.FEMALE else WILKS_COEFFICIENTS_MALE
    coeff = 0.0
    for i, c in enumerate(coefficients):
        coeff += c * bodyweight**i
    return total * 500 / coeff


def get_age_group(age: int) -> str:
    if age < 20:
        return "Junior"
    if age < 24:
        return "Sub-Junior"
    if age < 40:
        return "Open"
    if age < 50:
        return "Masters 1"
    if age < 60:
        return "Masters 2"
    if age < 70:
        return "Masters 3"
    return "Masters 4+"


def get_weight_class(bodyweight: float, sex: Sex | str) -> str:
    """IPF weight class (simplified) containing *bodyweight*."""
    classes = FEMALE_WEIGHT_CLASSES if sex == Sex.FEMALE else MALE_WEIGHT_CLASSES
    for limit in classes:
        if bodyweight <= limit:
            return f"{limit}kg"
    return f"{classes[-1]}kg+"


def format_weight(weight: float, unit: Literal["kg", "lbs"] = "kg") -> str:
    if unit == "lbs":
        return f"{weight * KG_TO_LBS:.1f} lbs"
    return f"{weight:.1f} kg"


def format_wilks(wilks: float) -> str:
    return f"{wilks:.1f}"


def format_percentage(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}%"


def format_date(value: dt.date | str) -> str:
    """Format as e.g. "May 15, 2024". Accepts a date or an ISO string."""
    d = _parse_date(value)
    return f"{d:%b} {d.day}, {d.year}"


def format_relative_date(value: dt.date | str, now: dt.datetime | None = None) -> str:
    """Human relative date ("Today", "3 days ago", "2 months ago", ...)."""
    now = now or dt.datetime.now(dt.UTC)
    then = value if isinstance(value, dt.datetime) else _parse_datetime(value, now.tzinfo)
    # A naive side is read in the other side's zone
    if then.tzinfo is None and now.tzinfo is not None:
        then = then.replace(tzinfo=now.tzinfo)
    elif now.tzinfo is None and then.tzinfo is not None:
        now = now.replace(tzinfo=then.tzinfo)
    diff_days = (now - then).days

    if diff_days == 0:
        return "Today"
    if diff_days == 1:
        return "Yesterday"
    if diff_days < 7:
        return f"{diff_days} days ago"
    if diff_days < 30:
        return f"{diff_days // 7} weeks ago"
    if diff_days < 365:
        return f"{diff_days // 30} months ago"
    return f"{diff_days // 365} years ago"


def format_delta(delta: float, unit: str = "kg") -> DeltaDisplay:
    """Signed difference with a display color (positive is good)."""
    if delta > 0:
        return DeltaDisplay(text=f"+{abs(delta):.1f} {unit}", color="success")
    if delta < 0:
        return DeltaDisplay(text=f"-{abs(delta):.1f} {unit}", color="danger")
    return DeltaDisplay(text=f"{abs(delta):.1f} {unit}", color="muted")


def _parse_date(value: dt.date | str) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    return dt.datetime.fromisoformat(value).date()


def _parse_datetime(value: dt.date | str, tzinfo: dt.tzinfo | None) -> dt.datetime:
    if isinstance(value, dt.date):
        return dt.datetime(value.year, value.month, value.day, tzinfo=tzinfo)
    return dt.datetime.fromisoformat(value)
