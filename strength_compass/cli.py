"""Strength Compass developer CLI.

Runs the same prediction pipeline the app uses (validation, API call with
local fallback, derived display metrics) from the terminal.
"""

import asyncio
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from strength_compass.config.settings import settings
from strength_compass.core.constants import EQUIPMENT_OPTIONS, SEX_OPTIONS
from strength_compass.core.errors import ProfileValidationError
from strength_compass.core.logger import configure_from_settings
from strength_compass.integrations.predictor.client import ApiClient
from strength_compass.predictions.service import PredictionService
from strength_compass.predictions.store import PredictionStore
from strength_compass.schemas.athlete import AthleteProfile, Equipment, Sex
from strength_compass.schemas.prediction import PredictionResponse, WhatIfScenario
from strength_compass.scoring.formatters import format_weight, format_wilks
from strength_compass.scoring.metrics import compare_to_base, equity_insights, summarize_prediction
from strength_compass.validation.validators import validate_athlete_profile

console = Console()

app = typer.Typer(
    name="strength-compass",
    help="Strength Compass - powerlifting strength predictions",
    add_completion=False,
)

EQUIPMENT_LABELS = {o["value"]: o["label"] for o in EQUIPMENT_OPTIONS}
SEX_LABELS = {o["value"]: o["label"] for o in SEX_OPTIONS}

SexOption = typer.Option(
    ..., "--sex", "-s", help=", ".join(f"{value}={label}" for value, label in SEX_LABELS.items())
)
AgeOption = typer.Option(..., "--age", "-a", help="Age in years")
BodyweightOption = typer.Option(..., "--bodyweight", "-w", help="Bodyweight in kg")
EquipmentOption = typer.Option(
    Equipment.RAW,
    "--equipment",
    "-e",
    help="Equipment class: " + "; ".join(f"{o['value']} ({o['description']})" for o in EQUIPMENT_OPTIONS),
)


@app.callback()
def main() -> None:
    configure_from_settings()


def _build_profile(sex: Sex, age: int, bodyweight: float, equipment: Equipment) -> AthleteProfile:
    result = validate_athlete_profile(
        {"sex": sex.value, "age": age, "bodyweight": bodyweight, "equipment": equipment.value}
    )
    if not result.is_valid:
        raise ProfileValidationError(result.errors)
    return AthleteProfile(sex=sex, age=age, bodyweight=bodyweight, equipment=equipment)


def _print_validation_errors(errors: list[str]) -> None:
    console.print(Panel(Text("\n".join(f"- {e}" for e in errors), style="red"), title="Invalid profile", border_style="red"))


def _print_prediction(profile: AthleteProfile, prediction: PredictionResponse) -> None:
    summary = summarize_prediction(profile, prediction)

    table = Table(show_header=False, box=None)
    table.add_row("Predicted total", format_weight(summary.total))
    table.add_row("Squat / Bench / Deadlift", " / ".join(
        format_weight(v) for v in (summary.lifts.squat, summary.lifts.bench, summary.lifts.deadlift)
    ))
    table.add_row("Wilks", format_wilks(summary.wilks))
    table.add_row("Confidence", f"{summary.confidence * 100:.0f}%")
    table.add_row("Percentile", f"{summary.percentile:.0f}th ({summary.peer_bucket} bucket)")
    table.add_row("Potential range", f"±{format_weight(summary.range_half_width)}")
    table.add_row("Class", f"{summary.weight_class}, {summary.age_group}")
    table.add_row("Athlete", f"{SEX_LABELS[profile.sex]}, {EQUIPMENT_LABELS[profile.equipment]}")

    subtitle = "local estimate (API unavailable)" if summary.is_fallback else None
    console.print(Panel(table, title=f"Prediction: {summary.demographic}", subtitle=subtitle, border_style="green"))

    for insight in equity_insights(profile):
        console.print(f"[yellow]•[/yellow] {insight}")


@app.command()
def validate(
    sex: str = SexOption,
    age: int = AgeOption,
    bodyweight: float = BodyweightOption,
    equipment: str = typer.Option("Raw", "--equipment", "-e", help="Equipment class"),
) -> None:
    """Validate a profile and print every violation."""
    result = validate_athlete_profile({"sex": sex, "age": age, "bodyweight": bodyweight, "equipment": equipment})
    if not result.is_valid:
        _print_validation_errors(result.errors)
        raise typer.Exit(code=1)
    console.print("[green]✓ Profile is valid[/green]")


@app.command()
def predict(
    sex: Sex = SexOption,
    age: int = AgeOption,
    bodyweight: float = BodyweightOption,
    equipment: Equipment = EquipmentOption,
) -> None:
    """Predict a competition total for a profile."""
    try:
        profile = _build_profile(sex, age, bodyweight, equipment)
    except ProfileValidationError as e:
        _print_validation_errors(e.errors)
        raise typer.Exit(code=1) from e

    async def _run() -> PredictionResponse:
        async with ApiClient() as client:
            store = PredictionStore(PredictionService(client))
            store.update_profile(profile)
            return await store.get_prediction()

    _print_prediction(profile, asyncio.run(_run()))


@app.command()
def what_if(
    sex: Sex = SexOption,
    age: int = AgeOption,
    bodyweight: float = BodyweightOption,
    equipment: Equipment = EquipmentOption,
    age_delta: int = typer.Option(0, "--age-delta", min=-20, max=20, help="Years to add to age"),
    bodyweight_delta: float = typer.Option(0.0, "--bodyweight-delta", min=-30, max=30, help="Kg to add to bodyweight"),
    equipment_change: Optional[Equipment] = typer.Option(None, "--equipment-change", help="Equipment override"),
    name: Optional[str] = typer.Option(None, "--name", help="Scenario label"),
) -> None:
    """Compare a what-if scenario against the base prediction."""
    try:
        profile = _build_profile(sex, age, bodyweight, equipment)
    except ProfileValidationError as e:
        _print_validation_errors(e.errors)
        raise typer.Exit(code=1) from e

    scenario = WhatIfScenario(
        age_adjustment=age_delta,
        bodyweight_adjustment=bodyweight_delta,
        equipment_change=equipment_change,
        scenario_name=name,
    )
    if not scenario.has_changes:
        console.print("[yellow]Scenario has no changes; nothing to compare.[/yellow]")
        raise typer.Exit(code=1)

    async def _run() -> tuple[PredictionResponse, PredictionResponse]:
        async with ApiClient() as client:
            store = PredictionStore(PredictionService(client))
            store.update_profile(profile)
            base = await store.get_prediction()
            return base, await store.get_what_if_prediction(scenario)

    base, scenario_prediction = asyncio.run(_run())
    _print_prediction(profile, base)

    comparison = compare_to_base(base, scenario_prediction)
    style = {"success": "green", "danger": "red", "muted": "dim"}[comparison.display.color]
    console.print(
        f"What-if{f' ({name})' if name else ''}: {format_weight(comparison.scenario_total)} "
        f"[{style}]{comparison.display.text}[/{style}]"
    )


@app.command()
def health() -> None:
    """Check that the prediction API is reachable."""

    async def _run() -> bool:
        async with ApiClient() as client:
            return await client.health_check()

    if asyncio.run(_run()):
        console.print(f"[green]✓ Prediction API reachable at {settings.api_base_url}[/green]")
        return
    logger.warning("Health check failed", api_base_url=settings.api_base_url)
    console.print(f"[red]✗ Prediction API not reachable at {settings.api_base_url}[/red]")
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
