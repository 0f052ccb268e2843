"""Tests for the meet log service and in-memory repository."""

import datetime as dt
import itertools

import pytest
from pydantic import ValidationError

from strength_compass.core.errors import MeetNotFoundError
from strength_compass.meets.repository import InMemoryMeetRepository
from strength_compass.meets.service import MeetLogService
from strength_compass.schemas.meet import MeetResult
from strength_compass.scoring.formatters import calculate_wilks


def _result(**overrides) -> MeetResult:
    data = {
        "athlete_id": "athlete-1",
        "meet_name": "Spring Open",
        "meet_date": dt.date(2024, 3, 9),
        "federation": "USAPL",
        "weight_class": "74kg",
        "bodyweight": 73.4,
        "equipment": "Raw",
        "actual_squat": 200,
        "actual_bench": 130,
        "actual_deadlift": 235,
        "actual_total": 565,
    }
    return MeetResult(**{**data, **overrides})


@pytest.fixture
def meet_service(fixed_clock) -> MeetLogService:
    ids = itertools.count(1)
    return MeetLogService(InMemoryMeetRepository(), clock=fixed_clock, id_factory=lambda: f"meet-{next(ids)}")


def test_add_meet_assigns_id_and_timestamps(meet_service, fixed_clock):
    entry = meet_service.add_meet(_result())

    assert entry.id == "meet-1"
    assert entry.created_at == fixed_clock()
    assert entry.updated_at == fixed_clock()
    assert entry.delta is None


def test_add_meet_derives_delta_from_prediction(meet_service):
    entry = meet_service.add_meet(_result(predicted_total=550))

    assert entry.delta == 15


def test_add_meet_keeps_supplied_delta(meet_service):
    entry = meet_service.add_meet(_result(predicted_total=550, delta=10))

    assert entry.delta == 10


def test_get_meets_is_newest_first_and_scoped_to_athlete(meet_service):
    meet_service.add_meet(_result(meet_name="Old", meet_date=dt.date(2023, 5, 1)))
    meet_service.add_meet(_result(meet_name="New", meet_date=dt.date(2024, 10, 12)))
    meet_service.add_meet(_result(meet_name="Middle", meet_date=dt.date(2024, 3, 9)))
    meet_service.add_meet(_result(athlete_id="athlete-2", meet_name="Other"))

    assert [m.meet_name for m in meet_service.get_meets("athlete-1")] == ["New", "Middle", "Old"]
    assert [m.meet_name for m in meet_service.get_meets("athlete-2")] == ["Other"]
    assert meet_service.get_meets("nobody") == []


def test_update_meet_applies_changes():
    times = iter([dt.datetime(2024, 3, 10, tzinfo=dt.UTC), dt.datetime(2024, 3, 11, tzinfo=dt.UTC)])
    service = MeetLogService(InMemoryMeetRepository(), clock=lambda: next(times), id_factory=lambda: "meet-x")
    entry = service.add_meet(_result())

    updated = service.update_meet(entry.id, {"placement": 2, "notes": "PR deadlift"})

    assert updated.placement == 2
    assert updated.notes == "PR deadlift"
    assert updated.created_at == entry.created_at
    assert updated.updated_at == dt.datetime(2024, 3, 11, tzinfo=dt.UTC)
    assert service.get_meets("athlete-1") == [updated]


def test_update_unknown_meet_raises(meet_service):
    with pytest.raises(MeetNotFoundError, match="Meet not found"):
        meet_service.update_meet("missing", {"notes": "x"})


def test_update_rejects_immutable_fields(meet_service):
    entry = meet_service.add_meet(_result())

    with pytest.raises(ValueError, match="athlete_id"):
        meet_service.update_meet(entry.id, {"athlete_id": "someone-else"})


def test_update_revalidates_fields(meet_service):
    entry = meet_service.add_meet(_result())

    with pytest.raises(ValidationError):
        meet_service.update_meet(entry.id, {"actual_squat": 1200})


def test_delete_meet(meet_service):
    entry = meet_service.add_meet(_result())

    meet_service.delete_meet(entry.id)

    assert meet_service.get_meets("athlete-1") == []
    with pytest.raises(MeetNotFoundError):
        meet_service.delete_meet(entry.id)


def test_progress_data(meet_service):
    meet_service.add_meet(_result(meet_date=dt.date(2023, 5, 1), predicted_total=540, wilks_score=380.0))
    meet_service.add_meet(_result(meet_date=dt.date(2024, 3, 9), actual_total=580, delta=-20))

    points = meet_service.get_progress_data("athlete-1", sex="M")

    assert [p.date for p in points] == [dt.date(2024, 3, 9), dt.date(2023, 5, 1)]
    assert points[0].predicted == 600
    assert points[0].wilks == pytest.approx(calculate_wilks(580, 73.4, "M"))
    assert points[1].predicted == 540
    assert points[1].wilks == 380.0


def test_progress_data_without_sex_has_zero_wilks(meet_service):
    meet_service.add_meet(_result())

    [point] = meet_service.get_progress_data("athlete-1")

    assert point.wilks == 0.0
    assert point.predicted == 565


def test_repository_save_replaces_in_place(meet_service):
    repo = InMemoryMeetRepository()
    first = meet_service.add_meet(_result(meet_name="A"))
    second = meet_service.add_meet(_result(meet_name="B"))
    repo.save(first)
    repo.save(second)

    repo.save(first.model_copy(update={"meet_name": "A2"}))

    assert [m.meet_name for m in repo.list_for_athlete("athlete-1")] == ["A2", "B"]
    assert repo.get(second.id) == second
    assert repo.get("missing") is None
    assert repo.delete("missing") is False


def test_meet_result_bounds():
    with pytest.raises(ValidationError):
        _result(bodyweight=0)
    with pytest.raises(ValidationError):
        _result(placement=0)
