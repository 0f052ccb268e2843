"""Meet log service: record competition results and derive progress data."""

from __future__ import annotations

import datetime as dt
import uuid
from collections.abc import Callable
from typing import Any

from loguru import logger

from strength_compass.core.errors import MeetNotFoundError
from strength_compass.meets.repository import MeetRepository
from strength_compass.schemas.meet import MeetEntry, MeetPerformance, MeetResult
from strength_compass.scoring.formatters import calculate_wilks

# Fields callers may never overwrite through update_meet
_IMMUTABLE_FIELDS = frozenset({"id", "athlete_id", "created_at", "updated_at"})


def _utc_now() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


class MeetLogService:
    """Meet log operations over an injected repository."""

    def __init__(
        self,
        repository: MeetRepository,
        *,
        clock: Callable[[], dt.datetime] = _utc_now,
        id_factory: Callable[[], str] = lambda: f"meet-{uuid.uuid4().hex[:12]}",
    ) -> None:
        self._repository = repository
        self._clock = clock
        self._id_factory = id_factory

    def get_meets(self, athlete_id: str) -> list[MeetEntry]:
        """All meets for an athlete, most recent meet date first."""
        meets = sorted(self._repository.list_for_athlete(athlete_id), key=lambda m: m.meet_date, reverse=True)
        logger.debug("Retrieved meets for athlete", athlete_id=athlete_id, count=len(meets))
        return meets

    def add_meet(self, result: MeetResult) -> MeetEntry:
        """Store a new meet result, deriving delta from predicted_total when not supplied."""
        now = self._clock()
        data = result.model_dump()
        if data["delta"] is None and result.predicted_total is not None:
            data["delta"] = result.actual_total - result.predicted_total

        entry = MeetEntry(**data, id=self._id_factory(), created_at=now, updated_at=now)
        self._repository.save(entry)
        logger.info("Meet added successfully", meet_id=entry.id, athlete_id=entry.athlete_id)
        return entry

    def update_meet(self, meet_id: str, updates: dict[str, Any]) -> MeetEntry:
        """Apply partial *updates* to a stored meet.

        Raises:
            MeetNotFoundError: If no meet has this id
            ValueError: If an update targets an immutable field
        """
        existing = self._repository.get(meet_id)
        if existing is None:
            raise MeetNotFoundError(meet_id)

        forbidden = _IMMUTABLE_FIELDS.intersection(updates)
        if forbidden:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(forbidden))}")

        updated = MeetEntry.model_validate({**existing.model_dump(), **updates, "updated_at": self._clock()})
        self._repository.save(updated)
        logger.info("Meet updated successfully", meet_id=meet_id)
        return updated

    def delete_meet(self, meet_id: str) -> None:
        """Remove a meet.

        Raises:
            MeetNotFoundError: If no meet has this id
        """
        if not self._repository.delete(meet_id):
            raise MeetNotFoundError(meet_id)
        logger.info("Meet deleted successfully", meet_id=meet_id)

    def get_progress_data(self, athlete_id: str, sex: str | None = None) -> list[MeetPerformance]:
        """Progress chart points, most recent first.

        Args:
            athlete_id: Athlete whose meets to chart
            sex: When given, entries without a stored Wilks score get one computed

        Returns:
            One MeetPerformance per meet; predicted falls back to total - delta
        """
        points: list[MeetPerformance] = []
        for meet in self.get_meets(athlete_id):
            wilks = meet.wilks_score
            if wilks is None:
                wilks = calculate_wilks(meet.actual_total, meet.bodyweight, sex) if sex else 0.0
            predicted = meet.predicted_total or meet.actual_total - (meet.delta or 0)
            points.append(
                MeetPerformance(
                    date=meet.meet_date,
                    total=meet.actual_total,
                    predicted=predicted,
                    bodyweight=meet.bodyweight,
                    wilks=wilks,
                    equipment=meet.equipment,
                )
            )
        return points
