"""Repository for meet log entries.

Storage is an explicit object injected into MeetLogService, so each session
or test case owns an isolated instance.
"""

from __future__ import annotations

from typing import Protocol

from strength_compass.schemas.meet import MeetEntry


class MeetRepository(Protocol):
    def list_for_athlete(self, athlete_id: str) -> list[MeetEntry]: ...

    def get(self, meet_id: str) -> MeetEntry | None: ...

    def save(self, entry: MeetEntry) -> MeetEntry: ...

    def delete(self, meet_id: str) -> bool: ...


class InMemoryMeetRepository:
    """Dict-backed MeetRepository keyed by athlete, preserving insertion order."""

    def __init__(self, entries: list[MeetEntry] | None = None) -> None:
        self._by_athlete: dict[str, list[MeetEntry]] = {}
        for entry in entries or []:
            self.save(entry)

    def list_for_athlete(self, athlete_id: str) -> list[MeetEntry]:
        return list(self._by_athlete.get(athlete_id, []))

    def get(self, meet_id: str) -> MeetEntry | None:
        for entries in self._by_athlete.values():
            for entry in entries:
                if entry.id == meet_id:
                    return entry
        return None

    def save(self, entry: MeetEntry) -> MeetEntry:
        """Insert *entry*, or replace the stored entry with the same id in place."""
        entries = self._by_athlete.setdefault(entry.athlete_id, [])
        for i, existing in enumerate(entries):
            if existing.id == entry.id:
                entries[i] = entry
                return entry
        entries.append(entry)
        return entry

    def delete(self, meet_id: str) -> bool:
        for entries in self._by_athlete.values():
            for i, entry in enumerate(entries):
                if entry.id == meet_id:
                    del entries[i]
                    return True
        return False
