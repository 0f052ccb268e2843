"""Meet (competition) log."""

from strength_compass.meets.repository import InMemoryMeetRepository, MeetRepository
from strength_compass.meets.service import MeetLogService

__all__ = [
    "InMemoryMeetRepository",
    "MeetLogService",
    "MeetRepository",
]
