"""
In-memory meeting repository

Stands in for the persistence collaborator. Meetings are copied on the way
in and out so callers never share mutable state with storage.
"""
import logging
import threading
from typing import Dict

from src.scheduler.errors import NotFound, PersistenceError
from src.scheduler.meeting import Meeting

logger = logging.getLogger(__name__)


class InMemoryMeetingRepository:
    """Thread-safe meeting storage keyed by meeting id"""

    def __init__(self):
        self._lock = threading.Lock()
        self._meetings: Dict[str, Meeting] = {}

    def load_meeting(self, meeting_id: str) -> Meeting:
        with self._lock:
            meeting = self._meetings.get(meeting_id)
        if meeting is None:
            raise NotFound(f"Meeting {meeting_id} not found")
        return meeting.copy()

    def persist_meeting(self, meeting: Meeting) -> None:
        if meeting.is_deleted:
            raise PersistenceError(f"Meeting {meeting.id} is deleted and cannot be stored")
        with self._lock:
            self._meetings[meeting.id] = meeting.copy()
        logger.debug(f"Persisted meeting {meeting.id} (state={meeting.state.value}, v{meeting.version})")

    def delete_meeting(self, meeting_id: str) -> None:
        with self._lock:
            if meeting_id not in self._meetings:
                raise NotFound(f"Meeting {meeting_id} not found")
            del self._meetings[meeting_id]
        logger.debug(f"Deleted meeting {meeting_id}")
