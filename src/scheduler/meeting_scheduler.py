"""
Meeting Scheduler - orchestrates validation, storage, availability and reservation
"""
import logging
import time
from typing import Any, Dict, List, Optional

from config.settings import Config
from src.calendar.availability_store import InMemoryAvailabilityStore
from src.scheduler.errors import InvalidContact, InvalidIdentifier, InvalidSlot
from src.scheduler.interval import AvailabilitySet, Interval
from src.scheduler.meeting import Meeting
from src.scheduler.meeting_validator import MeetingRequestValidator
from src.scheduler.reservation_coordinator import ReservationCoordinator
from src.storage.meeting_repository import InMemoryMeetingRepository
from utils.meeting_logger import MeetingLogger
from utils.validators import DataSanitizer, RequestValidator

logger = logging.getLogger(__name__)


class MeetingScheduler:
    """
    Service facade used by the API and the CLI.

    Storage and availability default to the in-memory adapters; any objects
    with the same methods can be passed in instead.
    """

    def __init__(self, repository=None, availability_store=None,
                 validator: Optional[MeetingRequestValidator] = None):
        self.config = Config()
        self.repository = repository if repository is not None else InMemoryMeetingRepository()
        self.availability_store = (availability_store if availability_store is not None
                                   else InMemoryAvailabilityStore())
        self.validator = validator or MeetingRequestValidator()
        self.coordinator = ReservationCoordinator(
            self.availability_store,
            self.repository,
            max_workers=self.config.AVAILABILITY_MAX_WORKERS,
            merge_overlaps=self.config.MERGE_OVERLAPPING_INTERVALS,
        )
        logger.info("MeetingScheduler initialized")

    @staticmethod
    def _check_meeting_id(meeting_id: str) -> str:
        if not RequestValidator.validate_uuid(meeting_id):
            raise InvalidIdentifier()
        return meeting_id.lower()

    @staticmethod
    def _check_participant(participant: str) -> str:
        if not RequestValidator.validate_email(participant):
            raise InvalidContact([str(participant)])
        return DataSanitizer.sanitize_email(participant)

    @staticmethod
    def _log_summary(operation: str, meeting_id: Optional[str], result: Dict[str, Any], started: float):
        MeetingLogger.log_request_summary(operation, meeting_id, result, time.time() - started)

    # Meetings

    def create_meeting(self, payload: Dict[str, Any]) -> Meeting:
        started = time.time()
        request = self.validator.validate(payload)
        meeting = self.coordinator.create(request)
        self._log_summary("create", meeting.id, {"msg": "Meeting added", **meeting.to_dict()}, started)
        return meeting

    def get_meeting(self, meeting_id: str) -> Meeting:
        return self.repository.load_meeting(self._check_meeting_id(meeting_id))

    def update_meeting(self, meeting_id: str, payload: Dict[str, Any]) -> Meeting:
        started = time.time()
        meeting_id = self._check_meeting_id(meeting_id)
        request = self.validator.validate(payload)
        meeting = self.coordinator.update(meeting_id, request)
        self._log_summary("update", meeting_id, {"msg": "Meeting updated", **meeting.to_dict()}, started)
        return meeting

    def delete_meeting(self, meeting_id: str) -> Meeting:
        started = time.time()
        meeting = self.coordinator.delete(self._check_meeting_id(meeting_id))
        self._log_summary("delete", meeting.id, {"msg": "Meeting deleted", **meeting.to_dict()}, started)
        return meeting

    def candidate_slots(self, meeting_id: str) -> List[Interval]:
        meeting = self.get_meeting(meeting_id)
        return self.coordinator.candidate_slots(meeting)

    def pick_time_slot(self, meeting_id: str, payload: Dict[str, Any]) -> Meeting:
        """
        Reserve the slot described by {"startTime", "duration"}.

        When payload carries the "version" the client last saw, the reservation
        only succeeds if nobody changed the meeting since; without it the
        current version is used and the newest pick wins.
        """
        started = time.time()
        if not isinstance(payload, dict):
            raise InvalidSlot("Request body must be a JSON object")

        meeting = self.get_meeting(meeting_id)
        slot = Interval.from_dict(payload)

        version = payload.get("version")
        if version is not None:
            if isinstance(version, bool) or not isinstance(version, int):
                raise InvalidSlot("Version must be an integer")
            meeting.version = version

        reserved = self.coordinator.reserve(meeting, slot)
        self._log_summary("reserve", reserved.id, {"msg": "Meeting reserved", **reserved.to_dict()}, started)
        return reserved

    # Availability

    def set_availability(self, participant: str, slots: Any) -> AvailabilitySet:
        participant = self._check_participant(participant)
        if not isinstance(slots, list):
            raise InvalidSlot("timeSlots must be a list")
        availability = AvailabilitySet.from_slots(participant, slots)
        return self.availability_store.set_availability(participant, availability)

    def get_availability(self, participant: str) -> AvailabilitySet:
        return self.availability_store.load_availability(self._check_participant(participant))
