"""
Reservation Coordinator - commits one candidate slot onto a meeting

Every mutation of a meeting runs under that meeting's lock and checks the
caller's version against storage, so two reserve() calls made from the same
loaded meeting can never both succeed.
"""
import logging
import threading
import weakref
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from config.settings import Config
from src.scheduler.errors import (
    InvalidIdentifier,
    NotFound,
    SlotTooShort,
    SlotUnavailable,
    StaleMeeting,
)
from src.scheduler.interval import AvailabilitySet, Interval
from src.scheduler.meeting import Meeting
from src.scheduler.meeting_validator import MeetingRequest
from src.scheduler.slot_reconciler import find_containing_window, reconcile
from utils.meeting_logger import MeetingLogger

logger = logging.getLogger(__name__)


class ReservationCoordinator:
    """
    Serialises meeting mutations and validates reservations against live availability.

    availability_provider must offer load_availability(participant) -> AvailabilitySet.
    repository must offer load_meeting(id), persist_meeting(meeting) and delete_meeting(id).
    """

    def __init__(self, availability_provider, repository,
                 max_workers: Optional[int] = None, merge_overlaps: Optional[bool] = None):
        self.availability_provider = availability_provider
        self.repository = repository
        self.max_workers = max_workers or Config.AVAILABILITY_MAX_WORKERS
        self.merge_overlaps = merge_overlaps

        # Entries vanish once no call holds the lock
        self._locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    def _lock_for(self, meeting_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(meeting_id)
            if lock is None:
                lock = self._locks[meeting_id] = threading.Lock()
            return lock

    def load_availability_sets(self, participants: List[str]) -> List[AvailabilitySet]:
        """Load every participant's availability in parallel, preserving participant order"""
        if not participants:
            return []

        with ThreadPoolExecutor(max_workers=min(len(participants), self.max_workers)) as executor:
            futures = [
                executor.submit(self.availability_provider.load_availability, participant)
                for participant in participants
            ]
            # result() re-raises collaborator failures in the caller
            return [future.result() for future in futures]

    def candidate_slots(self, meeting: Meeting) -> List[Interval]:
        """Reconcile the live availability of the meeting's hosts and guest"""
        if meeting.is_deleted:
            raise NotFound(f"Meeting {meeting.id} has been deleted")

        participants = meeting.participants
        sets = self.load_availability_sets(participants)
        MeetingLogger.log_availability_analysis(meeting.id, dict(zip(participants, sets)))

        candidates = reconcile(sets, meeting.requested_duration, merge_overlaps=self.merge_overlaps)
        MeetingLogger.log_reconciliation(meeting.id, candidates, meeting.requested_duration)
        return candidates

    def create(self, request: MeetingRequest) -> Meeting:
        meeting = Meeting(requested_duration=request.duration, hosts=request.hosts, guest=request.guest)
        if request.uuid:
            meeting.id = request.uuid

        with self._lock_for(meeting.id):
            try:
                self.repository.load_meeting(meeting.id)
            except NotFound:
                self.repository.persist_meeting(meeting)
            else:
                raise InvalidIdentifier("Meeting already exists")

        logger.info(f"Meeting {meeting.id} created for {len(meeting.participants)} participants")
        return meeting

    def update(self, meeting_id: str, request: MeetingRequest) -> Meeting:
        """Replace duration and participants; a reserved meeting goes back to pending"""
        with self._lock_for(meeting_id):
            stored = self.repository.load_meeting(meeting_id)
            edited = stored.edit(request.duration, request.hosts, request.guest)
            edited.version = stored.version + 1
            self.repository.persist_meeting(edited)

        if stored.is_reserved:
            logger.info(f"Meeting {meeting_id} edited after reservation, re-opened for reconciliation")
        return edited

    def reserve(self, meeting: Meeting, candidate_slot: Interval) -> Meeting:
        """
        Commit candidate_slot as the meeting's time.

        The committed slot starts at candidate_slot.start and lasts exactly the
        requested duration. Raises SlotTooShort, SlotUnavailable, StaleMeeting
        or NotFound; on any failure the stored meeting is left unchanged.
        """
        if meeting.is_deleted:
            raise NotFound(f"Meeting {meeting.id} has been deleted")

        if candidate_slot.duration < meeting.requested_duration:
            error = SlotTooShort(f"Time slot lasts {candidate_slot.duration} minutes, "
                                 f"meeting needs {meeting.requested_duration}")
            MeetingLogger.log_reservation_decision(meeting.id, candidate_slot, False, error.message)
            raise error

        with self._lock_for(meeting.id):
            stored = self.repository.load_meeting(meeting.id)
            if stored.version != meeting.version:
                error = StaleMeeting(f"Meeting {meeting.id} changed (version {meeting.version} "
                                     f"-> {stored.version}), reload and retry")
                MeetingLogger.log_reservation_decision(meeting.id, candidate_slot, False, error.message)
                raise error

            candidates = self.candidate_slots(stored)
            if find_containing_window(candidates, candidate_slot) is None:
                error = SlotUnavailable()
                MeetingLogger.log_reservation_decision(meeting.id, candidate_slot, False, error.message)
                raise error

            reserved = stored.reserved(candidate_slot.truncate(stored.requested_duration))
            reserved.version = stored.version + 1
            self.repository.persist_meeting(reserved)

        MeetingLogger.log_reservation_decision(meeting.id, reserved.committed_slot, True)
        return reserved

    def delete(self, meeting_id: str) -> Meeting:
        with self._lock_for(meeting_id):
            stored = self.repository.load_meeting(meeting_id)
            self.repository.delete_meeting(meeting_id)

        logger.info(f"Meeting {meeting_id} deleted")
        return stored.deleted()
