"""
In-memory availability store

Holds each participant's free time slots. It stands in for the calendar
collaborator: the scheduling core only ever calls load_availability().
"""
import logging
import threading
from typing import Dict, Iterable, Union

from src.scheduler.interval import AvailabilitySet, Interval

logger = logging.getLogger(__name__)


class InMemoryAvailabilityStore:
    """Thread-safe map of participant e-mail -> AvailabilitySet"""

    def __init__(self, initial: Dict[str, Iterable[Interval]] = None):
        self._lock = threading.Lock()
        self._sets: Dict[str, AvailabilitySet] = {}
        for participant, intervals in (initial or {}).items():
            self.set_availability(participant, intervals)

    @staticmethod
    def _key(participant: str) -> str:
        return participant.strip().lower()

    def load_availability(self, participant: str) -> AvailabilitySet:
        """Return the participant's availability; unknown participants have no free time"""
        key = self._key(participant)
        with self._lock:
            availability = self._sets.get(key)
        if availability is None:
            logger.debug(f"No availability recorded for {key}")
            return AvailabilitySet(owner=key)
        return availability

    def set_availability(self, participant: str,
                         intervals: Union[AvailabilitySet, Iterable[Interval]]) -> AvailabilitySet:
        key = self._key(participant)
        if isinstance(intervals, AvailabilitySet):
            intervals = intervals.intervals
        availability = AvailabilitySet(owner=key, intervals=tuple(intervals))
        with self._lock:
            self._sets[key] = availability
        logger.info(f"Availability updated for {key}: {len(availability.intervals)} slots, "
                    f"{availability.total_minutes()} free minutes")
        return availability
