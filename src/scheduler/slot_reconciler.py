"""
Slot Reconciler - intersects participants' availability into candidate meeting windows

reconcile() is a pure function: it holds no state and touches no I/O, so it
can run on any thread or worker.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from config.settings import Config
from src.scheduler.errors import InvalidDuration
from src.scheduler.interval import AvailabilitySet, Interval

logger = logging.getLogger(__name__)

# Ends sort before starts at the same instant, which gives half-open semantics
_END = -1
_START = 1


def _boundary_events(sets: Sequence[AvailabilitySet]) -> List[Tuple[datetime, int]]:
    events = []
    for availability in sets:
        for interval in availability.intervals:
            events.append((interval.start, _START))
            events.append((interval.end, _END))
    events.sort()
    return events


def _sweep(events: List[Tuple[datetime, int]], participants: int) -> List[Tuple[datetime, datetime]]:
    """Return maximal ranges during which all participants are free"""
    windows: List[Tuple[datetime, datetime]] = []
    free_count = 0
    window_start: Optional[datetime] = None

    for moment, delta in events:
        was_universal = free_count >= participants
        free_count += delta
        is_universal = free_count >= participants

        if is_universal and not was_universal:
            window_start = moment
        elif was_universal and not is_universal:
            if windows and windows[-1][1] == window_start:
                # Closed and reopened at the same instant: one continuous window
                windows[-1] = (windows[-1][0], moment)
            elif moment > window_start:
                windows.append((window_start, moment))
            window_start = None

    return windows


def reconcile(sets: Sequence[AvailabilitySet], min_duration: int,
              merge_overlaps: Optional[bool] = None) -> List[Interval]:
    """
    Compute the windows in which every availability set is free for at least
    min_duration minutes.

    Args:
        sets: one AvailabilitySet per participant
        min_duration: minimum window length in minutes
        merge_overlaps: merge overlapping/touching intervals inside each set
            before sweeping (defaults to Config.MERGE_OVERLAPPING_INTERVALS)

    Returns:
        Maximal common intervals, ascending by start. Empty when there is no
        common time, including when sets is empty.
    """
    if isinstance(min_duration, bool) or not isinstance(min_duration, int) or min_duration <= 0:
        raise InvalidDuration(f"Minimum duration must be a positive integer, got {min_duration!r}")

    if not sets:
        return []

    if merge_overlaps is None:
        merge_overlaps = Config.MERGE_OVERLAPPING_INTERVALS

    if merge_overlaps:
        sets = [availability.merged() for availability in sets]

    if any(availability.is_empty for availability in sets):
        logger.debug("At least one participant has no free time, nothing to reconcile")
        return []

    windows = _sweep(_boundary_events(sets), len(sets))
    minimum = timedelta(minutes=min_duration)

    candidates = [
        Interval.between(start, end)
        for start, end in windows
        if end - start >= minimum
    ]

    logger.debug(f"Reconciled {len(sets)} availability sets: "
                 f"{len(windows)} common windows, {len(candidates)} >= {min_duration} min")
    return candidates


def find_containing_window(candidates: Sequence[Interval], slot: Interval) -> Optional[Interval]:
    """Return the candidate window that fully contains slot, if any"""
    for window in candidates:
        if window.contains(slot):
            return window
        if window.start > slot.start:
            break
    return None
