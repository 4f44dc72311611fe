"""
Interval and AvailabilitySet value types

All timestamps are naive datetimes. Aware datetimes coming off the wire are
normalised to naive UTC by parse_datetime so that intervals from different
sources stay comparable.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Tuple

from src.scheduler.errors import InvalidDuration, InvalidSlot


def parse_datetime(value: Any) -> datetime:
    """Parse an ISO-8601 string (or pass a datetime through) into a naive datetime"""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise InvalidSlot(f"Not proper datetime: {value}")
    else:
        raise InvalidSlot(f"Not proper datetime: {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def minutes_between(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() // 60)


@dataclass(frozen=True, order=True)
class Interval:
    """Half-open time range [start, start + duration) with duration in minutes"""
    start: datetime
    duration: int

    def __post_init__(self):
        if isinstance(self.duration, bool) or not isinstance(self.duration, int) or self.duration <= 0:
            raise InvalidDuration(f"Interval duration must be a positive integer, got {self.duration!r}")
        if self.start.second or self.start.microsecond:
            # Boundaries stay on whole minutes so merged and reconciled spans are exact
            raise InvalidSlot(f"Time slot must start on a whole minute, got {self.start.isoformat()}")

    @classmethod
    def between(cls, start: datetime, end: datetime) -> "Interval":
        return cls(start=start, duration=minutes_between(start, end))

    @property
    def end(self) -> datetime:
        return self.start + timedelta(minutes=self.duration)

    def contains(self, other: "Interval") -> bool:
        return self.start <= other.start and other.end <= self.end

    def overlaps(self, other: "Interval") -> bool:
        # Touching intervals do not overlap: end is exclusive
        return self.start < other.end and other.start < self.end

    def truncate(self, duration: int) -> "Interval":
        return Interval(start=self.start, duration=min(duration, self.duration))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "startDatetime": self.start.isoformat(),
            "endDatetime": self.end.isoformat(),
            "duration": self.duration,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Interval":
        """Build from the wire shape {"startDatetime"|"startTime": iso, "duration": minutes}"""
        if not isinstance(data, dict):
            raise InvalidSlot(f"Time slot must be an object, got {data!r}")
        raw_start = data.get("startDatetime", data.get("startTime"))
        if raw_start is None:
            raise InvalidSlot("Time slot is missing its start time")
        duration = data.get("duration")
        if isinstance(duration, str) and duration.strip().isdigit():
            duration = int(duration.strip())
        return cls(start=parse_datetime(raw_start), duration=duration)


def merge_intervals(intervals: Iterable[Interval]) -> List[Interval]:
    """Merge overlapping or touching intervals into a sorted, disjoint list"""
    merged: List[Interval] = []
    for interval in sorted(intervals):
        if merged and interval.start <= merged[-1].end:
            last = merged[-1]
            if interval.end > last.end:
                merged[-1] = Interval.between(last.start, interval.end)
        else:
            merged.append(interval)
    return merged


@dataclass(frozen=True)
class AvailabilitySet:
    """A participant's free intervals, sorted ascending by start"""
    owner: str
    intervals: Tuple[Interval, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "intervals", tuple(sorted(self.intervals)))

    @classmethod
    def from_slots(cls, owner: str, slots: Iterable[Dict[str, Any]]) -> "AvailabilitySet":
        return cls(owner=owner, intervals=tuple(Interval.from_dict(slot) for slot in slots))

    @property
    def is_empty(self) -> bool:
        return not self.intervals

    def has_overlaps(self) -> bool:
        return any(
            current.start <= previous.end
            for previous, current in zip(self.intervals, self.intervals[1:])
        )

    def merged(self) -> "AvailabilitySet":
        return AvailabilitySet(owner=self.owner, intervals=tuple(merge_intervals(self.intervals)))

    def total_minutes(self) -> int:
        return sum(interval.duration for interval in self.intervals)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "owner": self.owner,
            "timeSlots": [interval.to_dict() for interval in self.intervals],
        }
