"""Meeting aggregate and its lifecycle state."""

import enum
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional

from src.scheduler.interval import Interval


class MeetingState(str, enum.Enum):
    PENDING = "pending"
    RESERVED = "reserved"
    DELETED = "deleted"


@dataclass
class Meeting:
    """
    A meeting between one guest and one or more hosts.

    Participants are referenced by e-mail address; their availability lives
    with the availability collaborator and is only read when reconciling.
    committed_slot is set only while state is RESERVED.
    """
    requested_duration: int
    hosts: List[str]
    guest: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    state: MeetingState = MeetingState.PENDING
    committed_slot: Optional[Interval] = None
    version: int = 0
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None

    @property
    def participants(self) -> List[str]:
        """Hosts followed by the guest, without duplicates"""
        seen = []
        for participant in self.hosts + [self.guest]:
            if participant not in seen:
                seen.append(participant)
        return seen

    @property
    def is_reserved(self) -> bool:
        return self.state is MeetingState.RESERVED

    @property
    def is_deleted(self) -> bool:
        return self.state is MeetingState.DELETED

    def copy(self) -> "Meeting":
        return replace(self, hosts=list(self.hosts))

    def edit(self, requested_duration: int, hosts: List[str], guest: str) -> "Meeting":
        """Return an edited copy; any edit drops a committed slot and re-opens the meeting"""
        return replace(
            self,
            requested_duration=requested_duration,
            hosts=list(hosts),
            guest=guest,
            state=MeetingState.PENDING,
            committed_slot=None,
            updated_at=datetime.now(),
        )

    def reserved(self, slot: Interval) -> "Meeting":
        return replace(
            self,
            hosts=list(self.hosts),
            state=MeetingState.RESERVED,
            committed_slot=slot,
            updated_at=datetime.now(),
        )

    def deleted(self) -> "Meeting":
        return replace(
            self,
            hosts=list(self.hosts),
            state=MeetingState.DELETED,
            committed_slot=None,
            updated_at=datetime.now(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uuid": self.id,
            "duration": self.requested_duration,
            "hosts": list(self.hosts),
            "guest": self.guest,
            "state": self.state.value,
            "startTime": self.committed_slot.start.isoformat() if self.committed_slot else None,
            "committedSlot": self.committed_slot.to_dict() if self.committed_slot else None,
            "version": self.version,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
