"""
Error taxonomy for meeting validation, reconciliation and reservation
"""
from typing import List, Optional


class SchedulingError(Exception):
    """Base class for every error the scheduling core raises"""

    code = "scheduling_error"
    default_message = "Scheduling error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {"msg": self.message, "code": self.code}


class ValidationError(SchedulingError):
    code = "validation_error"
    default_message = "Invalid meeting request"


class InvalidDuration(ValidationError):
    code = "invalid_duration"
    default_message = "Duration is not proper integer"


class NoHosts(ValidationError):
    code = "no_hosts"
    default_message = "There must be at least one host in the meeting"


class InvalidContact(ValidationError):
    code = "invalid_contact"

    def __init__(self, addresses: List[str], message: Optional[str] = None):
        self.addresses = list(addresses)
        super().__init__(message or f"These are not valid mails: {', '.join(self.addresses)}")

    def to_dict(self):
        data = super().to_dict()
        data["addresses"] = self.addresses
        return data


class InvalidIdentifier(ValidationError):
    code = "invalid_identifier"
    default_message = "Not proper UUID"


class InvalidSlot(ValidationError):
    code = "invalid_slot"
    default_message = "Time slot is not valid"


class ReservationError(SchedulingError):
    code = "reservation_error"
    default_message = "Meeting could not be reserved"


class SlotTooShort(ReservationError):
    code = "slot_too_short"
    default_message = "Time slot is shorter than the meeting duration"


class SlotUnavailable(ReservationError):
    code = "slot_unavailable"
    default_message = "Time slot is not available for all participants"


class StaleMeeting(ReservationError):
    code = "stale_meeting"
    default_message = "Meeting was modified by another request"


class NotFound(SchedulingError):
    code = "not_found"
    default_message = "Meeting not found"


class PersistenceError(SchedulingError):
    code = "persistence_error"
    default_message = "Storage failure"
