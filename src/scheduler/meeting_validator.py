"""
Meeting request validation - an ordered pipeline of typed checks

Each validator takes the raw payload and returns None or a ValidationError.
They run in a fixed order: guest contact, hosts present, host contacts,
duration, identifier. validate() raises the first error found;
collect_errors() returns all of them.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from config.settings import Config
from src.scheduler.errors import (
    InvalidContact,
    InvalidDuration,
    InvalidIdentifier,
    NoHosts,
    ValidationError,
)
from utils.validators import DataSanitizer, RequestValidator

logger = logging.getLogger(__name__)

Validator = Callable[[Dict[str, Any]], Optional[ValidationError]]


@dataclass
class MeetingRequest:
    """A validated, normalised meeting payload"""
    duration: int
    hosts: List[str]
    guest: str
    uuid: Optional[str] = None


def _hosts_of(payload: Dict[str, Any]) -> List[Any]:
    hosts = payload.get("hosts")
    if isinstance(hosts, str):
        return [hosts]
    if isinstance(hosts, (list, tuple)):
        return list(hosts)
    return []


def check_guest_contact(payload: Dict[str, Any]) -> Optional[ValidationError]:
    guest = payload.get("guest")
    if not RequestValidator.validate_email(guest):
        return InvalidContact([str(guest)], "Guest mail is not valid mail")
    return None


def check_hosts_present(payload: Dict[str, Any]) -> Optional[ValidationError]:
    if not _hosts_of(payload):
        return NoHosts()
    return None


def check_host_contacts(payload: Dict[str, Any]) -> Optional[ValidationError]:
    invalid = RequestValidator.invalid_emails(_hosts_of(payload))
    if invalid:
        return InvalidContact(invalid)
    return None


def check_duration(payload: Dict[str, Any]) -> Optional[ValidationError]:
    duration = RequestValidator.parse_positive_int(payload.get("duration"))
    if duration is None:
        return InvalidDuration()
    if duration < Config.MIN_MEETING_DURATION:
        return InvalidDuration(f"Duration must be at least {Config.MIN_MEETING_DURATION} minutes")
    if duration > Config.MAX_MEETING_DURATION:
        return InvalidDuration(f"Duration must not exceed {Config.MAX_MEETING_DURATION} minutes")
    return None


def check_identifier(payload: Dict[str, Any]) -> Optional[ValidationError]:
    identifier = payload.get("uuid")
    if identifier is not None and not RequestValidator.validate_uuid(identifier):
        return InvalidIdentifier()
    return None


class MeetingRequestValidator:
    """Runs the declared validators in order over a meeting payload"""

    VALIDATORS: List[Validator] = [
        check_guest_contact,
        check_hosts_present,
        check_host_contacts,
        check_duration,
        check_identifier,
    ]

    def __init__(self, validators: Optional[List[Validator]] = None):
        self.validators = list(validators) if validators is not None else list(self.VALIDATORS)

    def collect_errors(self, payload: Any) -> List[ValidationError]:
        if not isinstance(payload, dict):
            return [ValidationError("Request body must be a JSON object")]
        errors = []
        for validator in self.validators:
            error = validator(payload)
            if error is not None:
                errors.append(error)
        return errors

    def validate(self, payload: Any) -> MeetingRequest:
        errors = self.collect_errors(payload)
        if errors:
            logger.info(f"Meeting request rejected ({len(errors)} problems): {errors[0].message}")
            raise errors[0]

        identifier = payload.get("uuid")
        return MeetingRequest(
            duration=RequestValidator.parse_positive_int(payload["duration"]),
            hosts=DataSanitizer.sanitize_emails(_hosts_of(payload)),
            guest=DataSanitizer.sanitize_email(payload["guest"]),
            uuid=identifier.lower() if identifier else None,
        )


def validate_meeting_request(payload: Any) -> MeetingRequest:
    """Validate a raw payload, raising the first ValidationError in pipeline order"""
    return MeetingRequestValidator().validate(payload)
