"""
Validation utilities for the Meeting Reserver
"""
import re
import uuid
from typing import Any, List, Optional


class RequestValidator:
    """Field-level checks used by the meeting request pipeline"""

    EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')

    @staticmethod
    def validate_email(email: Any) -> bool:
        """Validate email format"""
        if not isinstance(email, str):
            return False
        return bool(RequestValidator.EMAIL_PATTERN.match(email.strip()))

    @staticmethod
    def invalid_emails(emails: List[Any]) -> List[str]:
        """Return every address in emails that is not a valid mail, in input order"""
        return [str(email) for email in emails if not RequestValidator.validate_email(email)]

    @staticmethod
    def validate_uuid(value: Any) -> bool:
        """Validate a canonical, hyphenated UUID string"""
        if not isinstance(value, str):
            return False
        try:
            return str(uuid.UUID(value)) == value.lower()
        except ValueError:
            return False

    @staticmethod
    def parse_positive_int(value: Any) -> Optional[int]:
        """Return value as a positive int, or None when it is not one"""
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            number = value
        elif isinstance(value, str) and value.strip().isdigit():
            number = int(value.strip())
        else:
            return None
        return number if number > 0 else None


class DataSanitizer:
    """Sanitize and clean input data"""

    @staticmethod
    def sanitize_email(email: str) -> str:
        """Sanitize email address"""
        return email.strip().lower()

    @staticmethod
    def sanitize_emails(emails: List[str]) -> List[str]:
        """Sanitize a list of addresses, dropping duplicates but keeping order"""
        sanitized = []
        for email in emails:
            clean = DataSanitizer.sanitize_email(email)
            if clean not in sanitized:
                sanitized.append(clean)
        return sanitized
