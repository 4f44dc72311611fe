"""
Configuration settings for the Meeting Reserver service
"""
import os
from typing import Dict, Any


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    # API Configuration
    API_HOST = os.environ.get("API_HOST", "0.0.0.0")
    API_PORT = int(os.environ.get("API_PORT", "5000"))
    API_DEBUG = _env_bool("API_DEBUG", False)

    # Logging Configuration
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE = os.environ.get("LOG_FILE") or None

    # Scheduling Configuration
    MIN_MEETING_DURATION = int(os.environ.get("MIN_MEETING_DURATION", "1"))  # minutes
    MAX_MEETING_DURATION = int(os.environ.get("MAX_MEETING_DURATION", "1440"))  # one day
    MERGE_OVERLAPPING_INTERVALS = _env_bool("MERGE_OVERLAPPING_INTERVALS", True)
    AVAILABILITY_MAX_WORKERS = int(os.environ.get("AVAILABILITY_MAX_WORKERS", "5"))

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Settings snapshot for the status endpoint"""
        return {
            "min_meeting_duration": cls.MIN_MEETING_DURATION,
            "max_meeting_duration": cls.MAX_MEETING_DURATION,
            "merge_overlapping_intervals": cls.MERGE_OVERLAPPING_INTERVALS,
            "availability_max_workers": cls.AVAILABILITY_MAX_WORKERS,
        }
