"""
Utility modules for the Meeting Reserver
"""

from .logger import ServiceLogger
from .validators import RequestValidator, DataSanitizer
from .meeting_logger import MeetingLogger

__all__ = ['ServiceLogger', 'RequestValidator', 'DataSanitizer', 'MeetingLogger']
