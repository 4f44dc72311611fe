"""
Specialized logging utilities for reconciliation and reservation tracing
"""
import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class MeetingLogger:
    """Specialized logger for meeting scheduling events"""

    @staticmethod
    def log_availability_analysis(meeting_id: str, availability_sets: Dict[str, Any]):
        """Log what each participant brings to the reconciliation"""

        logger.info(f"👥 AVAILABILITY ANALYSIS - meeting {meeting_id}")
        logger.info(f"   📊 Participants: {len(availability_sets)}")

        for participant, availability in availability_sets.items():
            if availability.is_empty:
                logger.info(f"   ⛔ {participant}: no free time recorded")
                continue

            logger.info(f"   📧 {participant}: {len(availability.intervals)} slots, "
                        f"{availability.total_minutes()} free minutes")
            if availability.has_overlaps():
                logger.warning(f"      ⚠️  {participant} has overlapping slots, they will be merged")
            for i, interval in enumerate(availability.intervals, 1):
                logger.debug(f"      {i}. {interval.start.isoformat()} to {interval.end.isoformat()}")

    @staticmethod
    def log_reconciliation(meeting_id: str, candidates: List[Any], min_duration: int):
        """Log the candidate windows produced for a meeting"""

        logger.info(f"🔍 RECONCILIATION - meeting {meeting_id}")
        logger.info(f"   ⏰ Minimum duration: {min_duration} minutes")

        if not candidates:
            logger.info(f"   ❌ No common free time for all participants")
            return

        logger.info(f"   ✅ Candidate windows ({len(candidates)}):")
        for i, window in enumerate(candidates, 1):
            logger.info(f"      {i}. {window.start.isoformat()} to {window.end.isoformat()} "
                        f"({window.duration} min)")

    @staticmethod
    def log_reservation_decision(meeting_id: str, slot: Any, accepted: bool,
                                 reason: Optional[str] = None):
        """Log whether a picked slot was committed"""

        logger.info(f"🎯 RESERVATION DECISION - meeting {meeting_id}")
        logger.info(f"   ⏰ Picked slot: {slot.start.isoformat()} to {slot.end.isoformat()} "
                    f"({slot.duration} min)")

        if accepted:
            logger.info(f"   ✅ DECISION: Slot committed")
        else:
            logger.warning(f"   ❌ DECISION: Slot rejected - {reason}")

    @staticmethod
    def log_request_summary(operation: str, meeting_id: Optional[str],
                            result: Dict[str, Any], processing_time: float):
        """Log a summary of one service call"""

        logger.info(f"📋 REQUEST PROCESSING SUMMARY")
        logger.info(f"   🔧 Operation: {operation}")
        logger.info(f"   🆔 Meeting: {meeting_id or 'N/A'}")
        logger.info(f"   ⏱️  Processing time: {processing_time:.3f} seconds")

        if "msg" in result:
            logger.info(f"   💬 Result: {result['msg']}")
        if result.get("state"):
            logger.info(f"   📌 State: {result['state']}")
        if result.get("startTime"):
            logger.info(f"   📅 Committed start: {result['startTime']}")
