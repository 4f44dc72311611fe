"""
Logging utilities for the Meeting Reserver
"""
import logging
import sys
from datetime import datetime
import json


class ServiceLogger:
    """Logging setup shared by the API server and the CLI"""

    @staticmethod
    def setup_logging(log_level: str = "INFO", log_file: str = None):
        """Setup logging configuration"""

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        # Clear existing handlers
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

        # Suppress some noisy loggers
        logging.getLogger('werkzeug').setLevel(logging.WARNING)
        logging.getLogger('urllib3').setLevel(logging.WARNING)

        return root_logger

    @staticmethod
    def log_reconcile_run(input_file: str, participants: int, min_duration: int,
                          candidates: list, processing_time: float):
        """Log a CLI reconciliation run"""
        logger = logging.getLogger(__name__)

        log_entry = {
            "timestamp": datetime.now().isoformat(),
            "input_file": input_file,
            "processing_time_seconds": round(processing_time, 4),
            "participants": participants,
            "min_duration": min_duration,
            "candidates": len(candidates),
        }

        logger.info(f"Reconciliation finished: {json.dumps(log_entry, indent=2)}")
