"""
Flask API server for the Meeting Reserver
"""
import logging
import signal
import sys
import time
from datetime import datetime

from flask import Flask, jsonify, request
from flask_cors import CORS

from config.settings import Config
from src.scheduler.errors import (
    NotFound,
    PersistenceError,
    ReservationError,
    SchedulingError,
    ValidationError,
)
from src.scheduler.meeting_scheduler import MeetingScheduler

logger = logging.getLogger(__name__)

BAD_REQUEST = 400
NOT_FOUND = 404
CONFLICT = 409
SERVICE_UNAVAILABLE = 503


def _status_for(error: SchedulingError) -> int:
    if isinstance(error, ValidationError):
        return BAD_REQUEST
    if isinstance(error, NotFound):
        return NOT_FOUND
    if isinstance(error, ReservationError):
        return CONFLICT
    if isinstance(error, PersistenceError):
        return SERVICE_UNAVAILABLE
    return 500


class MeetingReserverAPI:
    """
    Flask API exposing meeting creation, edits, reconciliation and reservation
    """

    def __init__(self, scheduler: MeetingScheduler = None):
        self.config = Config()
        self.app = Flask(__name__)
        CORS(self.app)

        self.scheduler = scheduler or MeetingScheduler()
        self.start_time = time.time()
        self.requests_processed = 0

        self._setup_routes()

    def _json_body(self):
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            logger.error(f"No JSON object received on {request.method} {request.path}")
            return None
        return data

    def _setup_routes(self):
        """Setup Flask routes"""

        @self.app.before_request
        def count_request():
            self.requests_processed += 1

        @self.app.errorhandler(SchedulingError)
        def scheduling_error(error):
            status = _status_for(error)
            log = logger.error if status >= 500 else logger.info
            log(f"{request.method} {request.path} -> {status}: {error.message}")
            return jsonify(error.to_dict()), status

        @self.app.route('/health', methods=['GET'])
        def health_check():
            """Health check endpoint"""
            return jsonify({
                "status": "healthy",
                "timestamp": datetime.now().isoformat(),
            })

        @self.app.route('/status', methods=['GET'])
        def get_status():
            """Get server status and statistics"""
            return jsonify({
                "status": "running",
                "requests_processed": self.requests_processed,
                "uptime": time.time() - self.start_time,
                "settings": self.config.as_dict(),
            })

        @self.app.route('/meeting', methods=['POST'])
        def create_meeting():
            data = self._json_body()
            if data is None:
                return jsonify({"msg": "No JSON data provided"}), BAD_REQUEST
            meeting = self.scheduler.create_meeting(data)
            return jsonify({"msg": "Meeting added", "uuid": meeting.id})

        @self.app.route('/meeting/<meeting_id>', methods=['GET'])
        def get_meeting(meeting_id):
            return jsonify(self.scheduler.get_meeting(meeting_id).to_dict())

        @self.app.route('/meeting/<meeting_id>', methods=['PUT'])
        def update_meeting(meeting_id):
            data = self._json_body()
            if data is None:
                return jsonify({"msg": "No JSON data provided"}), BAD_REQUEST
            self.scheduler.update_meeting(meeting_id, data)
            return jsonify({"msg": "Meeting updated"})

        @self.app.route('/meeting/<meeting_id>', methods=['DELETE'])
        def delete_meeting(meeting_id):
            self.scheduler.delete_meeting(meeting_id)
            return jsonify({"msg": "Meeting deleted"})

        @self.app.route('/meeting/<meeting_id>/time_slots', methods=['GET'])
        def get_candidate_slots(meeting_id):
            slots = self.scheduler.candidate_slots(meeting_id)
            return jsonify({"timeSlots": [slot.to_dict() for slot in slots]})

        @self.app.route('/meeting/<meeting_id>/pick_time_slot', methods=['PUT'])
        def pick_time_slot(meeting_id):
            data = self._json_body()
            if data is None:
                return jsonify({"msg": "No JSON data provided"}), BAD_REQUEST
            meeting = self.scheduler.pick_time_slot(meeting_id, data)
            return jsonify({"msg": "Meeting reserved", "meeting": meeting.to_dict()})

        @self.app.route('/participant/<participant>/time_slots', methods=['PUT'])
        def set_participant_slots(participant):
            data = self._json_body()
            if data is None:
                return jsonify({"msg": "No JSON data provided"}), BAD_REQUEST
            availability = self.scheduler.set_availability(participant, data.get("timeSlots"))
            return jsonify({"msg": "Time slots updated", **availability.to_dict()})

        @self.app.route('/participant/<participant>/time_slots', methods=['GET'])
        def get_participant_slots(participant):
            return jsonify(self.scheduler.get_availability(participant).to_dict())

        @self.app.errorhandler(404)
        def not_found(error):
            return jsonify({"msg": "Endpoint not found"}), NOT_FOUND

        @self.app.errorhandler(405)
        def method_not_allowed(error):
            return jsonify({"msg": "Method not allowed"}), 405

    def _setup_signal_handlers(self):
        """Setup graceful shutdown handlers"""
        def signal_handler(signum, frame):
            logger.info(f"Received signal {signum}, shutting down gracefully...")
            self.shutdown()
            sys.exit(0)

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def run(self, host=None, port=None, debug=None):
        """Run the Flask server"""
        host = host or self.config.API_HOST
        port = port or self.config.API_PORT
        debug = self.config.API_DEBUG if debug is None else debug

        self._setup_signal_handlers()
        self.start_time = time.time()

        logger.info(f"Starting Meeting Reserver API server on {host}:{port}")

        self.app.run(
            host=host,
            port=port,
            debug=debug,
            threaded=True,
            use_reloader=False
        )

    def shutdown(self):
        """Graceful shutdown"""
        logger.info(f"Shutting down Meeting Reserver API server after "
                    f"{self.requests_processed} requests")


def create_app(scheduler: MeetingScheduler = None) -> Flask:
    """Factory function to create Flask app"""
    return MeetingReserverAPI(scheduler).app
