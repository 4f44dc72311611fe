#!/usr/bin/env python3
"""
Main entry point for the Meeting Reserver

Runs the API server, reconciles availability from a JSON file, or runs the
HTTP smoke tests against a running server.
"""

import sys
import json
import logging
import time
from pathlib import Path

# Add the project directory to the Python path
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import Config
from src.api.flask_server import MeetingReserverAPI
from src.scheduler.errors import SchedulingError
from src.scheduler.interval import AvailabilitySet
from src.scheduler.slot_reconciler import reconcile
from utils.logger import ServiceLogger


def reconcile_file(input_file):
    """
    Reconcile the availability described in a JSON file.

    Expected shape:
        {"minDuration": 60,
         "participants": {"a@a.pl": [{"startDatetime": "...", "duration": 120}]}}

    Returns:
        dict: {"timeSlots": [...]} with the candidate windows
    """
    logger = logging.getLogger(__name__)
    started = time.time()

    with open(input_file, 'r') as f:
        data = json.load(f)

    participants = data.get("participants", {})
    min_duration = data.get("minDuration", data.get("duration"))

    sets = [AvailabilitySet.from_slots(owner, slots) for owner, slots in participants.items()]
    candidates = reconcile(sets, min_duration)

    ServiceLogger.log_reconcile_run(input_file, len(sets), min_duration, candidates,
                                    time.time() - started)
    logger.info(f"Found {len(candidates)} candidate windows")
    return {"timeSlots": [candidate.to_dict() for candidate in candidates]}


def run_server(host=None, port=None, debug=None):
    """Run the Flask API server"""
    ServiceLogger.setup_logging(log_level=Config.LOG_LEVEL, log_file=Config.LOG_FILE)
    logger = logging.getLogger(__name__)

    logger.info("Starting Meeting Reserver...")

    try:
        api = MeetingReserverAPI()
        api.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")


def run_tests(api_url="http://localhost:5000"):
    """Run HTTP smoke tests against a running server"""
    from tests.test_client import MeetingApiTestClient

    ServiceLogger.setup_logging(log_level="INFO")
    logger = logging.getLogger(__name__)

    logger.info(f"Running tests against {api_url}")

    client = MeetingApiTestClient(api_url)
    results = client.run_test_suite()

    summary = results["summary"]
    print(f"\nTest Results:")
    print(f"  Total: {summary['total']}")
    print(f"  Passed: {summary['passed']}")
    print(f"  Failed: {summary['failed']}")
    print(f"  Success rate: {(summary['passed']/summary['total']*100) if summary['total'] > 0 else 0:.1f}%")

    return results


def main():
    """Main CLI entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Meeting Reserver')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    server_parser = subparsers.add_parser('server', help='Run API server')
    server_parser.add_argument('--host', default=None, help='Host to bind to')
    server_parser.add_argument('--port', type=int, default=None, help='Port to bind to')
    server_parser.add_argument('--debug', action='store_true', default=None, help='Enable debug mode')

    test_parser = subparsers.add_parser('test', help='Run HTTP smoke tests')
    test_parser.add_argument('--url', default='http://localhost:5000', help='API URL to test')

    reconcile_parser = subparsers.add_parser('reconcile', help='Reconcile availability from a JSON file')
    reconcile_parser.add_argument('input_file', help='Input JSON file')
    reconcile_parser.add_argument('--output', help='Output JSON file')

    args = parser.parse_args()

    if args.command == 'server':
        run_server(host=args.host, port=args.port, debug=args.debug)

    elif args.command == 'test':
        results = run_tests(api_url=args.url)
        sys.exit(0 if results["summary"]["failed"] == 0 else 1)

    elif args.command == 'reconcile':
        ServiceLogger.setup_logging(log_level=Config.LOG_LEVEL, log_file=Config.LOG_FILE)
        try:
            result = reconcile_file(args.input_file)
        except SchedulingError as e:
            logging.getLogger(__name__).error(f"Reconciliation failed: {e.message}")
            sys.exit(1)

        if args.output:
            with open(args.output, 'w') as f:
                json.dump(result, f, indent=2)
        else:
            print(json.dumps(result, indent=2))

    else:
        parser.print_help()


if __name__ == '__main__':
    main()
