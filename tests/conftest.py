from datetime import datetime

import pytest

from src.api.flask_server import create_app
from src.calendar.availability_store import InMemoryAvailabilityStore
from src.scheduler.interval import AvailabilitySet, Interval
from src.scheduler.meeting_scheduler import MeetingScheduler
from src.scheduler.reservation_coordinator import ReservationCoordinator
from src.storage.meeting_repository import InMemoryMeetingRepository

MEETING_UUID = "ad18668e-4a28-4565-9f4a-4eace3068a62"


def at(day, hour, minute=0):
    """A timestamp in June 2021, the month the booking fixtures use"""
    return datetime(2021, 6, day, hour, minute)


def slot(day, hour, minute, duration):
    return Interval(start=at(day, hour, minute), duration=duration)


def availability(owner, *intervals):
    return AvailabilitySet(owner=owner, intervals=tuple(intervals))


@pytest.fixture
def meeting_body():
    return {
        "duration": 15,
        "hosts": ["aba@aba.pl", "ccc@ccc.pl"],
        "guest": "a@a.pl",
    }


@pytest.fixture
def availability_store():
    return InMemoryAvailabilityStore({
        "aba@aba.pl": [slot(23, 11, 0, 120), slot(23, 14, 0, 60), slot(25, 12, 0, 300)],
        "ccc@ccc.pl": [slot(23, 12, 0, 240), slot(25, 13, 0, 120)],
        "a@a.pl": [slot(23, 8, 0, 600), slot(25, 8, 0, 600)],
    })


@pytest.fixture
def repository():
    return InMemoryMeetingRepository()


@pytest.fixture
def coordinator(availability_store, repository):
    return ReservationCoordinator(availability_store, repository, merge_overlaps=True)


@pytest.fixture
def scheduler(availability_store, repository):
    return MeetingScheduler(repository=repository, availability_store=availability_store)


@pytest.fixture
def client(scheduler):
    app = create_app(scheduler)
    app.config["TESTING"] = True
    return app.test_client()
