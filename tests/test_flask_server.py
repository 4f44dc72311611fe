import pytest

from conftest import MEETING_UUID

BAD_REQUEST_CODE = 400


def post_meeting(client, body):
    return client.post("/meeting", json=body)


class TestPostMeeting:

    def test_meeting_is_added(self, client, meeting_body):
        response = post_meeting(client, meeting_body)
        assert response.status_code == 200
        assert response.get_json()["msg"] == "Meeting added"
        assert response.get_json()["uuid"]

    def test_meeting_is_added_with_uuid(self, client, meeting_body):
        response = post_meeting(client, {**meeting_body, "uuid": MEETING_UUID})
        assert response.status_code == 200
        assert response.get_json()["uuid"] == MEETING_UUID

        meeting = client.get(f"/meeting/{MEETING_UUID}").get_json()
        assert meeting["createdAt"]
        assert meeting["updatedAt"] is None

    def test_duplicate_uuid(self, client, meeting_body):
        post_meeting(client, {**meeting_body, "uuid": MEETING_UUID})
        response = post_meeting(client, {**meeting_body, "uuid": MEETING_UUID})
        assert response.status_code == BAD_REQUEST_CODE
        assert response.get_json()["msg"] == "Meeting already exists"

    def test_guest_mail_is_incorrect(self, client, meeting_body):
        response = post_meeting(client, {**meeting_body, "guest": "aa.pl"})
        assert response.status_code == BAD_REQUEST_CODE
        assert response.get_json()["msg"] == "Guest mail is not valid mail"
        assert response.get_json()["addresses"] == ["aa.pl"]

    def test_no_hosts(self, client, meeting_body):
        response = post_meeting(client, {**meeting_body, "hosts": []})
        assert response.status_code == BAD_REQUEST_CODE
        assert response.get_json()["msg"] == "There must be at least one host in the meeting"

    def test_hosts_mail_is_incorrect(self, client, meeting_body):
        response = post_meeting(client, {**meeting_body, "hosts": ["aba@aba.pl", "cccccc.pl"]})
        assert response.status_code == BAD_REQUEST_CODE
        assert response.get_json()["msg"] == "These are not valid mails: cccccc.pl"

    def test_duration_is_not_integer(self, client, meeting_body):
        response = post_meeting(client, {**meeting_body, "duration": "ala"})
        assert response.status_code == BAD_REQUEST_CODE
        assert response.get_json()["msg"] == "Duration is not proper integer"

    def test_uuid_is_incorrect(self, client, meeting_body):
        response = post_meeting(client, {**meeting_body, "uuid": "alazzascxzcx"})
        assert response.status_code == BAD_REQUEST_CODE
        assert response.get_json()["msg"] == "Not proper UUID"

    def test_body_must_be_json(self, client):
        response = client.post("/meeting", data="duration=15", content_type="text/plain")
        assert response.status_code == BAD_REQUEST_CODE

    @pytest.mark.parametrize("body", [[], ["aba@aba.pl"], "meeting", 15])
    def test_body_must_be_a_json_object(self, client, body):
        response = post_meeting(client, body)
        assert response.status_code == BAD_REQUEST_CODE
        assert response.get_json()["msg"] == "No JSON data provided"


class TestPutMeeting:

    updated_body = {
        "duration": 30,
        "hosts": ["aa@aa.pl", "bbb@bbb.pl"],
        "guest": "b@b.pl",
    }

    def test_meeting_is_updated(self, client, meeting_body, scheduler):
        post_meeting(client, {**meeting_body, "uuid": MEETING_UUID})

        response = client.put(f"/meeting/{MEETING_UUID}", json=self.updated_body)

        assert response.status_code == 200
        assert response.get_json()["msg"] == "Meeting updated"
        meeting = scheduler.get_meeting(MEETING_UUID)
        assert meeting.requested_duration == 30
        assert meeting.guest == "b@b.pl"
        assert sorted(meeting.hosts) == sorted(self.updated_body["hosts"])

    def test_update_validates_body(self, client, meeting_body):
        post_meeting(client, {**meeting_body, "uuid": MEETING_UUID})

        response = client.put(f"/meeting/{MEETING_UUID}", json={**meeting_body, "guest": "aa.pl"})

        assert response.status_code == BAD_REQUEST_CODE
        assert response.get_json()["msg"] == "Guest mail is not valid mail"

    def test_update_unknown_meeting(self, client):
        response = client.put("/meeting/0c6a4bb2-39c1-4a7e-8d0e-3f3f0a4e2a11", json=self.updated_body)
        assert response.status_code == 404

    def test_malformed_meeting_id(self, client):
        response = client.put("/meeting/not-a-uuid", json=self.updated_body)
        assert response.status_code == BAD_REQUEST_CODE
        assert response.get_json()["msg"] == "Not proper UUID"


class TestReservation:

    picked_time_slot = {"startTime": "2021-06-25T14:30:00", "duration": 30}

    def _create(self, client, meeting_body, duration=30):
        post_meeting(client, {**meeting_body, "duration": duration, "uuid": MEETING_UUID})

    def test_candidate_time_slots(self, client, meeting_body):
        self._create(client, meeting_body)

        response = client.get(f"/meeting/{MEETING_UUID}/time_slots")

        assert response.status_code == 200
        slots = response.get_json()["timeSlots"]
        assert [s["startDatetime"] for s in slots] == [
            "2021-06-23T12:00:00", "2021-06-23T14:00:00", "2021-06-25T13:00:00",
        ]
        assert [s["duration"] for s in slots] == [60, 60, 120]

    def test_meeting_is_reserved(self, client, meeting_body):
        self._create(client, meeting_body)

        response = client.put(f"/meeting/{MEETING_UUID}/pick_time_slot", json=self.picked_time_slot)

        assert response.status_code == 200
        assert response.get_json()["msg"] == "Meeting reserved"
        meeting = client.get(f"/meeting/{MEETING_UUID}").get_json()
        assert meeting["state"] == "reserved"
        assert meeting["startTime"] == "2021-06-25T14:30:00"
        assert meeting["committedSlot"]["duration"] == 30

    def test_unavailable_slot_conflicts(self, client, meeting_body):
        self._create(client, meeting_body)

        response = client.put(f"/meeting/{MEETING_UUID}/pick_time_slot",
                              json={"startTime": "2021-06-23T13:00:00", "duration": 30})

        assert response.status_code == 409
        assert response.get_json()["code"] == "slot_unavailable"

    def test_too_short_slot_conflicts(self, client, meeting_body):
        self._create(client, meeting_body, duration=60)

        response = client.put(f"/meeting/{MEETING_UUID}/pick_time_slot", json=self.picked_time_slot)

        assert response.status_code == 409
        assert response.get_json()["code"] == "slot_too_short"

    def test_stale_version_conflicts(self, client, meeting_body):
        self._create(client, meeting_body)
        client.put(f"/meeting/{MEETING_UUID}/pick_time_slot", json=self.picked_time_slot)

        response = client.put(f"/meeting/{MEETING_UUID}/pick_time_slot",
                              json={"startTime": "2021-06-23T12:00:00", "duration": 30, "version": 0})

        assert response.status_code == 409
        assert response.get_json()["code"] == "stale_meeting"

    def test_bad_start_time(self, client, meeting_body):
        self._create(client, meeting_body)

        response = client.put(f"/meeting/{MEETING_UUID}/pick_time_slot",
                              json={"startTime": "tomorrow", "duration": 30})

        assert response.status_code == BAD_REQUEST_CODE
        assert response.get_json()["code"] == "invalid_slot"

    def test_start_time_with_seconds(self, client, meeting_body):
        self._create(client, meeting_body)

        response = client.put(f"/meeting/{MEETING_UUID}/pick_time_slot",
                              json={"startTime": "2021-06-25T14:30:30", "duration": 30})

        assert response.status_code == BAD_REQUEST_CODE
        assert response.get_json()["code"] == "invalid_slot"

    def test_edit_reopens_reserved_meeting(self, client, meeting_body):
        self._create(client, meeting_body)
        client.put(f"/meeting/{MEETING_UUID}/pick_time_slot", json=self.picked_time_slot)

        client.put(f"/meeting/{MEETING_UUID}", json={**meeting_body, "duration": 45})

        meeting = client.get(f"/meeting/{MEETING_UUID}").get_json()
        assert meeting["state"] == "pending"
        assert meeting["startTime"] is None
        assert meeting["version"] == 2
        assert meeting["updatedAt"] >= meeting["createdAt"]


class TestDeleteMeeting:

    def test_reserved_meeting_is_deleted(self, client, meeting_body):
        post_meeting(client, {**meeting_body, "duration": 30, "uuid": MEETING_UUID})
        client.put(f"/meeting/{MEETING_UUID}/pick_time_slot",
                   json={"startTime": "2021-06-25T14:30:00", "duration": 30})

        response = client.delete(f"/meeting/{MEETING_UUID}")

        assert response.status_code == 200
        assert response.get_json()["msg"] == "Meeting deleted"
        assert client.get(f"/meeting/{MEETING_UUID}").status_code == 404
        assert client.delete(f"/meeting/{MEETING_UUID}").status_code == 404


class TestParticipantTimeSlots:

    def test_time_slots_round_trip_through_reconciliation(self, client, meeting_body):
        response = client.put("/participant/New@Host.pl/time_slots", json={"timeSlots": [
            {"startDatetime": "2021-06-25T14:00:00", "duration": 60},
        ]})
        assert response.status_code == 200
        assert response.get_json()["msg"] == "Time slots updated"

        post_meeting(client, {**meeting_body, "hosts": ["aba@aba.pl", "new@host.pl"], "uuid": MEETING_UUID})
        slots = client.get(f"/meeting/{MEETING_UUID}/time_slots").get_json()["timeSlots"]

        assert [(s["startDatetime"], s["duration"]) for s in slots] == [("2021-06-25T14:00:00", 60)]

    def test_unknown_participant_has_no_time_slots(self, client):
        response = client.get("/participant/ghost@x.pl/time_slots")
        assert response.status_code == 200
        assert response.get_json()["timeSlots"] == []

    def test_invalid_participant_mail(self, client):
        response = client.put("/participant/not-a-mail/time_slots", json={"timeSlots": []})
        assert response.status_code == BAD_REQUEST_CODE
        assert response.get_json()["code"] == "invalid_contact"

    def test_body_must_be_an_object(self, client):
        response = client.put("/participant/a@a.pl/time_slots", json=[
            {"startDatetime": "2021-06-25T14:00:00", "duration": 60},
        ])
        assert response.status_code == BAD_REQUEST_CODE
        assert response.get_json()["msg"] == "No JSON data provided"

    def test_time_slots_must_be_a_list(self, client):
        response = client.put("/participant/a@a.pl/time_slots", json={"timeSlots": "9-5"})
        assert response.status_code == BAD_REQUEST_CODE


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json()["status"] == "healthy"


def test_unknown_endpoint(client):
    assert client.get("/nowhere").status_code == 404
