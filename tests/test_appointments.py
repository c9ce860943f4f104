import pytest
from arq.connections import RedisSettings

from medschedule.domain.appointments.service import ALLOWED_TRANSITIONS, check_transition
from medschedule.errors import InvalidTransition
from medschedule.main import app
from medschedule.models import Notification
from medschedule.services import notification_dispatch
from medschedule.services.notification_dispatch import (
    NotificationDispatcher,
    get_notification_dispatcher,
)


def patient_request(client, caller, book, patient):
    caller.as_user("anon-portal-uid")
    response = book(patient["id"], requested_by="patient")
    caller.as_user("doctor-uid")
    return response


def set_status(client, appointment_id, status, **fields):
    return client.patch(f"/appointments/{appointment_id}/status", json={"status": status, **fields})


def test_doctor_booking_starts_scheduled(client, caller, patient, book, dispatcher):
    response = book(patient["id"])

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "scheduled"
    assert body["doctorId"] == patient["doctorId"]
    assert dispatcher.jobs == [(body["id"], "appointment_confirmed")]


def test_patient_request_starts_pending(client, caller, patient, book, dispatcher):
    response = patient_request(client, caller, book, patient)

    assert response.status_code == 200
    assert response.json()["status"] == "pending"
    assert dispatcher.jobs == [(response.json()["id"], "appointment_request")]


def test_booking_requires_identity(client, caller, patient, book):
    caller.sign_out()
    assert book(patient["id"], requested_by="patient").status_code == 401


def test_booking_for_unknown_patient(client, caller, doctor, book):
    assert book(9999).status_code == 404


def test_doctor_booking_for_foreign_patient_is_unauthorized(client, caller, patient, book, dispatcher):
    caller.as_user("other-uid")
    assert book(patient["id"]).status_code == 403
    assert dispatcher.jobs == []


def test_malformed_date_and_time_rejected(client, caller, patient, book):
    assert book(patient["id"], date="2030-13-01").status_code == 422
    assert book(patient["id"], time="25:00").status_code == 422


def test_approve_pending_request(client, caller, patient, book, dispatcher):
    appointment = patient_request(client, caller, book, patient).json()
    dispatcher.jobs.clear()

    response = set_status(client, appointment["id"], "scheduled")

    assert response.status_code == 200
    assert response.json()["status"] == "scheduled"
    assert dispatcher.jobs == [(appointment["id"], "appointment_confirmed")]


def test_reject_pending_request(client, caller, patient, book, dispatcher):
    appointment = patient_request(client, caller, book, patient).json()
    dispatcher.jobs.clear()

    response = set_status(client, appointment["id"], "cancelled")

    assert response.json()["status"] == "cancelled"
    assert dispatcher.jobs == [(appointment["id"], "appointment_cancelled")]


def test_pending_to_pending_saves_notes_without_notifying(client, caller, patient, book, dispatcher):
    appointment = patient_request(client, caller, book, patient).json()
    dispatcher.jobs.clear()

    response = set_status(client, appointment["id"], "pending", notes="Call back")

    assert response.status_code == 200
    assert response.json()["notes"] == "Call back"
    assert dispatcher.jobs == []


def test_complete_with_clinical_fields_does_not_notify(client, caller, patient, book, dispatcher):
    appointment = book(patient["id"]).json()
    dispatcher.jobs.clear()

    response = set_status(
        client, appointment["id"], "completed", diagnosis="Hypertension", prescription="Lisinopril"
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "completed"
    assert body["diagnosis"] == "Hypertension"
    assert body["prescription"] == "Lisinopril"
    assert dispatcher.jobs == []


def test_clinical_fields_accepted_on_any_transition(client, caller, patient, book):
    appointment = book(patient["id"]).json()

    response = set_status(client, appointment["id"], "cancelled", diagnosis="n/a")

    assert response.status_code == 200
    assert response.json()["diagnosis"] == "n/a"


def test_pending_cannot_jump_to_completed(client, caller, patient, book):
    appointment = patient_request(client, caller, book, patient).json()
    assert set_status(client, appointment["id"], "completed").status_code == 409


@pytest.mark.parametrize("terminal", ["completed", "cancelled"])
def test_terminal_states_reject_changes(client, caller, patient, book, terminal):
    appointment = book(patient["id"]).json()
    set_status(client, appointment["id"], terminal)

    for status in ("pending", "scheduled", "completed", "cancelled"):
        assert set_status(client, appointment["id"], status).status_code == 409


def test_unknown_status_rejected(client, caller, patient, book):
    appointment = book(patient["id"]).json()
    assert set_status(client, appointment["id"], "archived").status_code == 422


def test_transition_table():
    check_transition("pending", "scheduled")
    check_transition("scheduled", "completed")
    with pytest.raises(InvalidTransition) as exc_info:
        check_transition("scheduled", "pending")
    assert exc_info.value.status_code == 409
    assert ALLOWED_TRANSITIONS["completed"] == set()


def test_other_doctor_cannot_change_or_delete(client, caller, patient, book):
    appointment = book(patient["id"]).json()
    caller.as_user("other-uid")

    assert set_status(client, appointment["id"], "cancelled").status_code == 403
    assert client.delete(f"/appointments/{appointment['id']}").status_code == 403


def test_status_change_requires_identity(client, caller, patient, book):
    appointment = book(patient["id"]).json()
    caller.sign_out()
    assert set_status(client, appointment["id"], "cancelled").status_code == 401


def test_missing_appointment(client, caller, doctor):
    assert set_status(client, 9999, "cancelled").status_code == 404
    assert client.delete("/appointments/9999").status_code == 404


def test_doctor_listing_includes_patient(client, caller, patient, book):
    book(patient["id"])

    appointments = client.get("/appointments/doctor").json()

    assert len(appointments) == 1
    assert appointments[0]["patient"]["patientId"] == patient["patientId"]

    caller.sign_out()
    assert client.get("/appointments/doctor").json() == []


def test_patient_history_includes_doctor(client, caller, patient, book):
    book(patient["id"])
    caller.sign_out()

    history = client.get(f"/appointments/patient/{patient['patientId']}").json()

    assert len(history) == 1
    assert history[0]["doctor"]["name"] == "Jane Smith"
    assert client.get("/appointments/patient/PUNKNOWN").json() == []


def test_delete_appointment(client, caller, patient, book):
    appointment = book(patient["id"]).json()

    response = client.delete(f"/appointments/{appointment['id']}")

    assert response.status_code == 200
    assert client.get("/appointments/doctor").json() == []


def test_queue_outage_does_not_fail_mutations(client, caller, patient, book, db, monkeypatch):
    attempts = []

    async def unreachable(settings):
        attempts.append(settings)
        raise ConnectionError("redis down")

    monkeypatch.setattr(notification_dispatch, "create_pool", unreachable)
    real_dispatcher = NotificationDispatcher(redis_settings=RedisSettings())
    app.dependency_overrides[get_notification_dispatcher] = lambda: real_dispatcher

    booked = book(patient["id"])
    cancelled = set_status(client, booked.json()["id"], "cancelled")

    assert booked.status_code == 200
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"
    assert db.query(Notification).count() == 0
    # The second enqueue falls inside the reconnect backoff window
    assert len(attempts) == 1
