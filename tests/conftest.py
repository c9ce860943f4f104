"""Shared fixtures: in-memory database, caller switching, recording dispatcher"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from medschedule import models  # noqa: F401
from medschedule.auth import get_caller_context
from medschedule.database import Base, get_db
from medschedule.domain.notifications.service import create_appointment_notification
from medschedule.main import app
from medschedule.services.notification_dispatch import get_notification_dispatcher
from medschedule.shared.context import UNAUTHENTICATED, CallerContext

DOCTOR_PROFILE = {
    "name": "Jane Smith",
    "specialization": "Cardiology",
    "phone": "+1 555 0100",
    "clinicAddress": "1 Main St",
    "workingHours": {"start": "09:00", "end": "17:00"},
    "workingDays": ["monday", "tuesday", "wednesday", "thursday", "friday"],
}


class RecordingDispatcher:
    """Stands in for the queue: keeps jobs until the test drains them"""

    def __init__(self):
        self.jobs = []

    async def enqueue(self, appointment_id, event):
        self.jobs.append((appointment_id, event))
        return f"job-{len(self.jobs)}"

    async def close(self):
        pass


class Caller:
    """Mutable holder for the identity the next request is made as"""

    def __init__(self):
        self.ctx = UNAUTHENTICATED

    def as_user(self, user_id):
        self.ctx = CallerContext.for_user(user_id)

    def sign_out(self):
        self.ctx = UNAUTHENTICATED


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(db_session_factory):
    session = db_session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def caller():
    return Caller()


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def client(db_session_factory, caller, dispatcher):
    def override_get_db():
        session = db_session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_caller_context] = lambda: caller.ctx
    app.dependency_overrides[get_notification_dispatcher] = lambda: dispatcher
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def drain(db_session_factory, dispatcher):
    """Run every queued notification job through the real handler"""

    def _drain():
        session = db_session_factory()
        try:
            while dispatcher.jobs:
                appointment_id, event = dispatcher.jobs.pop(0)
                create_appointment_notification(session, appointment_id, event)
        finally:
            session.close()

    return _drain


@pytest.fixture
def doctor(client, caller):
    """Signed-in doctor with a profile"""
    caller.as_user("doctor-uid")
    response = client.post("/doctors", json=DOCTOR_PROFILE)
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def patient(client, caller, doctor):
    caller.as_user("doctor-uid")
    response = client.post("/patients", json={"name": "John Doe", "phone": "555-0101"})
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def book(client):
    """Create an appointment through the API as the current caller"""

    def _book(patient_id, requested_by="doctor", date="2030-05-01", time="10:30"):
        return client.post(
            "/appointments",
            json={
                "patientId": patient_id,
                "appointmentDate": date,
                "appointmentTime": time,
                "type": "consultation",
                "requestedBy": requested_by,
            },
        )

    return _book
