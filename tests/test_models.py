import pytest
from sqlalchemy.exc import IntegrityError

from medschedule.models import Appointment, Doctor, Notification, Patient


@pytest.fixture
def patient_row(db):
    doctor = Doctor(user_id="doctor-uid", name="Jane Smith", specialization="Cardiology", working_days=[])
    db.add(doctor)
    db.flush()
    patient = Patient(doctor_id=doctor.id, created_by="doctor-uid", name="John Doe", phone="555-0101")
    db.add(patient)
    db.commit()
    return patient


def make_appointment(patient, **overrides):
    fields = {
        "patient_id": patient.id,
        "doctor_id": patient.doctor_id,
        "appointment_date": "2030-05-01",
        "appointment_time": "10:30",
        "type": "consultation",
        "status": "scheduled",
        "requested_by": "doctor",
    }
    fields.update(overrides)
    return Appointment(**fields)


def test_known_values_are_stored(db, patient_row):
    db.add(make_appointment(patient_row))
    db.commit()
    assert db.query(Appointment).count() == 1


@pytest.mark.parametrize("overrides", [{"status": "archived"}, {"requested_by": "nurse"}])
def test_appointment_rejects_unknown_values(db, patient_row, overrides):
    db.add(make_appointment(patient_row, **overrides))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_notification_rejects_unknown_type(db):
    db.add(
        Notification(
            recipient_id="doctor-uid",
            recipient_type="doctor",
            title="Moved",
            message="Appointment moved",
            type="appointment_moved",
        )
    )
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()
