from datetime import date, datetime
import logging

from flask import current_app
from sqlalchemy import or_

from extensions import db
from src.models import Appointment, MedicalRecord, Message, Patient
from src.services import cache_service as cache
from src.services.db_context import db_context
from src.services.schedule import (
    UPCOMING_LIMIT,
    clinic_now,
    day_bounds,
    free_slots,
    is_weekend,
    month_bounds,
)


logger = logging.getLogger("clinic_service")


class SchedulingError(ValueError):
    """The requested appointment time is not bookable."""


def _now() -> datetime:
    return clinic_now(current_app.config.get("CLINIC_TIMEZONE", "UTC"))


# -------------------------------
# 👤 PATIENT HELPERS
# -------------------------------

def list_patients(search: str | None = None):
    """All patients, newest first; ``search`` matches first or last name (case-insensitive)."""
    with db_context("list_patients"):
        query = Patient.query
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(Patient.first_name.ilike(pattern), Patient.last_name.ilike(pattern))
            )
        return query.order_by(Patient.created_at.desc(), Patient.id.desc()).all()


def get_patient(patient_id: int):
    with db_context("get_patient"):
        return db.session.get(Patient, patient_id)


def create_patient(data: dict) -> Patient:
    with db_context("create_patient") as session:
        patient = Patient(**data)
        session.add(patient)
    logger.info(f"[create_patient] Created patient {patient.id}")
    cache.invalidate(cache.STATS)
    return patient


def update_patient(patient_id: int, changes: dict):
    """Apply a partial update. Returns None when the patient does not exist."""
    with db_context("update_patient") as session:
        patient = session.get(Patient, patient_id)
        if patient is None:
            return None
        for field, value in changes.items():
            setattr(patient, field, value)
    logger.info(f"[update_patient] Updated patient {patient_id}: {sorted(changes)}")
    return patient


def delete_patient(patient_id: int) -> bool:
    """
    Hard-delete a patient. Appointments and medical records that point at it
    are left in place (no cascade).
    """
    with db_context("delete_patient") as session:
        patient = session.get(Patient, patient_id)
        if patient is None:
            return False
        session.delete(patient)
    logger.info(f"[delete_patient] Deleted patient {patient_id}")
    cache.invalidate(cache.STATS)
    return True


def search_patients_by_condition(condition: str):
    """Patients with at least one medical record for exactly this condition."""
    with db_context("search_patients_by_condition"):
        patient_ids = db.session.query(MedicalRecord.patient_id).filter(
            MedicalRecord.condition == condition
        )
        return (
            Patient.query
            .filter(Patient.id.in_(patient_ids))
            .order_by(Patient.last_name.asc(), Patient.first_name.asc())
            .all()
        )


# -------------------------------
# 📅 APPOINTMENT HELPERS
# -------------------------------

def _check_bookable(when: datetime):
    if current_app.config.get("ENFORCE_WEEKDAY_APPOINTMENTS") and is_weekend(when.date()):
        raise SchedulingError("Appointments cannot be scheduled on weekends.")


def list_appointments(day: date | None = None):
    """All appointments by date, or only those falling on ``day`` (bounds inclusive)."""
    with db_context("list_appointments"):
        query = Appointment.query
        if day is not None:
            start, end = day_bounds(day)
            query = query.filter(Appointment.appointment_date.between(start, end))
        return query.order_by(Appointment.appointment_date.asc(), Appointment.id.asc()).all()


def get_upcoming_appointments(limit: int = UPCOMING_LIMIT) -> list[dict]:
    """
    The next ``limit`` appointments from now on, serialized (cached).
    The cache key carries the current minute so past appointments drop out
    within a minute even when no write invalidates the entry.
    """
    now = _now().replace(second=0, microsecond=0)

    def load():
        with db_context("get_upcoming_appointments"):
            rows = (
                Appointment.query
                .filter(Appointment.appointment_date >= now)
                .order_by(Appointment.appointment_date.asc())
                .limit(limit)
                .all()
            )
            return [a.to_dict() for a in rows]

    key = cache.cache_key(cache.APPOINTMENTS, "upcoming", limit, now.strftime("%Y%m%dT%H%M"))
    return cache.cached(key, load)


def get_appointments_by_month(year: int, month: int) -> list[dict]:
    """Appointments in a calendar month, serialized (cached). ValueError on a bad month."""
    start, end = month_bounds(year, month)

    def load():
        with db_context("get_appointments_by_month"):
            rows = (
                Appointment.query
                .filter(Appointment.appointment_date.between(start, end))
                .order_by(Appointment.appointment_date.asc())
                .all()
            )
            return [a.to_dict() for a in rows]

    return cache.cached(cache.cache_key(cache.APPOINTMENTS, "month", year, month), load)


def get_available_slots(day: date) -> list[str]:
    """Return the free half-hour slots for a given date."""
    taken = [
        a.appointment_date
        for a in list_appointments(day)
        if (a.status or "scheduled") != "cancelled"
    ]
    return free_slots(day, taken)


def get_appointment(appointment_id: int):
    with db_context("get_appointment"):
        return db.session.get(Appointment, appointment_id)


def create_appointment(data: dict) -> Appointment:
    """Create a new appointment. Status always starts as ``scheduled``."""
    _check_bookable(data["appointment_date"])
    with db_context("create_appointment") as session:
        appt = Appointment(**data, status="scheduled")
        session.add(appt)
    logger.info(f"[create_appointment] Created appointment {appt.id} at {appt.appointment_date}")
    cache.invalidate(cache.APPOINTMENTS, cache.STATS)
    return appt


def update_appointment(appointment_id: int, changes: dict):
    if changes.get("appointment_date") is not None:
        _check_bookable(changes["appointment_date"])
    with db_context("update_appointment") as session:
        appt = session.get(Appointment, appointment_id)
        if appt is None:
            return None
        for field, value in changes.items():
            setattr(appt, field, value)
    logger.info(f"[update_appointment] Updated appointment {appointment_id}: {sorted(changes)}")
    cache.invalidate(cache.APPOINTMENTS, cache.STATS)
    return appt


def delete_appointment(appointment_id: int) -> bool:
    with db_context("delete_appointment") as session:
        appt = session.get(Appointment, appointment_id)
        if appt is None:
            return False
        session.delete(appt)
    logger.info(f"[delete_appointment] Deleted appointment {appointment_id}")
    cache.invalidate(cache.APPOINTMENTS, cache.STATS)
    return True


# -------------------------------
# 🦷 MEDICAL RECORD HELPERS
# -------------------------------

def list_medical_records(patient_id: int):
    """A patient's records, most recent visit first."""
    with db_context("list_medical_records"):
        return (
            MedicalRecord.query
            .filter(MedicalRecord.patient_id == patient_id)
            .order_by(MedicalRecord.visit_date.desc(), MedicalRecord.id.desc())
            .all()
        )


def get_medical_record(record_id: int):
    with db_context("get_medical_record"):
        return db.session.get(MedicalRecord, record_id)


def create_medical_record(data: dict) -> MedicalRecord:
    with db_context("create_medical_record") as session:
        record = MedicalRecord(**{**data, "files": list(data.get("files") or [])})
        session.add(record)
    logger.info(f"[create_medical_record] Created record {record.id} for patient {record.patient_id}")
    return record


def update_medical_record(record_id: int, changes: dict):
    with db_context("update_medical_record") as session:
        record = session.get(MedicalRecord, record_id)
        if record is None:
            return None
        for field, value in changes.items():
            # Reassign lists so the JSON column is flagged dirty.
            setattr(record, field, list(value) if field == "files" else value)
    logger.info(f"[update_medical_record] Updated record {record_id}: {sorted(changes)}")
    return record


def delete_medical_record(record_id: int) -> bool:
    with db_context("delete_medical_record") as session:
        record = session.get(MedicalRecord, record_id)
        if record is None:
            return False
        session.delete(record)
    logger.info(f"[delete_medical_record] Deleted record {record_id}")
    return True


# -------------------------------
# 📊 DASHBOARD
# -------------------------------

def get_stats() -> dict:
    """
    Aggregate counters for the dashboard header:
    - total patients
    - appointments today (clinic timezone)
    - upcoming appointments (same capped window as the upcoming list)
    - unread contact messages

    Cached per clinic day, so "today" rolls over at midnight; the upcoming
    count may lag by up to CACHE_TTL_SECONDS between writes.
    """
    now = _now()

    def load():
        start, end = day_bounds(now.date())
        with db_context("get_stats"):
            total_patients = Patient.query.count()
            today_total = (
                Appointment.query
                .filter(Appointment.appointment_date.between(start, end))
                .count()
            )
            upcoming_total = (
                Appointment.query
                .filter(Appointment.appointment_date >= now)
                .count()
            )
            unread = Message.query.filter(Message.is_read.is_(False)).count()
        return {
            "totalPatients": total_patients,
            "todayAppointments": today_total,
            "upcomingAppointments": min(upcoming_total, UPCOMING_LIMIT),
            "unreadMessages": unread,
        }

    return cache.cached(cache.cache_key(cache.STATS, now.date().isoformat()), load)
