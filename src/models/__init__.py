from src.models.patient_db import Patient
from src.models.appointments_db import Appointment, APPOINTMENT_STATUSES
from src.models.medical_record_db import MedicalRecord
from src.models.message_db import Message
from src.models.review_db import Review

__all__ = [
    "Patient",
    "Appointment",
    "APPOINTMENT_STATUSES",
    "MedicalRecord",
    "Message",
    "Review",
]
