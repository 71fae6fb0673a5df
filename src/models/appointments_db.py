from datetime import datetime

from extensions import db

APPOINTMENT_STATUSES = ("scheduled", "confirmed", "completed", "cancelled")


class Appointment(db.Model):
    __tablename__ = "appointments"

    id = db.Column(db.Integer, primary_key=True)
    # Walk-in bookings from the public form carry no patient link.
    patient_id = db.Column(db.Integer, db.ForeignKey("patients.id"), nullable=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(32), nullable=False)
    email = db.Column(db.String(255))
    appointment_date = db.Column(db.DateTime, nullable=False, index=True)
    purpose = db.Column(db.String(100), nullable=False)
    notes = db.Column(db.Text)
    status = db.Column(db.String(50), default="scheduled")
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # passive_deletes="all": deleting a patient leaves its appointments untouched.
    patient = db.relationship(
        "Patient",
        backref=db.backref("appointments", lazy=True, passive_deletes="all"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "patientId": self.patient_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "phone": self.phone,
            "email": self.email,
            "appointmentDate": self.appointment_date.isoformat() if self.appointment_date else None,
            "purpose": self.purpose,
            "notes": self.notes,
            "status": self.status,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<Appointment {self.id} on {self.appointment_date} ({self.status})>"
