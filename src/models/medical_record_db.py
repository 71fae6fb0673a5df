from datetime import datetime

from extensions import db


class MedicalRecord(db.Model):
    __tablename__ = "medical_records"

    id = db.Column(db.Integer, primary_key=True)
    patient_id = db.Column(db.Integer, db.ForeignKey("patients.id"), nullable=False, index=True)
    condition = db.Column(db.String(255), nullable=False, index=True)
    treatment = db.Column(db.Text, nullable=False)
    notes = db.Column(db.Text)
    visit_date = db.Column(db.DateTime, nullable=False)
    # Stored upload filenames, served back through /api/files/<filename>
    files = db.Column(db.JSON, default=list)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    patient = db.relationship(
        "Patient",
        backref=db.backref("medical_records", lazy=True, passive_deletes="all"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "patientId": self.patient_id,
            "condition": self.condition,
            "treatment": self.treatment,
            "notes": self.notes,
            "visitDate": self.visit_date.isoformat() if self.visit_date else None,
            "files": list(self.files or []),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
