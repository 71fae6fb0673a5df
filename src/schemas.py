"""
Request payload schemas for the clinic API.

Create schemas require every non-optional column; update schemas accept any
subset of the same fields (partial update) but refuse an explicit null for a
column that is NOT NULL in the database. Field names are camelCase on the
wire and snake_case in ``model_dump()`` so the result can be applied to the
ORM models directly.
"""
from datetime import date, datetime, time
from typing import Annotated, Any, ClassVar, List, Optional

import pytz
from flask import current_app
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from src.models import APPOINTMENT_STATUSES


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


def _coerce_datetime(v):
    # A bare date means the start of that day.
    if isinstance(v, date) and not isinstance(v, datetime):
        return datetime.combine(v, time.min)
    if isinstance(v, str) and len(v.strip()) == 10:
        return datetime.combine(date.fromisoformat(v.strip()), time.min)
    return v


def to_clinic_time(value: datetime) -> datetime:
    """Store naive clinic-local wall time; aware values are converted first."""
    if value.tzinfo is None:
        return value
    tz = pytz.timezone(current_app.config.get("CLINIC_TIMEZONE", "UTC"))
    return value.astimezone(tz).replace(tzinfo=None)


# Empty strings from HTML forms mean "not given".
OptionalEmail = Annotated[Optional[EmailStr], BeforeValidator(_blank_to_none)]
OptionalText = Annotated[Optional[str], BeforeValidator(_blank_to_none)]
ClinicDateTime = Annotated[
    datetime, BeforeValidator(_coerce_datetime), AfterValidator(to_clinic_time)
]
Name = Annotated[str, Field(min_length=1, max_length=100)]
Phone = Annotated[str, Field(min_length=1, max_length=32)]
Condition = Annotated[str, Field(min_length=1, max_length=255)]
LongText = Annotated[str, Field(min_length=1)]


class ApiSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class PartialSchema(ApiSchema):
    """Base for PUT payloads: every field optional, required columns never null."""

    NOT_NULLABLE: ClassVar[tuple] = ()

    @model_validator(mode="after")
    def reject_null_required(self):
        for name in self.NOT_NULLABLE:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


# -------------------------------
# 👤 PATIENTS
# -------------------------------

class PatientCreate(ApiSchema):
    first_name: Name
    last_name: Name
    phone: Phone
    email: OptionalEmail = None


class PatientUpdate(PartialSchema):
    NOT_NULLABLE = ("first_name", "last_name", "phone")

    first_name: Optional[Name] = None
    last_name: Optional[Name] = None
    phone: Optional[Phone] = None
    email: OptionalEmail = None


# -------------------------------
# 📅 APPOINTMENTS
# -------------------------------

class AppointmentCreate(ApiSchema):
    patient_id: Optional[int] = None
    first_name: Name
    last_name: Name
    phone: Phone
    email: OptionalEmail = None
    appointment_date: ClinicDateTime
    purpose: Name
    notes: OptionalText = None


class AppointmentUpdate(PartialSchema):
    NOT_NULLABLE = ("first_name", "last_name", "phone", "appointment_date", "purpose", "status")

    patient_id: Optional[int] = None
    first_name: Optional[Name] = None
    last_name: Optional[Name] = None
    phone: Optional[Phone] = None
    email: OptionalEmail = None
    appointment_date: Optional[ClinicDateTime] = None
    purpose: Optional[Name] = None
    notes: OptionalText = None
    status: Optional[str] = None

    @field_validator("status")
    @classmethod
    def known_status(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.lower()
        if v not in APPOINTMENT_STATUSES:
            raise ValueError(f"status must be one of {', '.join(APPOINTMENT_STATUSES)}")
        return v


# -------------------------------
# 🦷 MEDICAL RECORDS
# -------------------------------

class MedicalRecordCreate(ApiSchema):
    patient_id: int
    condition: Condition
    treatment: LongText
    notes: OptionalText = None
    visit_date: ClinicDateTime
    files: Annotated[List[str], BeforeValidator(lambda v: [] if v is None else v)] = Field(
        default_factory=list
    )


class MedicalRecordUpdate(PartialSchema):
    NOT_NULLABLE = ("patient_id", "condition", "treatment", "visit_date")

    patient_id: Optional[int] = None
    condition: Optional[Condition] = None
    treatment: Optional[LongText] = None
    notes: OptionalText = None
    visit_date: Optional[ClinicDateTime] = None
    files: Optional[List[str]] = None

    def changes(self) -> dict:
        data = super().changes()
        if "files" in data and data["files"] is None:
            data["files"] = []
        return data


# -------------------------------
# ✉️ INBOX & REVIEWS
# -------------------------------

class MessageCreate(ApiSchema):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: Annotated[
        Optional[Annotated[str, Field(max_length=32)]], BeforeValidator(_blank_to_none)
    ] = None
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)


class ReviewCreate(ApiSchema):
    name: str = Field(..., min_length=1, max_length=200)
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1)


class LoginRequest(ApiSchema):
    model_config = ConfigDict(str_strip_whitespace=False)

    # Any JSON value; a non-string simply never matches the admin password.
    password: Any = ""
