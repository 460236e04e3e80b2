from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime, timezone
from typing import Literal, Optional

Gender = Literal["Male", "Female", "Other"]
BloodGroup = Literal["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-"]

MAX_AGE = 150


def _now() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python; either is accepted on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MedicalHistoryEntry(CamelModel):
    condition: Optional[str] = None
    diagnosis_date: Optional[datetime] = Field(default_factory=_now)
    notes: Optional[str] = None


class Prescription(CamelModel):
    medication: Optional[str] = None
    dosage: Optional[str] = None
    start_date: Optional[datetime] = Field(default_factory=_now)
    end_date: Optional[datetime] = None  # None while the prescription is ongoing


class AppointmentLog(CamelModel):
    date: datetime = Field(default_factory=_now)
    reason: Optional[str] = None
    doctor: Optional[str] = None


class AppointmentReminder(CamelModel):
    reminder_date: Optional[datetime] = None
    reminder_notes: Optional[str] = None


class PatientBase(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    age: int = Field(ge=0, le=MAX_AGE)
    gender: Gender
    blood_group: Optional[BloodGroup] = None
    department: Optional[str] = Field(default=None, max_length=100)
    contact_info: Optional[str] = None
    allergies: list[str] = []
    medical_history: list[MedicalHistoryEntry] = []
    current_prescriptions: list[Prescription] = []
    doctor_notes: list[str] = []
    appointment_logs: list[AppointmentLog] = []
    appointment_reminders: list[AppointmentReminder] = []


class PatientCreate(PatientBase):
    patient_id: str = Field(min_length=1, max_length=50)


class PatientUpdate(CamelModel):
    # Accepted so clients can send a whole record back; always discarded.
    patient_id: Optional[str] = None
    name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    blood_group: Optional[str] = None
    department: Optional[str] = Field(default=None, max_length=100)
    contact_info: Optional[str] = None
    allergies: Optional[list[str]] = None
    medical_history: Optional[list[MedicalHistoryEntry]] = None
    current_prescriptions: Optional[list[Prescription]] = None
    doctor_notes: Optional[list[str]] = None
    appointment_logs: Optional[list[AppointmentLog]] = None
    appointment_reminders: Optional[list[AppointmentReminder]] = None


class PatientResponse(PatientCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
