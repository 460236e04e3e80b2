from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from sqlalchemy.sql import func
from patient_records.database import Base


class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(200), nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String(10), nullable=False)
    blood_group = Column(String(3))
    department = Column(String(100), index=True)
    contact_info = Column(Text)

    # Ordered lists, stored as JSON documents and replaced wholesale on update
    allergies = Column(JSON, default=list)
    medical_history = Column(JSON, default=list)
    current_prescriptions = Column(JSON, default=list)
    doctor_notes = Column(JSON, default=list)
    appointment_logs = Column(JSON, default=list)
    appointment_reminders = Column(JSON, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
