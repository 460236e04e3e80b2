from patient_records.models.patient import Patient
from patient_records.models.user import User

__all__ = ["Patient", "User"]
