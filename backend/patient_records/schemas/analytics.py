from typing import Optional
from patient_records.schemas.patient import CamelModel


class ConditionCount(CamelModel):
    condition: Optional[str]
    count: int


class MedicationCount(CamelModel):
    medication: Optional[str]
    count: int


class DepartmentAge(CamelModel):
    department: str
    average_age: float
    count: int


class MonthlyVisits(CamelModel):
    year: int
    month: int
    count: int
