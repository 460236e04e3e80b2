from dataclasses import dataclass
from typing import Optional
from sqlalchemy import Select, select, or_
from patient_records.exceptions import ValidationError
from patient_records.models.patient import Patient
from patient_records.schemas.patient import MAX_AGE

SEARCH_LIMIT = 10


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_age(name: str, value: Optional[str]) -> Optional[int]:
    value = _clean(value)
    if value is None:
        return None
    try:
        age = int(value)
    except ValueError:
        raise ValidationError(f"{name} must be an integer", error=[{"field": name, "message": f"invalid integer {value!r}"}])
    if not 0 <= age <= MAX_AGE:
        raise ValidationError(f"{name} must be between 0 and {MAX_AGE}", error=[{"field": name, "message": f"out of range {age}"}])
    return age


@dataclass(frozen=True)
class PatientFilter:
    """Parsed search options. None means the option was not supplied."""
    patient_id: Optional[str] = None
    search: Optional[str] = None
    min_age: Optional[int] = None
    max_age: Optional[int] = None
    gender: Optional[str] = None
    department: Optional[str] = None

    @classmethod
    def from_params(
        cls,
        patient_id: Optional[str] = None,
        search: Optional[str] = None,
        min_age: Optional[str] = None,
        max_age: Optional[str] = None,
        gender: Optional[str] = None,
        department: Optional[str] = None,
    ) -> "PatientFilter":
        """Build from raw query-string values; blank values count as absent."""
        return cls(
            patient_id=_clean(patient_id),
            search=_clean(search),
            min_age=_parse_age("minAge", min_age),
            max_age=_parse_age("maxAge", max_age),
            gender=_clean(gender),
            department=_clean(department),
        )


def build_patient_query(filters: PatientFilter, limit: int = SEARCH_LIMIT) -> Select:
    """
    Translate a PatientFilter into one conjunctive SELECT.

    An exact patient_id short-circuits every other option. Free text is bound
    as a parameter with LIKE wildcards escaped, so it always matches literally.
    """
    query = select(Patient)

    if filters.patient_id is not None:
        query = query.where(Patient.patient_id == filters.patient_id)
        return query.order_by(Patient.id).limit(limit)

    clauses = []
    if filters.search is not None:
        clauses.append(
            or_(
                Patient.name.icontains(filters.search, autoescape=True),
                Patient.patient_id.icontains(filters.search, autoescape=True),
            )
        )
    if filters.min_age is not None:
        clauses.append(Patient.age >= filters.min_age)
    if filters.max_age is not None:
        clauses.append(Patient.age <= filters.max_age)
    if filters.gender is not None:
        clauses.append(Patient.gender == filters.gender)
    if filters.department is not None:
        clauses.append(Patient.department.icontains(filters.department, autoescape=True))

    if clauses:
        query = query.where(*clauses)
    return query.order_by(Patient.id).limit(limit)
