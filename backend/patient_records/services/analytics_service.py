from collections import Counter
from datetime import timezone
from typing import Iterable, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from patient_records.models.patient import Patient
from patient_records.schemas.analytics import ConditionCount, MedicationCount, DepartmentAge, MonthlyVisits
from patient_records.schemas.patient import AppointmentLog
from patient_records.services.store import store_operation


def _count_by(lists: Iterable[Optional[list]], key: str) -> list[tuple[Optional[str], int]]:
    """Flatten lists of dicts to one row per entry, count by entry[key], most frequent first."""
    counts: Counter = Counter()
    for entries in lists:
        for entry in entries or []:
            counts[entry.get(key)] += 1
    return sorted(counts.items(), key=lambda kv: (-kv[1], kv[0] is None, kv[0] or ""))


class AnalyticsService:
    @store_operation("Error fetching conditions analytics")
    async def condition_counts(self, db: AsyncSession) -> list[ConditionCount]:
        result = await db.execute(select(Patient.medical_history))
        return [
            ConditionCount(condition=condition, count=count)
            for condition, count in _count_by(result.scalars(), "condition")
        ]

    @store_operation("Error fetching prescriptions analytics")
    async def prescription_counts(self, db: AsyncSession) -> list[MedicationCount]:
        result = await db.execute(select(Patient.current_prescriptions))
        return [
            MedicationCount(medication=medication, count=count)
            for medication, count in _count_by(result.scalars(), "medication")
        ]

    @store_operation("Error fetching average age per department analytics")
    async def average_age_per_department(self, db: AsyncSession) -> list[DepartmentAge]:
        query = (
            select(
                Patient.department,
                func.avg(Patient.age).label("average_age"),
                func.count(Patient.id).label("count"),
            )
            .where(Patient.department.is_not(None), Patient.department != "")
            .group_by(Patient.department)
            .order_by(Patient.department)
        )
        result = await db.execute(query)
        return [
            DepartmentAge(department=row.department, average_age=float(row.average_age), count=row.count)
            for row in result.all()
        ]

    @store_operation("Error fetching visits per month analytics")
    async def visits_per_month(self, db: AsyncSession) -> list[MonthlyVisits]:
        result = await db.execute(select(Patient.appointment_logs))

        counts: Counter = Counter()
        for logs in result.scalars():
            for entry in logs or []:
                visit = AppointmentLog.model_validate(entry).date
                if visit.tzinfo is not None:
                    visit = visit.astimezone(timezone.utc)
                counts[(visit.year, visit.month)] += 1

        return [
            MonthlyVisits(year=year, month=month, count=count)
            for (year, month), count in sorted(counts.items())
        ]


analytics_service = AnalyticsService()
