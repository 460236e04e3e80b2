from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from patient_records.auth import get_current_user
from patient_records.database import get_db
from patient_records.services.analytics_service import analytics_service
from patient_records.schemas.analytics import ConditionCount, MedicationCount, DepartmentAge, MonthlyVisits

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/conditions", response_model=list[ConditionCount])
async def conditions(db: AsyncSession = Depends(get_db)):
    return await analytics_service.condition_counts(db)


@router.get("/prescriptions", response_model=list[MedicationCount])
async def prescriptions(db: AsyncSession = Depends(get_db)):
    return await analytics_service.prescription_counts(db)


@router.get("/avg-age-per-department", response_model=list[DepartmentAge])
async def avg_age_per_department(db: AsyncSession = Depends(get_db)):
    return await analytics_service.average_age_per_department(db)


@router.get("/visits-per-month", response_model=list[MonthlyVisits])
async def visits_per_month(db: AsyncSession = Depends(get_db)):
    return await analytics_service.visits_per_month(db)
