import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from patient_records.database import get_db
from patient_records.schemas.auth import MessageResponse
from patient_records.schemas.patient import PatientCreate, PatientUpdate, PatientResponse
from patient_records.services.patient_query import PatientFilter
from patient_records.services.patient_service import patient_service
from patient_records.auth import get_current_user, UserPrincipal

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=PatientResponse, status_code=201)
async def create_patient(
    data: PatientCreate,
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    patient = await patient_service.create(db, data)
    logger.info("%s added patient %s", current_user.username, patient.patient_id)
    return PatientResponse.model_validate(patient)


@router.get("", response_model=list[PatientResponse])
async def search_patients(
    search: Optional[str] = Query(None, description="Case-insensitive match on name or patient ID"),
    patient_id: Optional[str] = Query(None, alias="patientId", description="Exact patient ID; overrides other filters"),
    min_age: Optional[str] = Query(None, alias="minAge"),
    max_age: Optional[str] = Query(None, alias="maxAge"),
    gender: Optional[str] = Query(None),
    department: Optional[str] = Query(None, description="Case-insensitive substring"),
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    filters = PatientFilter.from_params(
        patient_id=patient_id,
        search=search,
        min_age=min_age,
        max_age=max_age,
        gender=gender,
        department=department,
    )
    patients = await patient_service.search(db, filters)
    return [PatientResponse.model_validate(p) for p in patients]


@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(
    patient_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    patient = await patient_service.get(db, patient_id)
    return PatientResponse.model_validate(patient)


@router.put("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_id: str,
    data: PatientUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    patient = await patient_service.update(db, patient_id, data)
    logger.info("%s updated patient %s", current_user.username, patient_id)
    return PatientResponse.model_validate(patient)


@router.delete("/{patient_id}", response_model=MessageResponse)
async def delete_patient(
    patient_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    await patient_service.delete(db, patient_id)
    logger.info("%s deleted patient %s", current_user.username, patient_id)
    return {"message": "Patient record permanently deleted successfully."}
