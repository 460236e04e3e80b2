import logging
import pydantic
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, delete
from patient_records.exceptions import DuplicateKey, NotFound, ValidationError
from patient_records.models.patient import Patient
from patient_records.schemas.patient import PatientCreate, PatientUpdate
from patient_records.services.patient_query import PatientFilter, build_patient_query
from patient_records.services.store import store_operation

logger = logging.getLogger(__name__)


def validate_patient(data: dict) -> PatientCreate:
    """Check required fields and enums on a full record, raising ValidationError with per-field detail."""
    try:
        return PatientCreate.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError.from_errors(e.errors())


class PatientService:
    async def _find(self, db: AsyncSession, patient_id: str):
        return await db.scalar(select(Patient).where(Patient.patient_id == patient_id))

    @store_operation("Error adding patient record")
    async def create(self, db: AsyncSession, data: PatientCreate) -> Patient:
        if await self._find(db, data.patient_id):
            raise DuplicateKey("Patient ID already exists.")

        patient = Patient(**data.model_dump(mode="json"))
        db.add(patient)
        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            raise DuplicateKey("Patient ID already exists.")
        await db.refresh(patient)
        logger.info("Created patient %s", patient.patient_id)
        return patient

    @store_operation("Error searching patient records")
    async def search(self, db: AsyncSession, filters: PatientFilter) -> list[Patient]:
        result = await db.execute(build_patient_query(filters))
        return list(result.scalars().all())

    @store_operation("Error fetching patient record")
    async def get(self, db: AsyncSession, patient_id: str) -> Patient:
        patient = await self._find(db, patient_id)
        if not patient:
            raise NotFound("Patient not found.")
        return patient

    @store_operation("Error updating patient record")
    async def update(self, db: AsyncSession, patient_id: str, data: PatientUpdate) -> Patient:
        changes = data.model_dump(exclude_unset=True)
        # The public identifier is immutable
        changes.pop("patient_id", None)

        patient = await self._find(db, patient_id)
        if not patient:
            raise NotFound("Patient not found.")
        if not changes:
            return patient

        current = {field: getattr(patient, field) for field in PatientCreate.model_fields}
        merged = validate_patient({**current, **changes}).model_dump(mode="json")
        for field in changes:
            setattr(patient, field, merged[field])

        await db.flush()
        await db.refresh(patient)
        logger.info("Updated patient %s fields %s", patient_id, sorted(changes))
        return patient

    @store_operation("Error permanently deleting patient record")
    async def delete(self, db: AsyncSession, patient_id: str) -> None:
        result = await db.execute(delete(Patient).where(Patient.patient_id == patient_id))
        if result.rowcount == 0:
            raise NotFound("Patient not found or already deleted.")
        logger.info("Deleted patient %s", patient_id)


patient_service = PatientService()
