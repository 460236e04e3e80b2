import pytest
from sqlalchemy.exc import OperationalError

from patient_records.exceptions import DuplicateKey, NotFound, StoreError
from patient_records.schemas.patient import PatientUpdate
from patient_records.security import hash_password, verify_password
from patient_records.services.auth_service import AuthService
from patient_records.services.patient_service import patient_service, validate_patient
from patient_records.services.store import store_operation
from conftest import TEST_SECRET, make_patient


def test_hash_is_salted_and_verifiable():
    first, second = hash_password("hunter2"), hash_password("hunter2")
    assert first != second
    assert "hunter2" not in first
    assert verify_password("hunter2", first)
    assert not verify_password("hunter3", first)


async def test_store_failures_become_store_error():
    @store_operation("Error fetching patient record")
    async def broken():
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    with pytest.raises(StoreError) as exc_info:
        await broken()
    assert exc_info.value.message == "Error fetching patient record"
    assert exc_info.value.status_code == 500
    assert "connection refused" in exc_info.value.error


async def test_store_operation_passes_domain_errors_through():
    @store_operation("Error fetching patient record")
    async def missing():
        raise NotFound("Patient not found.")

    with pytest.raises(NotFound):
        await missing()


async def test_register_duplicate_raises(db):
    service = AuthService(TEST_SECRET)
    await service.register(db, "dr.who", "tardis")
    with pytest.raises(DuplicateKey):
        await service.register(db, "dr.who", "dalek")


async def test_service_update_strips_identifier(db):
    await patient_service.create(db, validate_patient(make_patient("P001")))
    updated = await patient_service.update(db, "P001", PatientUpdate(patient_id="P999", age=36))
    assert updated.patient_id == "P001"
    assert updated.age == 36


async def test_service_delete_twice(db):
    await patient_service.create(db, validate_patient(make_patient("P001")))
    await patient_service.delete(db, "P001")
    with pytest.raises(NotFound):
        await patient_service.delete(db, "P001")
