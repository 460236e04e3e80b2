import pytest
from sqlalchemy import select

import scripts.seed_patients as seed_patients
from patient_records.models.patient import Patient
from conftest import make_patient


@pytest.fixture
def seed_store(monkeypatch, engine, session_factory):
    monkeypatch.setattr(seed_patients, "engine", engine)
    monkeypatch.setattr(seed_patients, "async_session", session_factory)
    return session_factory


async def test_seed_is_idempotent(seed_store):
    assert await seed_patients.seed() == (10, 0)
    assert await seed_patients.seed() == (0, 10)

    async with seed_store() as session:
        ids = (await session.scalars(select(Patient.patient_id).order_by(Patient.id))).all()
    assert ids == [f"P{i:03d}" for i in range(1, 11)]


async def test_seed_skips_invalid_patient_and_continues(seed_store, monkeypatch, capsys):
    samples = [make_patient("P001"), make_patient("P002", gender="Unknown"), make_patient("P003")]
    monkeypatch.setattr(seed_patients, "SAMPLE_PATIENTS", samples)

    assert await seed_patients.seed() == (2, 1)
    assert "Patient with ID P002 rejected: Validation failed" in capsys.readouterr().out

    async with seed_store() as session:
        ids = (await session.scalars(select(Patient.patient_id).order_by(Patient.id))).all()
    assert ids == ["P001", "P003"]
