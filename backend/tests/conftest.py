import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from patient_records.config import get_settings
from patient_records.database import Base, get_db
from patient_records.main import app

get_settings.cache_clear()

TEST_SECRET = "test-secret"


def make_patient(patient_id="P001", **overrides):
    data = {
        "patientId": patient_id,
        "name": "Alice Johnson",
        "age": 35,
        "gender": "Female",
        "bloodGroup": "A+",
        "department": "Pulmonology",
        "contactInfo": "alice.j@example.com",
        "allergies": ["Pollen", "Dust"],
        "medicalHistory": [
            {"condition": "Mild Asthma", "diagnosisDate": "2021-09-01T00:00:00Z", "notes": "Uses inhaler as needed."}
        ],
        "currentPrescriptions": [
            {"medication": "Fexofenadine", "dosage": "180mg daily", "startDate": "2024-03-01T00:00:00Z", "endDate": None}
        ],
        "doctorNotes": ["Review next season"],
        "appointmentLogs": [
            {"date": "2024-05-10T09:30:00Z", "reason": "Follow-up", "doctor": "Dr. Smith"}
        ],
        "appointmentReminders": [],
    }
    data.update(overrides)
    return data


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def auth_headers(client):
    credentials = {"username": "dr.smith", "password": "correct horse", "role": "doctor"}
    resp = await client.post("/api/auth/register", json=credentials)
    assert resp.status_code == 201
    resp = await client.post("/api/auth/login", json={"username": "dr.smith", "password": "correct horse"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}
