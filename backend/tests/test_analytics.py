import pytest

from conftest import make_patient

ENDPOINTS = ["conditions", "prescriptions", "avg-age-per-department", "visits-per-month"]


def _history(*conditions):
    return [{"condition": c} for c in conditions]


def _rx(*medications):
    return [{"medication": m, "dosage": "daily"} for m in medications]


def _visits(*dates):
    return [{"date": d, "reason": "Check-up", "doctor": "Dr. Evans"} for d in dates]


async def _create(client, headers, *patients):
    for data in patients:
        resp = await client.post("/api/patients", json=data, headers=headers)
        assert resp.status_code == 201


@pytest.mark.parametrize("endpoint", ENDPOINTS)
async def test_empty_store_yields_empty_list(client, auth_headers, endpoint):
    resp = await client.get(f"/api/analytics/{endpoint}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.parametrize("endpoint", ENDPOINTS)
async def test_analytics_require_token(client, endpoint):
    resp = await client.get(f"/api/analytics/{endpoint}")
    assert resp.status_code == 401


async def test_condition_counts_flatten_every_entry(client, auth_headers):
    await _create(
        client, auth_headers,
        make_patient("P001", medicalHistory=_history("Asthma", "Asthma")),
        make_patient("P002", medicalHistory=_history("Asthma")),
    )
    resp = await client.get("/api/analytics/conditions", headers=auth_headers)
    assert resp.json() == [{"condition": "Asthma", "count": 3}]


async def test_condition_counts_sorted_by_frequency(client, auth_headers):
    await _create(
        client, auth_headers,
        make_patient("P001", medicalHistory=_history("Migraines", "Hypertension")),
        make_patient("P002", medicalHistory=_history("Hypertension", "Anemia")),
        make_patient("P003", medicalHistory=[]),
    )
    resp = await client.get("/api/analytics/conditions", headers=auth_headers)
    assert resp.json() == [
        {"condition": "Hypertension", "count": 2},
        {"condition": "Anemia", "count": 1},
        {"condition": "Migraines", "count": 1},
    ]


async def test_prescription_counts(client, auth_headers):
    await _create(
        client, auth_headers,
        make_patient("P001", currentPrescriptions=_rx("Metformin", "Lisinopril")),
        make_patient("P002", currentPrescriptions=_rx("Lisinopril")),
    )
    resp = await client.get("/api/analytics/prescriptions", headers=auth_headers)
    assert resp.json() == [
        {"medication": "Lisinopril", "count": 2},
        {"medication": "Metformin", "count": 1},
    ]


async def test_average_age_skips_blank_departments(client, auth_headers):
    await _create(
        client, auth_headers,
        make_patient("P001", age=40, department="Cardiology"),
        make_patient("P002", age=60, department="Cardiology"),
        make_patient("P003", age=30, department="ENT"),
        make_patient("P004", age=99, department=""),
        make_patient("P005", age=10, department=None),
    )
    resp = await client.get("/api/analytics/avg-age-per-department", headers=auth_headers)
    assert resp.json() == [
        {"department": "Cardiology", "averageAge": 50.0, "count": 2},
        {"department": "ENT", "averageAge": 30.0, "count": 1},
    ]


async def test_visits_per_month_chronological(client, auth_headers):
    await _create(
        client, auth_headers,
        make_patient("P001", appointmentLogs=_visits("2024-03-02T10:00:00Z", "2024-01-15T09:00:00Z")),
        make_patient("P002", appointmentLogs=_visits("2024-01-31T23:00:00Z")),
        make_patient("P003", appointmentLogs=_visits("2023-12-05T12:00:00Z")),
    )
    resp = await client.get("/api/analytics/visits-per-month", headers=auth_headers)
    assert resp.json() == [
        {"year": 2023, "month": 12, "count": 1},
        {"year": 2024, "month": 1, "count": 2},
        {"year": 2024, "month": 3, "count": 1},
    ]


async def test_visits_bucketed_in_utc(client, auth_headers):
    await _create(client, auth_headers, make_patient("P001", appointmentLogs=_visits("2024-02-01T01:00:00+05:00")))
    resp = await client.get("/api/analytics/visits-per-month", headers=auth_headers)
    assert resp.json() == [{"year": 2024, "month": 1, "count": 1}]


async def test_deleted_patients_leave_analytics(client, auth_headers):
    await _create(
        client, auth_headers,
        make_patient("P001", medicalHistory=_history("Asthma")),
        make_patient("P002", medicalHistory=_history("Asthma")),
    )
    await client.delete("/api/patients/P002", headers=auth_headers)
    resp = await client.get("/api/analytics/conditions", headers=auth_headers)
    assert resp.json() == [{"condition": "Asthma", "count": 1}]
