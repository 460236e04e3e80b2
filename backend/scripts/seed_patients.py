"""
Insert the sample patient set. Patients whose ID already exists, or that fail
validation, are skipped, so the script can be re-run safely.
Run with: python -m scripts.seed_patients
"""

import asyncio
from patient_records.database import engine, async_session, Base
from patient_records.exceptions import DuplicateKey, ValidationError
from patient_records.services.patient_service import patient_service, validate_patient
import patient_records.models  # noqa: F401


def _history(condition, diagnosed, notes):
    return {"condition": condition, "diagnosisDate": diagnosed, "notes": notes}


def _rx(medication, dosage, start, end=None):
    return {"medication": medication, "dosage": dosage, "startDate": start, "endDate": end}


def _visit(day, reason, doctor):
    return {"date": day, "reason": reason, "doctor": doctor}


SAMPLE_PATIENTS = [
    {
        "patientId": "P001", "name": "Alice Johnson", "age": 35, "gender": "Female", "bloodGroup": "A+",
        "contactInfo": "alice.j@example.com", "allergies": ["Pollen", "Dust"], "department": "Pulmonology",
        "medicalHistory": [
            _history("Seasonal Allergies", "2020-03-15", "Controlled with antihistamines."),
            _history("Mild Asthma", "2021-09-01", "Uses inhaler as needed."),
        ],
        "currentPrescriptions": [_rx("Fexofenadine", "180mg daily", "2024-03-01", "2024-09-30")],
        "doctorNotes": ["Review next season"],
        "appointmentLogs": [
            _visit("2024-05-10", "Follow-up", "Dr. Smith"),
            _visit("2024-06-05", "Acute Asthma Exacerbation", "Dr. Jones"),
        ],
    },
    {
        "patientId": "P002", "name": "Bob Williams", "age": 50, "gender": "Male", "bloodGroup": "O-",
        "contactInfo": "bob.w@example.com", "allergies": ["Penicillin"], "department": "Cardiology",
        "medicalHistory": [
            _history("Hypertension", "2010-11-20", "Managed with medication."),
            _history("Hypercholesterolemia", "2015-07-01", "Requires dietary management."),
        ],
        "currentPrescriptions": [
            _rx("Lisinopril", "10mg daily", "2023-01-01"),
            _rx("Atorvastatin", "20mg daily", "2023-01-01"),
        ],
        "doctorNotes": ["Regular check-up required"],
        "appointmentLogs": [
            _visit("2024-04-20", "Routine check-up", "Dr. Smith"),
            _visit("2024-06-15", "Blood Pressure Review", "Dr. Smith"),
        ],
    },
    {
        "patientId": "P003", "name": "Charlie Brown", "age": 28, "gender": "Male", "bloodGroup": "B+",
        "contactInfo": "charlie.b@example.com", "department": "General Practice",
        "doctorNotes": ["Annual physical done"],
        "appointmentLogs": [_visit("2024-01-10", "Annual Physical", "Dr. Jones")],
    },
    {
        "patientId": "P004", "name": "Diana Prince", "age": 42, "gender": "Female", "bloodGroup": "AB+",
        "contactInfo": "diana.p@example.com", "allergies": ["Shellfish"], "department": "Neurology",
        "medicalHistory": [_history("Migraines", "2018-05-01", "Sporadic, triggered by stress.")],
        "currentPrescriptions": [_rx("Sumatriptan", "50mg as needed", "2023-06-01")],
        "doctorNotes": ["Avoid triggers"],
        "appointmentLogs": [_visit("2024-02-01", "Migraine consultation", "Dr. Chang")],
    },
    {
        "patientId": "P005", "name": "Eve Adams", "age": 65, "gender": "Female", "bloodGroup": "O+",
        "contactInfo": "eve.a@example.com", "department": "Endocrinology",
        "medicalHistory": [
            _history("Osteoarthritis", "2005-01-01", "Knee pain."),
            _history("Type 2 Diabetes", "2022-03-10", "Early stage, dietary management."),
        ],
        "currentPrescriptions": [_rx("Metformin", "500mg daily", "2022-03-15")],
        "doctorNotes": ["Monitor blood sugar"],
        "appointmentLogs": [
            _visit("2024-03-01", "Diabetes review", "Dr. Evans"),
            _visit("2024-05-25", "Joint pain check", "Dr. Evans"),
        ],
    },
    {
        "patientId": "P006", "name": "Frank Miller", "age": 12, "gender": "Male", "bloodGroup": "A-",
        "contactInfo": "frank.m@example.com", "allergies": ["Peanuts"], "department": "Pediatrics",
        "medicalHistory": [_history("Childhood Asthma", "2018-02-01", "Well controlled.")],
        "currentPrescriptions": [_rx("Albuterol", "As needed", "2023-01-01")],
        "doctorNotes": ["Emergency inhaler prescribed"],
        "appointmentLogs": [_visit("2024-04-05", "Asthma review", "Dr. Peterson")],
    },
    {
        "patientId": "P007", "name": "Grace Taylor", "age": 70, "gender": "Female", "bloodGroup": "B-",
        "contactInfo": "grace.t@example.com", "department": "Cardiology",
        "medicalHistory": [
            _history("Osteoporosis", "2010-01-01", "Taking calcium supplements."),
            _history("Congestive Heart Failure", "2019-08-15", "Stable condition."),
        ],
        "currentPrescriptions": [_rx("Furosemide", "20mg daily", "2023-01-01")],
        "doctorNotes": ["Cardiology follow-up annually"],
        "appointmentLogs": [_visit("2024-01-20", "Cardiology review", "Dr. Smith")],
    },
    {
        "patientId": "P008", "name": "Henry Wilson", "age": 22, "gender": "Male", "bloodGroup": "A+",
        "contactInfo": "henry.w@example.com", "department": "Orthopedics",
        "medicalHistory": [_history("Knee Ligament Sprain", "2023-07-01", "Fully recovered after physical therapy.")],
        "doctorNotes": ["Physiotherapy completed"],
        "appointmentLogs": [_visit("2023-12-01", "Post-PT check", "Dr. Green")],
    },
    {
        "patientId": "P009", "name": "Ivy Scott", "age": 30, "gender": "Female", "bloodGroup": "O+",
        "contactInfo": "ivy.s@example.com", "department": "Hematology",
        "medicalHistory": [_history("Iron Deficiency Anemia", "2021-04-10", "Controlled with supplements.")],
        "currentPrescriptions": [_rx("Iron Sulfate", "325mg daily", "2021-04-15")],
        "doctorNotes": ["Iron supplements continued"],
        "appointmentLogs": [_visit("2024-02-14", "Anemia review", "Dr. Evans")],
    },
    {
        "patientId": "P010", "name": "Jack King", "age": 55, "gender": "Male", "bloodGroup": "AB-",
        "contactInfo": "jack.k@example.com", "allergies": ["Dust Mites"], "department": "ENT",
        "medicalHistory": [_history("Chronic Sinusitis", "2017-11-01", "Recurrent infections.")],
        "currentPrescriptions": [_rx("Fluticasone Nasal Spray", "2 sprays daily", "2024-01-01")],
        "doctorNotes": ["Referral to ENT"],
        "appointmentLogs": [_visit("2024-03-20", "Sinusitis consultation", "Dr. Peterson")],
    },
]


async def seed() -> tuple[int, int]:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    inserted = skipped = 0
    for data in SAMPLE_PATIENTS:
        async with async_session() as db:
            try:
                patient = await patient_service.create(db, validate_patient(data))
                await db.commit()
                print(f"Inserted patient: {patient.name} ({patient.patient_id})")
                inserted += 1
            except DuplicateKey:
                print(f"Patient with ID {data['patientId']} already exists. Skipping.")
                skipped += 1
            except ValidationError as e:
                print(f"Patient with ID {data.get('patientId')} rejected: {e.message} {e.error}. Skipping.")
                skipped += 1

    return inserted, skipped


async def main():
    print("Starting database seeding...")
    try:
        inserted, skipped = await seed()
    finally:
        await engine.dispose()
    print("Seeding complete!")
    print(f"Total patients inserted: {inserted}")
    print(f"Total patients skipped: {skipped}")


if __name__ == "__main__":
    asyncio.run(main())
