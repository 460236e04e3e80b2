import uvicorn
from patient_records.config import get_settings


if __name__ == "__main__":
    uvicorn.run("patient_records.main:app", host="0.0.0.0", port=get_settings().port)
