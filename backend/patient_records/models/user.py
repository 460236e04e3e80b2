from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from patient_records.database import Base
from patient_records.security import hash_password, verify_password


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="receptionist")  # admin | doctor | nurse | receptionist
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def password(self):
        raise AttributeError("password is write-only")

    @password.setter
    def password(self, plaintext: str) -> None:
        self.password_hash = hash_password(plaintext)

    def check_password(self, plaintext: str) -> bool:
        return verify_password(plaintext, self.password_hash)
