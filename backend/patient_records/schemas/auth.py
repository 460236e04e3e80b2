from pydantic import BaseModel, Field
from typing import Literal

Role = Literal["admin", "doctor", "nurse", "receptionist"]


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1)
    role: Role = "receptionist"


class LoginRequest(BaseModel):
    username: str
    password: str


class MessageResponse(BaseModel):
    message: str


class LoginResponse(MessageResponse):
    token: str
