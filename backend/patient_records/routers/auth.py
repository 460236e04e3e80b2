from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from patient_records.config import Settings, get_settings
from patient_records.database import get_db
from patient_records.schemas.auth import RegisterRequest, LoginRequest, MessageResponse, LoginResponse
from patient_records.services.auth_service import AuthService

router = APIRouter()


def get_auth_service(settings: Settings = Depends(get_settings)) -> AuthService:
    return AuthService(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_in=settings.token_expire_seconds,
    )


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Create an account. Does not log the caller in."""
    await auth_service.register(db, body.username, body.password, body.role)
    return {"message": "User registered successfully"}


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    token = await auth_service.login(db, body.username, body.password)
    return {"message": "Logged in successfully!", "token": token}
