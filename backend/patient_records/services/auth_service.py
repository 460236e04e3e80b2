import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select
from patient_records.auth import create_token, ALGORITHM, TOKEN_EXPIRE_SECONDS
from patient_records.exceptions import AuthenticationFailure, DuplicateKey
from patient_records.models.user import User
from patient_records.security import dummy_verify
from patient_records.services.store import store_operation

logger = logging.getLogger(__name__)


class AuthService:
    """Registers users and exchanges credentials for signed session tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = ALGORITHM,
        expires_in: int = TOKEN_EXPIRE_SECONDS,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_in = expires_in

    @store_operation("Server error during registration")
    async def register(
        self,
        db: AsyncSession,
        username: str,
        password: str,
        role: str = "receptionist",
    ) -> User:
        existing = await db.scalar(select(User).where(User.username == username))
        if existing:
            raise DuplicateKey("User already exists")

        user = User(username=username, role=role)
        user.password = password
        db.add(user)
        try:
            await db.flush()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same name
            await db.rollback()
            raise DuplicateKey("User already exists")

        logger.info("Registered user %s (%s)", username, role)
        return user

    @store_operation("Server error during login")
    async def login(self, db: AsyncSession, username: str, password: str) -> str:
        user = await db.scalar(select(User).where(User.username == username))
        if not user:
            dummy_verify()
            logger.warning("Login failed for %s", username)
            raise AuthenticationFailure()
        if not user.check_password(password):
            logger.warning("Login failed for %s", username)
            raise AuthenticationFailure()
        return self.issue_token(user)

    def issue_token(self, user: User) -> str:
        return create_token(user, self.secret_key, self.algorithm, self.expires_in)
