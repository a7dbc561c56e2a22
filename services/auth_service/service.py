"""
Registration, credential checks and token issuance.

The service is built per request with its database session; callers of
get_current_user() pass the already-verified token claims explicitly.
"""
import structlog
from email_validator import EmailNotValidError, validate_email
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import ConflictError, UnauthorizedError
from shared.observability.metrics import ecomm_auth_events_total
from shared.security.dependencies import TokenClaims
from shared.security.jwt_handler import create_access_token
from shared.validation import Violations

from .models import Role, User
from .repository import UserRepository
from .schemas import AuthResponse, LoginRequest, RegisterRequest, UserInfoResponse

logger = structlog.get_logger(__name__)

_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

INVALID_CREDENTIALS = "Invalid email or password"
EMAIL_TAKEN = "Email already registered"


def validate_credentials(email, password, check_format: bool = True) -> None:
    violations = Violations()
    violations.require_text("email", email, "Email is required")
    violations.require_text("password", password, "Password is required")
    if check_format and email and email.strip() and "email" not in violations.details:
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError:
            violations.add("email", "Email must be a valid email address")
    violations.raise_if_any()


class AuthService:

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def hash_password(password: str) -> str:
        return _pwd_context.hash(password)

    @staticmethod
    def verify_password(plain: str, hashed: str) -> bool:
        return _pwd_context.verify(plain, hashed)

    @staticmethod
    def issue_token(user: User) -> AuthResponse:
        role = user.role.value if isinstance(user.role, Role) else str(user.role)
        token = create_access_token(data={"sub": user.email, "role": role})
        return AuthResponse(token=token)

    async def register(self, data: RegisterRequest) -> AuthResponse:
        validate_credentials(data.email, data.password)
        email = data.email.strip()

        if await UserRepository.exists_by_email(self.db, email):
            ecomm_auth_events_total.labels(event="register", outcome="failure").inc()
            raise ConflictError(EMAIL_TAKEN)

        user = User(
            email=email,
            hashed_password=self.hash_password(data.password),
            role=Role.USER,
        )
        try:
            user = await UserRepository.create(self.db, user)
        except IntegrityError:
            # Lost a race against a concurrent registration of the same email
            await self.db.rollback()
            ecomm_auth_events_total.labels(event="register", outcome="failure").inc()
            raise ConflictError(EMAIL_TAKEN)

        ecomm_auth_events_total.labels(event="register", outcome="success").inc()
        logger.info("user_registered", user_id=user.id)
        return self.issue_token(user)

    async def login(self, data: LoginRequest) -> AuthResponse:
        validate_credentials(data.email, data.password, check_format=False)

        user = await UserRepository.get_by_email(self.db, data.email.strip())
        if not user or not self.verify_password(data.password, user.hashed_password):
            ecomm_auth_events_total.labels(event="login", outcome="failure").inc()
            raise UnauthorizedError(INVALID_CREDENTIALS)

        ecomm_auth_events_total.labels(event="login", outcome="success").inc()
        logger.info("user_logged_in", user_id=user.id)
        return self.issue_token(user)

    async def get_current_user(self, claims: TokenClaims) -> UserInfoResponse:
        user = await UserRepository.get_by_email(self.db, claims.email)
        if not user:
            raise UnauthorizedError("User no longer exists")
        return UserInfoResponse.model_validate(user)
