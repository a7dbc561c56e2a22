from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config import settings
from shared.config.database import get_db
from shared.security import TokenClaims, get_token_claims, limiter

from .schemas import AuthResponse, LoginRequest, RegisterRequest, UserInfoResponse
from .service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])
public_router = APIRouter()  # For any public endpoints (e.g. health check)


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "auth", "status": "running"}


@router.post(
    "/register",
    response_model=AuthResponse,
    summary="Register a new user account and receive a token",
)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def register(
    request: Request,  # slowapi needs the request to build its key
    payload: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
):
    return await service.register(payload)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Authenticate and receive a JWT access token",
)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login(
    request: Request,
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    return await service.login(payload)


@router.get(
    "/me",
    response_model=UserInfoResponse,
    summary="Get the current authenticated user's profile",
)
async def get_me(
    claims: TokenClaims = Depends(get_token_claims),
    service: AuthService = Depends(get_auth_service),
):
    return await service.get_current_user(claims)
