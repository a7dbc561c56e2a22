from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyHeader, OAuth2PasswordBearer

from shared.errors import UnauthorizedError

from .api_key import verify_api_key
from .jwt_handler import verify_access_token

# Defines the expected header format (Bearer <token>)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)

# Defines the expected internal service header
api_key_header = APIKeyHeader(name="X-Internal-API-Key", auto_error=False)


@dataclass(frozen=True)
class TokenClaims:
    email: str
    role: Optional[str] = None


def decode_token_claims(token: Optional[str]) -> TokenClaims:
    """Turns a raw bearer token into verified claims or raises UnauthorizedError."""
    if not token:
        raise UnauthorizedError("Missing bearer token")

    payload = verify_access_token(token)
    if payload is None:
        raise UnauthorizedError("Invalid or expired token")

    email = payload.get("sub")
    if not email:
        raise UnauthorizedError("Invalid or expired token")
    return TokenClaims(email=email, role=payload.get("role"))


async def get_token_claims(request: Request, token: Optional[str] = Depends(oauth2_scheme)) -> TokenClaims:
    """Dependency to validate the JWT and hand its claims to the route."""
    claims = decode_token_claims(token)
    # Store in request state for downstream use (like rate limiting)
    request.state.user_email = claims.email
    return claims


async def verify_internal_api_key(api_key: Optional[str] = Depends(api_key_header)) -> bool:
    """Dependency to validate service-to-service internal requests."""
    if not verify_api_key(api_key):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or missing X-Internal-API-Key header"
        )
    return True
