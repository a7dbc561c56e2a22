from typing import Optional

from shared.schemas import CamelModel

from .models import Role


class RegisterRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AuthResponse(CamelModel):
    token: str
    token_type: str = "Bearer"


class UserInfoResponse(CamelModel):
    id: int
    email: str
    role: Role
