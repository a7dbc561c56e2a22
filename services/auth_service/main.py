from fastapi import FastAPI

from shared.config.database import engine, init_models
from shared.errors import register_exception_handlers
from shared.observability.setup import setup_observability
from shared.security import limiter

from .models import User  # noqa: F401 registers model with SQLAlchemy Base
from .router import router, public_router

auth_app = FastAPI(
    title="Auth Service",
    version="1.0.0",
    description="JWT authentication: register, login, current user.",
)

setup_observability(auth_app, "auth_service")
register_exception_handlers(auth_app)

auth_app.state.limiter = limiter

auth_app.include_router(router)
auth_app.include_router(public_router)


@auth_app.on_event("startup")
async def startup_event() -> None:
    await init_models(engine, "auth_schema")
