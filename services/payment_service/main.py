from fastapi import FastAPI

from shared.config.database import engine, init_models
from shared.errors import register_exception_handlers
from shared.observability.setup import setup_observability

from .models import Payment  # noqa: F401 registers model with Base
from .router import router, public_router


payment_app = FastAPI(title="Payment Service", version="1.0.0")

setup_observability(payment_app, "payment_service")
register_exception_handlers(payment_app)

payment_app.include_router(router)
payment_app.include_router(public_router)


@payment_app.on_event("startup")
async def startup_event():
    await init_models(engine, "payment_schema")
