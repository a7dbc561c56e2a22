from fastapi import FastAPI

from shared.config.database import engine, init_models
from shared.errors import register_exception_handlers
from shared.observability import setup_observability

from .models import Order, OrderItem  # noqa: F401 registers models with Base
from .router import router, public_router

order_app = FastAPI(title="Order Service", version="1.0.0")

# --- OBSERVABILITY BOOTSTRAP ---
setup_observability(order_app, "order_service")
register_exception_handlers(order_app)

order_app.include_router(public_router)
order_app.include_router(router)


@order_app.on_event("startup")
async def startup_event():
    await init_models(engine, "order_schema")
