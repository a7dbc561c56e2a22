from fastapi import FastAPI

from shared.config.database import SERVICE_SCHEMAS, engine, init_models
from shared.errors import register_exception_handlers
from shared.observability import setup_observability
from shared.security import limiter

# IMPORTANT: import models so they register with Base
from services.auth_service import models as auth_models  # noqa: F401
from services.order_service import models as order_models  # noqa: F401
from services.payment_service import models as payment_models  # noqa: F401

from services.auth_service.router import router as auth_router
from services.order_service.router import router as order_router
from services.payment_service.router import router as payment_router
from services.product_service.router import close_product_service, router as product_router

app = FastAPI(title="Ecommerce Cluster")

setup_observability(app, "ecommerce_cluster")
register_exception_handlers(app)
app.state.limiter = limiter


@app.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "cluster", "status": "running"}


@app.on_event("startup")
async def startup_event():
    await init_models(engine, *SERVICE_SCHEMAS)


@app.on_event("shutdown")
async def shutdown_event():
    await close_product_service()


app.include_router(auth_router)
app.include_router(order_router)
app.include_router(payment_router)
app.include_router(product_router)
