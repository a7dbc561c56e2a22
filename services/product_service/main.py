from fastapi import FastAPI

from shared.errors import register_exception_handlers
from shared.observability import setup_observability

from .router import close_product_service, router, public_router

product_app = FastAPI(
    title="Product Service",
    version="1.0.0",
    description="Cached, retrying proxy over the remote product catalog.",
)

# --- OBSERVABILITY BOOTSTRAP ---
setup_observability(product_app, "product_service")
register_exception_handlers(product_app)

product_app.include_router(public_router)
product_app.include_router(router)


@product_app.on_event("shutdown")
async def shutdown_event():
    await close_product_service()
