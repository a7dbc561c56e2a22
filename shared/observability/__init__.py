from .setup import setup_observability
from .metrics import (
    ecomm_auth_events_total,
    ecomm_orders_created_total,
    ecomm_order_amount,
    ecomm_payments_total,
    ecomm_catalog_cache_total,
    ecomm_catalog_retries_total
)
