from prometheus_client import Counter, Histogram

# Business Metrics
ecomm_auth_events_total = Counter(
    "ecomm_auth_events_total",
    "Authentication attempts",
    ["event", "outcome"]  # event: 'register', 'login'; outcome: 'success', 'failure'
)

ecomm_orders_created_total = Counter(
    "ecomm_orders_created_total",
    "Total orders persisted"
)

ecomm_order_amount = Histogram(
    "ecomm_order_amount",
    "Order total amount",
    buckets=(5, 10, 25, 50, 100, 250, 500, 1000, 5000)
)

ecomm_payments_total = Counter(
    "ecomm_payments_total",
    "Total payment attempts recorded",
    ["status"]  # Labels: 'PAID', 'FAILED'
)

ecomm_catalog_cache_total = Counter(
    "ecomm_catalog_cache_total",
    "Catalog cache lookups",
    ["region", "result"]  # result: 'hit' or 'miss'
)

ecomm_catalog_retries_total = Counter(
    "ecomm_catalog_retries_total",
    "Failed catalog attempts that triggered a retry or exhausted the budget",
    ["operation"]
)
