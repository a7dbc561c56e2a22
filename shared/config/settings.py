import os
import warnings
from decimal import Decimal

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _secret(name: str) -> str:
    value = os.getenv(name, "")
    if not value:
        warnings.warn(
            f"{name} is not set. Using an insecure development default. "
            "Set this env var in production!",
            stacklevel=2,
        )
        value = "insecure-default-change-me"
    return value


# --- Database ---
DB_USER = os.getenv("POSTGRES_USER", "postgres")
DB_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
DB_HOST = os.getenv("POSTGRES_HOST", "localhost")  # In Docker, this will be 'postgres'
DB_PORT = os.getenv("POSTGRES_PORT", "5433")
DB_NAME = os.getenv("POSTGRES_DB", "ecommerce")

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql+asyncpg://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)
DB_ECHO = _flag("DB_ECHO", "false")

# --- Security ---
JWT_SECRET_KEY = _secret("JWT_SECRET_KEY")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
INTERNAL_API_KEY = _secret("INTERNAL_API_KEY")

RATE_LIMIT_ENABLED = _flag("RATE_LIMIT_ENABLED", "true")
AUTH_RATE_LIMIT = os.getenv("AUTH_RATE_LIMIT", "10/minute")

# --- Product catalog ---
FAKESTORE_BASE_URL = os.getenv("FAKESTORE_BASE_URL", "https://fakestoreapi.com")
CATALOG_TIMEOUT_SECONDS = float(os.getenv("CATALOG_TIMEOUT_SECONDS", "5"))
CATALOG_MAX_ATTEMPTS = int(os.getenv("CATALOG_MAX_ATTEMPTS", "3"))
CATALOG_RETRY_BACKOFF_SECONDS = float(os.getenv("CATALOG_RETRY_BACKOFF_SECONDS", "1.0"))

# --- Orders ---
# Stand-in for a product price lookup.
ORDER_UNIT_PRICE = Decimal(os.getenv("ORDER_UNIT_PRICE", "9.99"))

# --- Observability ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
OTEL_ENABLED = _flag("OTEL_ENABLED", "false")
OTLP_ENDPOINT = os.getenv("OTLP_ENDPOINT", "http://localhost:4317")
METRICS_ENABLED = _flag("METRICS_ENABLED", "true")
