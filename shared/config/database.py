from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from . import settings

# Each service owns one PostgreSQL schema to simulate microservice isolation.
SERVICE_SCHEMAS = ("auth_schema", "order_schema", "payment_schema")

Base = declarative_base()


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Creates an async engine. SQLite has no schemas, so they are translated away."""
    if url.startswith("sqlite"):
        engine = create_async_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        return engine.execution_options(
            schema_translate_map={schema: None for schema in SERVICE_SCHEMAS}
        )
    return create_async_engine(url, echo=echo, pool_pre_ping=True)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, expire_on_commit=False)


engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

AsyncSessionLocal = build_session_factory(engine)


async def get_db():
    async with AsyncSessionLocal() as session:
        yield session


async def init_models(bind: AsyncEngine, *schemas: str) -> None:
    """Creates the given schemas (PostgreSQL only) and every registered table."""
    async with bind.begin() as conn:
        if bind.dialect.name == "postgresql":
            for schema in schemas:
                await conn.execute(text(f"CREATE SCHEMA IF NOT EXISTS {schema}"))
        await conn.run_sync(Base.metadata.create_all)
