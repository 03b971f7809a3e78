from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from infrastructure.database.models import Base
from core.config.settings import settings
import os


ASYNC_DATABASE_URL = os.getenv("ASYNC_DATABASE_URL", settings.async_database_url)

# SQLite için connect_args gerekli
connect_args = {"check_same_thread": False} if ASYNC_DATABASE_URL.startswith("sqlite") else {}
async_engine = create_async_engine(ASYNC_DATABASE_URL, connect_args=connect_args)

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False
)


async def get_async_db():
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def create_tables():
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
