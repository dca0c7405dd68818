from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from textstore.core.config import settings

# Асинхронный движок
engine = create_async_engine(settings.database_url, future=True, echo=settings.database_echo)

# Сессии
SessionLocal = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


# Функция для dependency injection в FastAPI
async def get_db():
    async with SessionLocal() as session:
        yield session


async def create_tables() -> None:
    """Создание таблиц, если их еще нет"""
    from textstore.db.base import Base
    import textstore.db.models  # noqa: F401  регистрируем модели в metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
