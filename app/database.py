from typing import AsyncGenerator, Any

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, AsyncEngine, async_sessionmaker
from sqlalchemy.orm import declarative_base

from app.config import DATABASE_URL
from app.tools.logger import setup_logger

# Настройка логирования
logger = setup_logger(__name__)

# Инициализация движка БД
engine: AsyncEngine
AsyncSessionLocal: async_sessionmaker[AsyncSession]

try:
    engine = create_async_engine(
        DATABASE_URL,
        echo=False,
        pool_pre_ping=True,
        pool_recycle=3600
    )
    logger.info("Движок базы данных создан")

    AsyncSessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    logger.info("Асинхронный сеанс настроен")

except Exception as e:
    logger.critical(f"Не удалось инициализировать соединение с базой данных: {str(e)}")
    raise

Base: Any = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Асинхронный генератор сессий БД.

    Сессия закрывается при любом исходе запроса; незавершенная
    транзакция при закрытии откатывается.

    Yields:
        AsyncSession: Асинхронная сессия для работы с БД

    Raises:
        HTTPException: В случае ошибок работы с БД
    """
    session: AsyncSession | None = None
    try:
        session = AsyncSessionLocal()
        logger.debug("Сеанс базы данных создан")
        yield session
    except SQLAlchemyError as e:
        logger.error(f"Ошибка базы данных: {str(e)}")
        if session is not None:
            await session.rollback()
        raise HTTPException(
            status_code=500,
            detail="Database operation failed"
        ) from e
    finally:
        if session is not None:
            await session.close()
            logger.debug("Сеанс базы данных закрыт")


async def create_tables(bind: AsyncEngine | None = None) -> None:
    """
    Создает таблицы в базе данных.

    Args:
        bind: Асинхронный движок SQLAlchemy (по умолчанию основной движок)
    """
    # Импорт регистрирует модели в Base.metadata
    from app.models import book, genre  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Таблицы базы данных созданы успешно")
