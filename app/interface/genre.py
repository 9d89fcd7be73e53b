from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional, List, Iterable

from sqlalchemy.ext.asyncio import AsyncSession

ModelType = TypeVar('ModelType')


class BaseGenreRepository(ABC, Generic[ModelType]):
    """Абстрактный репозиторий жанров"""

    @abstractmethod
    async def list_all(self, db: AsyncSession) -> List[ModelType]:
        """Все жанры, отсортированные по названию"""

    @abstractmethod
    async def get(self, db: AsyncSession, id: int, *, for_share: bool = False) -> Optional[ModelType]:
        """
        Получить жанр по ID

        Args:
            db: Асинхронная сессия БД
            id: Идентификатор жанра
            for_share: Заблокировать строку от изменения до конца транзакции

        Returns:
            Optional[ModelType]: Найденный жанр или None
        """

    @abstractmethod
    async def get_by_name(self, db: AsyncSession, name: str) -> Optional[ModelType]:
        """Найти жанр по точному названию"""

    @abstractmethod
    async def count(self, db: AsyncSession) -> int:
        """Количество жанров"""

    @abstractmethod
    async def create(self, db: AsyncSession, *, name: str) -> ModelType:
        """Добавить жанр и выполнить flush"""

    @abstractmethod
    async def create_many(self, db: AsyncSession, names: Iterable[str]) -> List[ModelType]:
        """Добавить несколько жанров одним flush"""
