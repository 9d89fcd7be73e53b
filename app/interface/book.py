from fastapi import APIRouter
from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional, List, Tuple, Any
from sqlalchemy.ext.asyncio import AsyncSession

from app.tools.logger import setup_logger

logger = setup_logger(__name__)

# Аннотации типов
ModelType = TypeVar('ModelType')  # Тип SQLAlchemy модели
FilterSchemaType = TypeVar('FilterSchemaType')


class BaseBookRouter(ABC):
    """Абстрактный базовый класс для всех книжных роутеров"""

    def __init__(self) -> None:
        """Инициализация роутера с настройкой маршрутов"""
        self.router: APIRouter = APIRouter()
        logger.info(f"Инициализация {self.__class__.__name__}")
        self._setup_routes()
        logger.debug("Настройка маршрутов завершена")

    @abstractmethod
    def _setup_routes(self) -> None:
        """Настройка маршрутов API"""

    @abstractmethod
    async def read_books(self, *args: Any, **kwargs: Any) -> Any:
        """
        Получить список книг с фильтрами

        Raises:
            HTTPException: В случае ошибки чтения или неверного фильтра
        """

    @abstractmethod
    async def create_book(self, *args: Any, **kwargs: Any) -> Any:
        """
        Создать книгу

        Raises:
            HTTPException: В случае ошибки создания
        """

    @abstractmethod
    async def update_book(self, *args: Any, **kwargs: Any) -> Any:
        """
        Заменить поля книги

        Raises:
            HTTPException: Если книга не найдена или ошибка обновления
        """

    @abstractmethod
    async def delete_book(self, *args: Any, **kwargs: Any) -> Any:
        """
        Удалить книгу

        Raises:
            HTTPException: Если книга не найдена или ошибка удаления
        """


class BaseBookRepository(ABC, Generic[ModelType, FilterSchemaType]):
    """Абстрактный репозиторий книг.

    Репозиторий не проверяет данные и не фиксирует транзакции:
    границы транзакций определяет сервис.
    """

    @abstractmethod
    async def get(self, db: AsyncSession, id: int) -> Optional[ModelType]:
        """
        Получить книгу по ID

        Args:
            db: Асинхронная сессия БД
            id: Идентификатор книги

        Returns:
            Optional[ModelType]: Найденная книга или None
        """

    @abstractmethod
    async def find_matching(
            self,
            db: AsyncSession,
            flt: FilterSchemaType
    ) -> List[Tuple[ModelType, Optional[str]]]:
        """
        Найти книги по фильтру вместе с названием жанра

        Args:
            db: Асинхронная сессия БД
            flt: Фильтр по жанру и диапазону рейтинга

        Returns:
            List[Tuple[ModelType, Optional[str]]]: Книги и названия жанров
        """

    @abstractmethod
    async def create(self, db: AsyncSession, *, values: dict[str, Any]) -> ModelType:
        """Добавить книгу в сессию и выполнить flush"""

    @abstractmethod
    async def update(self, db: AsyncSession, *, id: int, values: dict[str, Any]) -> Optional[ModelType]:
        """Заменить поля книги; None, если книга не найдена"""

    @abstractmethod
    async def delete(self, db: AsyncSession, *, id: int) -> Optional[ModelType]:
        """Удалить книгу; None, если книга не найдена"""
