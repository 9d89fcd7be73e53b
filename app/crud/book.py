from typing import Type, Optional, List, Tuple, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from app.schemas.book import BookFilter
from app.interface.book import BaseBookRepository
from app.models.book import Book as BookModel
from app.models.genre import Genre as GenreModel
from app.tools.logger import setup_logger

# Настройка логирования
logger = setup_logger(__name__)


class BookRepository(BaseBookRepository[BookModel, BookFilter]):
    """Репозиторий для работы с книгами в базе данных."""

    def __init__(self, model: Type[BookModel], genre_model: Type[GenreModel]) -> None:
        """
        Инициализация репозитория.

        Args:
            model: SQLAlchemy модель книги
            genre_model: SQLAlchemy модель жанра для получения названия
        """
        self.model: Type[BookModel] = model
        self.genre_model: Type[GenreModel] = genre_model
        logger.info(f"Инициализация BookRepository для модели: {model.__name__}")

    async def get(self, db: AsyncSession, id: int) -> Optional[BookModel]:
        """
        Получить книгу по ID.

        Args:
            db: Асинхронная сессия БД
            id: Идентификатор книги

        Returns:
            Optional[BookModel]: Найденная книга или None

        Raises:
            SQLAlchemyError: В случае ошибки БД
        """
        try:
            logger.debug(f"Извлечение книги с ID: {id}")
            book = await db.get(self.model, id)
            if not book:
                logger.debug(f"Книга не найдена с ID: {id}")
            return book
        except SQLAlchemyError as e:
            logger.error(f"Ошибка извлечения книги {id}: {str(e)}", exc_info=True)
            raise

    async def find_matching(
            self,
            db: AsyncSession,
            flt: BookFilter
    ) -> List[Tuple[BookModel, Optional[str]]]:
        """
        Найти книги по фильтру.

        Жанр присоединяется внешним соединением: книга с несуществующим
        жанром возвращается с названием None.

        Args:
            db: Асинхронная сессия БД
            flt: Фильтр по жанру и границам рейтинга (включительно)

        Returns:
            List[Tuple[BookModel, Optional[str]]]: Книги в порядке ID и названия жанров

        Raises:
            SQLAlchemyError: В случае ошибки БД
        """
        try:
            logger.debug(f"Поиск книг по фильтру: {flt.model_dump(exclude_none=True)}")
            query = (
                select(self.model, self.genre_model.name)
                .outerjoin(self.genre_model, self.genre_model.id == self.model.genre_id)
            )
            if flt.genre_id is not None:
                query = query.where(self.model.genre_id == flt.genre_id)
            if flt.min_rating is not None:
                query = query.where(self.model.rating >= flt.min_rating)
            if flt.max_rating is not None:
                query = query.where(self.model.rating <= flt.max_rating)

            result = await db.execute(query.order_by(self.model.id))
            rows = [(book, genre_name) for book, genre_name in result.all()]
            logger.debug(f"Найдено {len(rows)} книг")
            return rows
        except SQLAlchemyError as e:
            logger.error(f"Ошибка поиска книг: {str(e)}", exc_info=True)
            raise

    async def create(self, db: AsyncSession, *, values: dict[str, Any]) -> BookModel:
        """
        Добавить книгу в текущую транзакцию.

        Args:
            db: Асинхронная сессия БД
            values: Поля книги

        Returns:
            BookModel: Книга с присвоенным ID

        Raises:
            SQLAlchemyError: В случае ошибки БД или нарушения ограничений
        """
        try:
            logger.info(f"Создание новой книги: {values.get('title')}")
            db_obj = self.model(**values)
            db.add(db_obj)
            await db.flush()
            logger.info(f"Книга добавлена с ID: {db_obj.id}")
            return db_obj
        except SQLAlchemyError as e:
            logger.error(f"Ошибка создания книги: {str(e)}", exc_info=True)
            raise

    async def update(
            self,
            db: AsyncSession,
            *,
            id: int,
            values: dict[str, Any]
    ) -> Optional[BookModel]:
        """
        Заменить поля существующей книги.

        Args:
            db: Асинхронная сессия БД
            id: Идентификатор книги
            values: Новые значения всех изменяемых полей

        Returns:
            Optional[BookModel]: Обновленная книга или None, если не найдена

        Raises:
            SQLAlchemyError: В случае ошибки БД или нарушения ограничений
        """
        try:
            logger.info(f"Обновление книги с ID: {id}")
            book = await db.get(self.model, id)
            if book is None:
                logger.warning(f"Книга с ID {id} для обновления не найдена")
                return None
            for field, value in values.items():
                setattr(book, field, value)
            await db.flush()
            logger.info(f"Данные книги с ID {id} обновлены")
            return book
        except SQLAlchemyError as e:
            logger.error(f"Ошибка обновления книги {id}: {str(e)}", exc_info=True)
            raise

    async def delete(self, db: AsyncSession, *, id: int) -> Optional[BookModel]:
        """
        Удалить книгу.

        Args:
            db: Асинхронная сессия БД
            id: Идентификатор книги

        Returns:
            Optional[BookModel]: Удаленная книга или None, если не найдена

        Raises:
            SQLAlchemyError: В случае ошибки БД
        """
        try:
            logger.info(f"Удаление книги с идентификатором: {id}")
            book = await db.get(self.model, id)
            if book is None:
                logger.warning(f"Книга с ID {id} не найдена для удаления")
                return None
            await db.delete(book)
            await db.flush()
            logger.info(f"Книга с ID: {id} удалена")
            return book
        except SQLAlchemyError as e:
            logger.error(f"Ошибка удаления книги {id}: {str(e)}", exc_info=True)
            raise


# Инициализация репозиториев
try:
    book_db_crud = BookRepository(model=BookModel, genre_model=GenreModel)
    logger.info("Репозиторий книг инициализирован успешно")
except Exception as e:
    logger.critical(f"Не удалось инициализировать репозиторий книг: {str(e)}", exc_info=True)
    raise
