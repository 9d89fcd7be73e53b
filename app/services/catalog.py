import math
from typing import Any, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import DEFAULT_GENRES, STRICT_GENRE_ON_UPDATE
from app.crud.book import book_db_crud, BookRepository
from app.crud.genre import genre_db_crud, GenreRepository
from app.exceptions import (
    AlreadyExistsError,
    InvalidArgumentError,
    InvalidReferenceError,
    MissingFieldsError,
    NotFoundError,
    ValidationFailureError,
)
from app.models.book import Book as BookModel
from app.models.genre import Genre as GenreModel
from app.schemas.book import BookFilter, BookOut
from app.tools.identifiers import parse_id
from app.tools.logger import setup_logger

logger = setup_logger(__name__)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _parse_number(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{field} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"{field} must be a number")
    if math.isnan(number):
        raise InvalidArgumentError(f"{field} must be a number")
    return number


class CatalogService:
    """
    Сервис каталога: фильтрация, проверка данных и транзакционная запись.

    Методы получают сессию запроса и сами определяют границы транзакций.
    Ошибки предметной области поднимаются как подклассы CatalogError.
    """

    def __init__(
            self,
            books: BookRepository = book_db_crud,
            genres: GenreRepository = genre_db_crud,
            strict_genre_on_update: bool = STRICT_GENRE_ON_UPDATE
    ) -> None:
        self.books = books
        self.genres = genres
        self.strict_genre_on_update = strict_genre_on_update

    @staticmethod
    def _book_values(title: Any, author: Any, genre_id: Any, rating: Any) -> dict[str, Any]:
        """
        Проверяет наличие всех полей книги и приводит их к типам хранилища.

        Raises:
            MissingFieldsError: Если хотя бы одно поле отсутствует или пустое
            InvalidReferenceError: Если genre_id синтаксически неверен
            InvalidArgumentError: Если рейтинг не является числом
        """
        if any(_is_blank(value) for value in (title, author, genre_id, rating)):
            raise MissingFieldsError("Missing required fields")

        parsed_genre_id = parse_id(genre_id)
        if parsed_genre_id is None:
            raise InvalidReferenceError("Invalid genre ID")

        return {
            "title": title,
            "author": author,
            "genre_id": parsed_genre_id,
            "rating": _parse_number(rating, "Rating"),
        }

    @staticmethod
    def _parse_bound(value: Any, field: str) -> Optional[float]:
        if _is_blank(value):
            return None
        return _parse_number(value, field)

    async def list_books(
            self,
            db: AsyncSession,
            *,
            genre: Any = None,
            min_rating: Any = None,
            max_rating: Any = None
    ) -> List[BookOut]:
        """
        Список книг с необязательными фильтрами.

        Args:
            db: Асинхронная сессия БД
            genre: Идентификатор жанра
            min_rating: Нижняя граница рейтинга (включительно)
            max_rating: Верхняя граница рейтинга (включительно)

        Returns:
            List[BookOut]: Книги с названием жанра; None для висячей ссылки

        Raises:
            InvalidArgumentError: Неверный идентификатор жанра или граница рейтинга
        """
        flt = BookFilter()
        if not _is_blank(genre):
            genre_id = parse_id(genre)
            if genre_id is None:
                logger.warning(f"Неверный идентификатор жанра в фильтре: {genre!r}")
                raise InvalidArgumentError("Invalid genre ID")
            flt.genre_id = genre_id
        flt.min_rating = self._parse_bound(min_rating, "minRating")
        flt.max_rating = self._parse_bound(max_rating, "maxRating")

        rows = await self.books.find_matching(db, flt)
        return [
            BookOut(
                book_id=book.id,
                title=book.title,
                author=book.author,
                genre_id=book.genre_id,
                genre_name=genre_name,
                rating=book.rating,
            )
            for book, genre_name in rows
        ]

    async def create_book(
            self,
            db: AsyncSession,
            *,
            title: Any,
            author: Any,
            genre_id: Any,
            rating: Any
    ) -> BookModel:
        """
        Добавить книгу после проверки полей и существования жанра.

        Returns:
            BookModel: Сохраненная книга

        Raises:
            MissingFieldsError: Отсутствуют обязательные поля
            InvalidReferenceError: Жанр не существует
            ValidationFailureError: Хранилище отклонило запись (рейтинг вне [0, 5])
        """
        values = self._book_values(title, author, genre_id, rating)
        try:
            genre = await self.genres.get(db, values["genre_id"])
            if genre is None:
                logger.warning(f"Жанр с ID {values['genre_id']} не найден")
                raise InvalidReferenceError("Invalid genre ID")
            book = await self.books.create(db, values=values)
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            logger.warning(f"Книга отклонена хранилищем: {str(e.orig)}")
            raise ValidationFailureError("Rating must be between 0 and 5") from e
        except Exception:
            await db.rollback()
            raise
        logger.info(f"Книга '{book.title}' создана с ID: {book.id}")
        return book

    async def update_book(
            self,
            db: AsyncSession,
            book_id: Any,
            *,
            title: Any,
            author: Any,
            genre_id: Any,
            rating: Any
    ) -> BookModel:
        """
        Полная замена полей книги.

        Существование жанра проверяется только при strict_genre_on_update.

        Raises:
            NotFoundError: Книга не найдена
            MissingFieldsError: Передан неполный набор полей
            InvalidReferenceError: Жанр не существует (строгий режим)
            ValidationFailureError: Хранилище отклонило запись
        """
        parsed_id = parse_id(book_id)
        if parsed_id is None:
            logger.warning(f"Неверный идентификатор книги: {book_id!r}")
            raise NotFoundError("Book not found")
        try:
            if await self.books.get(db, parsed_id) is None:
                logger.warning(f"Книга с ID {parsed_id} для обновления не найдена")
                raise NotFoundError("Book not found")
            values = self._book_values(title, author, genre_id, rating)
            if self.strict_genre_on_update:
                genre = await self.genres.get(db, values["genre_id"])
                if genre is None:
                    raise InvalidReferenceError("Invalid genre ID")
            book = await self.books.update(db, id=parsed_id, values=values)
            if book is None:
                raise NotFoundError("Book not found")
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            logger.warning(f"Обновление книги {parsed_id} отклонено хранилищем: {str(e.orig)}")
            raise ValidationFailureError("Rating must be between 0 and 5") from e
        except Exception:
            await db.rollback()
            raise
        return book

    async def delete_book(self, db: AsyncSession, book_id: Any) -> BookModel:
        """
        Удалить книгу.

        Raises:
            NotFoundError: Книга не найдена
        """
        parsed_id = parse_id(book_id)
        if parsed_id is None:
            logger.warning(f"Неверный идентификатор книги: {book_id!r}")
            raise NotFoundError("Book not found")
        try:
            book = await self.books.delete(db, id=parsed_id)
            if book is None:
                raise NotFoundError("Book not found")
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return book

    async def create_book_atomic(
            self,
            db: AsyncSession,
            *,
            title: Any,
            author: Any,
            genre_id: Any,
            rating: Any
    ) -> BookModel:
        """
        Добавить книгу в одной транзакции с проверкой жанра.

        Чтение жанра (с блокировкой строки) и вставка книги фиксируются
        вместе или откатываются вместе. Контекст session.begin() фиксирует
        транзакцию при нормальном выходе и откатывает при любом исключении.
        Сессия не должна иметь открытой транзакции.

        Returns:
            BookModel: Сохраненная книга

        Raises:
            InvalidReferenceError: Жанр не существует ("Genre does not exist")
            ValidationFailureError: Хранилище отклонило запись
        """
        values = self._book_values(title, author, genre_id, rating)
        try:
            async with db.begin():
                logger.debug("Транзакция атомарного добавления начата")
                genre = await self.genres.get(db, values["genre_id"], for_share=True)
                if genre is None:
                    logger.warning(f"Жанр с ID {values['genre_id']} не существует, транзакция отменена")
                    raise InvalidReferenceError("Genre does not exist")
                book = await self.books.create(db, values=values)
        except IntegrityError as e:
            logger.warning(f"Атомарное добавление отклонено хранилищем: {str(e.orig)}")
            raise ValidationFailureError("Rating must be between 0 and 5") from e
        logger.info(f"Книга '{book.title}' добавлена атомарно с ID: {book.id}")
        return book

    async def list_genres(self, db: AsyncSession) -> List[GenreModel]:
        return await self.genres.list_all(db)

    async def add_genre(self, db: AsyncSession, name: Any) -> GenreModel:
        """
        Добавить жанр с уникальным (после обрезки пробелов) названием.

        Raises:
            MissingFieldsError: Пустое название
            AlreadyExistsError: Жанр с таким названием уже существует
        """
        clean_name = name.strip() if isinstance(name, str) else ""
        if not clean_name:
            raise MissingFieldsError("Genre name is required")
        try:
            if await self.genres.get_by_name(db, clean_name) is not None:
                logger.warning(f"Жанр '{clean_name}' уже существует")
                raise AlreadyExistsError("Genre already exists")
            genre = await self.genres.create(db, name=clean_name)
            await db.commit()
        except IntegrityError as e:
            # Параллельная вставка того же названия
            await db.rollback()
            raise AlreadyExistsError("Genre already exists") from e
        except Exception:
            await db.rollback()
            raise
        return genre

    async def seed_genres(self, db: AsyncSession, names: List[str] = DEFAULT_GENRES) -> int:
        """
        Заполнить жанры по умолчанию, если таблица пуста.

        Returns:
            int: Количество добавленных жанров (0, если жанры уже есть)
        """
        try:
            if await self.genres.count(db) > 0:
                logger.info("Жанры уже существуют, заполнение пропущено")
                await db.rollback()
                return 0
            created = await self.genres.create_many(db, names)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(f"Добавлены жанры по умолчанию: {len(created)}")
        return len(created)


catalog_service = CatalogService()
