from fastapi import Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.schemas import book as schema
from app.services.catalog import catalog_service
from app.database import get_db
from app.exceptions import CatalogError
from app.interface.book import BaseBookRouter
from app.tools.logger import setup_logger

logger = setup_logger(__name__)


class DatabaseBookRouter(BaseBookRouter):
    def __init__(self) -> None:
        super().__init__()
        logger.info("Инициализация DatabaseBookRouter")

    def _setup_routes(self) -> None:
        self.router.add_api_route("", self.read_books, methods=["GET"], response_model=List[schema.BookOut])
        self.router.add_api_route("", self.create_book, methods=["POST"], status_code=201,
                                  response_model=schema.BookCreated)
        self.router.add_api_route("/atomic-add", self.atomic_add_book, methods=["POST"],
                                  response_model=schema.Message)
        self.router.add_api_route("/{book_id}", self.update_book, methods=["PUT"], response_model=schema.Message)
        self.router.add_api_route("/{book_id}", self.delete_book, methods=["DELETE"], response_model=schema.Message)
        logger.debug("Пути книг определены")

    async def read_books(
            self,
            genre: Optional[str] = None,
            min_rating: Optional[str] = Query(default=None, alias="minRating"),
            max_rating: Optional[str] = Query(default=None, alias="maxRating"),
            db: AsyncSession = Depends(get_db)
    ) -> List[schema.BookOut]:
        try:
            logger.debug(f"Извлечение книг: genre={genre}, minRating={min_rating}, maxRating={max_rating}")
            books = await catalog_service.list_books(
                db, genre=genre, min_rating=min_rating, max_rating=max_rating
            )
            logger.info(f"Извлечено {len(books)} книг")
            return books
        except CatalogError as e:
            raise HTTPException(status_code=e.status_code, detail=e.message)
        except Exception as e:
            logger.error(f"Ошибка извлечения книг: {str(e)}", exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to fetch books")

    async def create_book(self, book: schema.BookPayload, db: AsyncSession = Depends(get_db)) -> schema.BookCreated:
        try:
            logger.info(f"Создание книги: {book.title}")
            created = await catalog_service.create_book(db, **book.model_dump())
            return schema.BookCreated(message="Book added successfully", book_id=created.id)
        except CatalogError as e:
            raise HTTPException(status_code=e.status_code, detail=e.message)
        except Exception as e:
            logger.error(f"Ошибка создания книги: {str(e)}", exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to add book")

    async def update_book(self, book_id: str, book: schema.BookPayload,
                          db: AsyncSession = Depends(get_db)) -> schema.Message:
        try:
            logger.info(f"Обновление книги по ID: {book_id}")
            await catalog_service.update_book(db, book_id, **book.model_dump())
            logger.info(f"Книга обновлена по ID: {book_id}")
            return schema.Message(message="Book updated successfully")
        except CatalogError as e:
            raise HTTPException(status_code=e.status_code, detail=e.message)
        except Exception as e:
            logger.error(f"Ошибка обновления книги {book_id}: {str(e)}", exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to update book")

    async def delete_book(self, book_id: str, db: AsyncSession = Depends(get_db)) -> schema.Message:
        try:
            logger.info(f"Удаление книги по ID: {book_id}")
            await catalog_service.delete_book(db, book_id)
            logger.info(f"Книга удалена по ID: {book_id}")
            return schema.Message(message="Book deleted successfully")
        except CatalogError as e:
            raise HTTPException(status_code=e.status_code, detail=e.message)
        except Exception as e:
            logger.error(f"Ошибка удаления книги {book_id}: {str(e)}", exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to delete book")

    async def atomic_add_book(self, book: schema.BookPayload,
                              db: AsyncSession = Depends(get_db)) -> schema.Message:
        # Любая ошибка транзакции возвращается как 500 с текстом причины
        try:
            logger.info(f"Атомарное добавление книги: {book.title}")
            await catalog_service.create_book_atomic(db, **book.model_dump())
            return schema.Message(message="Book added atomically inside a transaction")
        except CatalogError as e:
            raise HTTPException(status_code=500, detail=e.message)
        except Exception as e:
            logger.error(f"Ошибка атомарного добавления книги: {str(e)}", exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to add book atomically")


db_router = DatabaseBookRouter()
