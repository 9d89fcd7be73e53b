from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.schemas import genre as schema
from app.services.catalog import catalog_service
from app.database import get_db
from app.exceptions import CatalogError
from app.tools.logger import setup_logger

logger = setup_logger(__name__)


class GenreRouter:
    def __init__(self) -> None:
        self.router: APIRouter = APIRouter()
        self.router.add_api_route("", self.read_genres, methods=["GET"], response_model=List[schema.Genre])
        self.router.add_api_route("", self.create_genre, methods=["POST"], status_code=201,
                                  response_model=schema.Genre)
        logger.info("Инициализация GenreRouter")

    async def read_genres(self, db: AsyncSession = Depends(get_db)) -> List[schema.Genre]:
        try:
            genres = await catalog_service.list_genres(db)
            logger.debug(f"Извлечено {len(genres)} жанров")
            return [schema.Genre.model_validate(genre) for genre in genres]
        except Exception as e:
            logger.error(f"Ошибка извлечения жанров: {str(e)}", exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to fetch genres")

    async def create_genre(self, genre: schema.GenreCreate, db: AsyncSession = Depends(get_db)) -> schema.Genre:
        try:
            created = await catalog_service.add_genre(db, genre.name)
            logger.info(f"Жанр '{created.name}' создан с ID: {created.id}")
            return schema.Genre.model_validate(created)
        except CatalogError as e:
            raise HTTPException(status_code=e.status_code, detail=e.message)
        except Exception as e:
            logger.error(f"Ошибка создания жанра: {str(e)}", exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to create genre")


genre_router = GenreRouter()
