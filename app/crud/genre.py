from typing import Type, Optional, List, Iterable
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError

from app.interface.genre import BaseGenreRepository
from app.models.genre import Genre as GenreModel
from app.tools.logger import setup_logger

logger = setup_logger(__name__)


class GenreRepository(BaseGenreRepository[GenreModel]):
    """Репозиторий жанров. Жанры только добавляются и читаются."""

    def __init__(self, model: Type[GenreModel]) -> None:
        self.model: Type[GenreModel] = model
        logger.info(f"Инициализация GenreRepository для модели: {model.__name__}")

    async def list_all(self, db: AsyncSession) -> List[GenreModel]:
        try:
            logger.debug("Извлечение всех жанров")
            result = await db.execute(select(self.model).order_by(self.model.name))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Ошибка извлечения жанров: {str(e)}", exc_info=True)
            raise

    async def get(self, db: AsyncSession, id: int, *, for_share: bool = False) -> Optional[GenreModel]:
        try:
            logger.debug(f"Извлечение жанра с ID: {id}")
            query = select(self.model).where(self.model.id == id)
            if for_share:
                # FOR SHARE; движки без блокировок строк игнорируют
                query = query.with_for_update(read=True)
            result = await db.execute(query)
            return result.scalars().first()
        except SQLAlchemyError as e:
            logger.error(f"Ошибка извлечения жанра {id}: {str(e)}", exc_info=True)
            raise

    async def get_by_name(self, db: AsyncSession, name: str) -> Optional[GenreModel]:
        try:
            logger.debug(f"Поиск жанра по названию: {name}")
            result = await db.execute(select(self.model).where(self.model.name == name))
            return result.scalars().first()
        except SQLAlchemyError as e:
            logger.error(f"Ошибка поиска жанра '{name}': {str(e)}", exc_info=True)
            raise

    async def count(self, db: AsyncSession) -> int:
        try:
            result = await db.execute(select(func.count()).select_from(self.model))
            return result.scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"Ошибка подсчета жанров: {str(e)}", exc_info=True)
            raise

    async def create(self, db: AsyncSession, *, name: str) -> GenreModel:
        try:
            logger.info(f"Создание жанра: {name}")
            db_obj = self.model(name=name)
            db.add(db_obj)
            await db.flush()
            logger.info(f"Жанр '{name}' добавлен с ID: {db_obj.id}")
            return db_obj
        except SQLAlchemyError as e:
            logger.error(f"Ошибка создания жанра '{name}': {str(e)}", exc_info=True)
            raise

    async def create_many(self, db: AsyncSession, names: Iterable[str]) -> List[GenreModel]:
        try:
            objs = [self.model(name=name) for name in names]
            db.add_all(objs)
            await db.flush()
            logger.info(f"Добавлено жанров: {len(objs)}")
            return objs
        except SQLAlchemyError as e:
            logger.error(f"Ошибка пакетного создания жанров: {str(e)}", exc_info=True)
            raise


try:
    genre_db_crud = GenreRepository(model=GenreModel)
    logger.info("Репозиторий жанров инициализирован успешно")
except Exception as e:
    logger.critical(f"Не удалось инициализировать репозиторий жанров: {str(e)}", exc_info=True)
    raise
