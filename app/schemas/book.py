from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, StrictBool, StrictFloat, StrictInt


class BookPayload(BaseModel):
    """Тело запроса на создание или замену книги.

    Поля необязательны на уровне схемы: отсутствие полей проверяет сервис.
    Строгие типы не дают pydantic превратить true в 1: такие значения
    отклоняет сервис.
    """
    title: Optional[str] = None
    author: Optional[str] = None
    genre_id: Optional[Union[StrictInt, StrictBool, str]] = None
    rating: Optional[Union[StrictFloat, StrictInt, StrictBool, str]] = None


class BookFilter(BaseModel):
    """Разобранный фильтр списка книг: пустое поле не ограничивает выборку."""
    genre_id: Optional[int] = None
    min_rating: Optional[float] = None
    max_rating: Optional[float] = None


class BookOut(BaseModel):
    book_id: int
    title: str
    author: str
    genre_id: int
    genre_name: Optional[str] = None
    rating: float

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "book_id": 1,
                "title": "Dune",
                "author": "Herbert",
                "genre_id": 3,
                "genre_name": "Sci-Fi",
                "rating": 4.5
            }
        }
    )


class BookCreated(BaseModel):
    message: str
    book_id: int


class Message(BaseModel):
    message: str
