from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from app.config import CATALOG_API_BASE
from app.interface.base_api_client import BaseApiClient
from app.tools.logger import setup_logger

logger = setup_logger(__name__)


@dataclass
class ClientResult:
    """Результат вызова API: данные при успехе и сообщение для баннера."""
    ok: bool
    data: Any = None
    banner: str = ""


def validate_rating(value: Any) -> Optional[str]:
    """
    Проверка рейтинга в форме книги, повторяющая проверку сервиса.

    Returns:
        Optional[str]: Текст ошибки или None, если рейтинг допустим
    """
    try:
        rating = float(value)
    except (TypeError, ValueError):
        return "Rating must be between 0 and 5."
    if rating != rating or rating < 0 or rating > 5:
        return "Rating must be between 0 and 5."
    return None


class CatalogApiClient(BaseApiClient):
    """Клиент API каталога книг.

    Ни один метод не пробрасывает ошибки сети или сервера: сбой
    возвращается как ClientResult(ok=False) с сообщением для пользователя.
    """

    def __init__(self, base_url: str = CATALOG_API_BASE) -> None:
        super().__init__(base_url=base_url)

    @staticmethod
    def _error_text(payload: Any, fallback: str) -> str:
        if isinstance(payload, dict) and payload.get("error"):
            return str(payload["error"])
        return fallback

    async def list_books(
            self,
            genre: Any = None,
            min_rating: Any = None,
            max_rating: Any = None
    ) -> ClientResult:
        params: Dict[str, str] = {}
        if genre not in (None, ""):
            params["genre"] = str(genre)
        if min_rating not in (None, ""):
            params["minRating"] = str(min_rating)
        if max_rating not in (None, ""):
            params["maxRating"] = str(max_rating)

        status, payload = await self._make_request("GET", "/api/books", params=params or None)
        if status != 200:
            logger.warning(f"Не удалось получить книги: статус {status}")
            return ClientResult(ok=False, banner="Error fetching books. Please try again later.")
        return ClientResult(ok=True, data=payload)

    async def list_genres(self) -> ClientResult:
        status, payload = await self._make_request("GET", "/api/genres")
        if status != 200:
            logger.warning(f"Не удалось получить жанры: статус {status}")
            return ClientResult(ok=False, banner="Error loading genres. Please refresh.")
        return ClientResult(ok=True, data=payload)

    async def add_genre(self, name: str) -> ClientResult:
        if not name or not name.strip():
            return ClientResult(ok=False, banner="Genre name cannot be empty.")

        status, payload = await self._make_request("POST", "/api/genres", data={"name": name})
        if status != 201:
            return ClientResult(ok=False, banner=self._error_text(payload, "Failed to add genre."))
        return ClientResult(ok=True, data=payload, banner=f"Genre '{payload['name']}' added successfully!")

    async def save_book(self, form: Dict[str, Any], editing_id: Any = None) -> ClientResult:
        """
        Добавить книгу или заменить поля редактируемой книги.

        Args:
            form: Поля title, author, genre_id, rating
            editing_id: ID редактируемой книги; None - создание новой

        Returns:
            ClientResult: Результат с сообщением для баннера
        """
        error = validate_rating(form.get("rating"))
        if error:
            return ClientResult(ok=False, banner=error)

        if editing_id is not None:
            status, payload = await self._make_request("PUT", f"/api/books/{editing_id}", data=form)
            expected, banner = 200, "Book updated successfully!"
        else:
            status, payload = await self._make_request("POST", "/api/books", data=form)
            expected, banner = 201, "Book added successfully!"

        if status != expected:
            logger.warning(f"Не удалось сохранить книгу: статус {status}, ответ {payload}")
            return ClientResult(ok=False, banner=self._error_text(payload, "Failed to save book. Please try again."))
        return ClientResult(ok=True, data=payload, banner=banner)

    async def atomic_add(self, form: Dict[str, Any]) -> ClientResult:
        error = validate_rating(form.get("rating"))
        if error:
            return ClientResult(ok=False, banner=error)

        status, payload = await self._make_request("POST", "/api/books/atomic-add", data=form)
        if status != 200:
            return ClientResult(ok=False, banner=self._error_text(payload, "Failed to save book. Please try again."))
        return ClientResult(ok=True, data=payload, banner=payload.get("message", ""))

    async def delete_book(self, book_id: Any) -> ClientResult:
        status, payload = await self._make_request("DELETE", f"/api/books/{book_id}")
        if status != 200:
            return ClientResult(ok=False, banner="Error deleting book. Please try again.")
        return ClientResult(ok=True, data=payload, banner="Book deleted successfully.")

    async def refresh(self, **filters: Any) -> List[ClientResult]:
        """Загрузить жанры и книги, как при открытии страницы."""
        return [await self.list_genres(), await self.list_books(**filters)]
