import aiohttp
import ssl
import certifi
from abc import ABC
from typing import Optional, Dict, Any, Self, Tuple

from app.tools.logger import setup_logger

logger = setup_logger(__name__)

# Статус, которым помечается сбой транспорта (ответ сервера не получен)
TRANSPORT_ERROR = 0


class BaseApiClient(ABC):
    def __init__(self, base_url: str) -> None:
        """
        Инициализация базового API клиента.

        Args:
            base_url: Базовый URL API
        """
        self.base_url = base_url.rstrip("/")
        self.ssl_context = ssl.create_default_context(cafile=certifi.where())
        self._session: aiohttp.ClientSession | None = None
        logger.info(f"Инициализация API клиента для {self.base_url}")

    async def __aenter__(self) -> Self:
        """Создает сессию при входе в контекст"""
        self._session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Закрывает сессию при выходе из контекста"""
        if self._session:
            await self._session.close()
            self._session = None

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        data: Optional[Dict[str, Any]] = None
    ) -> Tuple[int, Any]:
        """
        Базовый метод для выполнения HTTP-запросов

        Ошибки сети не пробрасываются: вызывающий код получает
        статус TRANSPORT_ERROR и None.

        Args:
            method: HTTP метод (GET, POST, PUT, DELETE)
            endpoint: Конечная точка API
            params: Параметры запроса
            headers: Заголовки запроса
            data: Тело запроса

        Returns:
            Tuple[int, Any]: HTTP-статус и разобранное JSON-тело (или None)

        Raises:
            RuntimeError: Если метод вызван вне контекстного менеджера
        """
        if self._session is None:
            raise RuntimeError("Сессия не инициализирована. Используйте контекстный менеджер (async with)")

        url = f"{self.base_url}{endpoint}"
        try:
            logger.debug(
                f"Making {method} request to {url} "
                f"with params: {params}, headers: {headers}"
            )
            async with self._session.request(
                method,
                url,
                params=params,
                headers=headers,
                json=data,
                ssl=self.ssl_context
            ) as response:
                try:
                    payload = await response.json(content_type=None)
                except ValueError:
                    payload = None
                return response.status, payload
        except aiohttp.ClientError as e:
            logger.error(f"Ошибка при выполнении запроса {method} {url}: {str(e)}")
            return TRANSPORT_ERROR, None
