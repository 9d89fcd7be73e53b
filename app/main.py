import logging
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import config
from app.routes import books, genres
from app.database import AsyncSessionLocal, create_tables
from app.services.catalog import catalog_service

# Настройка логирования
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Book Review Catalog API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=config.CORS_METHODS,
    allow_headers=config.CORS_HEADERS,
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc):
    """
    Обработчик HTTP исключений.

    Args:
        request: Запрос, вызвавший исключение
        exc: Исключение HTTPException

    Returns:
        JSONResponse: Ответ с полем error
    """
    logger.error(f"HTTPException: {exc.detail} (status_code={exc.status_code})")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    """
    Обработчик ошибок валидации запросов.

    Args:
        request: Запрос с невалидными данными
        exc: Исключение RequestValidationError

    Returns:
        JSONResponse: Ответ с деталями ошибок валидации
    """
    logger.error(f"Ошибка валидации: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"error": "Validation error", "errors": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """
    Обработчик всех неожиданных исключений.

    Args:
        request: Запрос, вызвавший исключение
        exc: Перехваченное исключение

    Returns:
        JSONResponse: Ответ без внутренних деталей
    """
    logger.error(f"Неожиданная ошибка: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )


async def seed_default_genres() -> int:
    """Заполняет жанры по умолчанию в отдельной сессии."""
    async with AsyncSessionLocal() as session:
        return await catalog_service.seed_genres(session)


@app.on_event("startup")
async def startup_event():
    """
    Обработчик события запуска приложения.
    Создает таблицы и заполняет жанры по умолчанию.
    """
    try:
        await create_tables()
        await seed_default_genres()
    except Exception as e:
        logger.critical(f"Ошибка запуска приложения: {str(e)}")
        raise


@app.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def healthcheck() -> str:
    return "Backend running OK"


app.include_router(books.db_router.router, prefix="/api/books", tags=["books"])
app.include_router(genres.genre_router.router, prefix="/api/genres", tags=["genres"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT)
