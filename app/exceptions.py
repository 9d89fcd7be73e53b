class CatalogError(Exception):
    """Базовая ошибка каталога с HTTP-статусом для ответа клиенту."""

    status_code: int = 400
    default_message: str = "Catalog error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingFieldsError(CatalogError):
    default_message = "Missing required fields"


class InvalidArgumentError(CatalogError):
    default_message = "Invalid argument"


class InvalidReferenceError(CatalogError):
    default_message = "Invalid genre ID"


class NotFoundError(CatalogError):
    status_code = 404
    default_message = "Book not found"


class AlreadyExistsError(CatalogError):
    status_code = 409
    default_message = "Genre already exists"


class ValidationFailureError(CatalogError):
    default_message = "Book failed validation"
