from typing import Any, Optional

# Верхняя граница столбца INTEGER (int4 в PostgreSQL)
MAX_ID = 2 ** 31 - 1


def parse_id(value: Any) -> Optional[int]:
    """
    Разбирает идентификатор записи, пришедший от клиента.

    Идентификаторы хранилища - целые числа в диапазоне [1, MAX_ID].
    Допускается int или строка из десятичных цифр.

    Args:
        value: Значение из пути, query-параметра или тела запроса

    Returns:
        Optional[int]: Идентификатор или None, если синтаксис неверный
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        candidate = value.strip()
        if not (candidate.isascii() and candidate.isdigit()):
            return None
        value = int(candidate)
    if isinstance(value, int) and 1 <= value <= MAX_ID:
        return value
    return None
