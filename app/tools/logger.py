# logging_config.py
import logging
import logging.handlers
import os
from pathlib import Path

# Настройки логгера
LOG_FILE = "catalog.log"
LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_LEVEL = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Создаем директорию для логов, если ее нет
Path(LOG_DIR).mkdir(exist_ok=True)


def setup_logger(name: str) -> logging.Logger:
    """
    Настраивает и возвращает логгер с заданным именем.

    Повторный вызов с тем же именем возвращает уже настроенный логгер
    без добавления новых обработчиков.

    Args:
        name (str): Имя логгера (обычно __name__)

    Returns:
        logging.Logger: Сконфигурированный логгер
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(LOG_LEVEL)

    # Форматирование
    formatter = logging.Formatter(LOG_FORMAT)

    # Обработчик для записи в файл (ротация по 5 МБ)
    file_handler = logging.handlers.RotatingFileHandler(
        filename=f"{LOG_DIR}/{LOG_FILE}",
        maxBytes=5 * 1024 * 1024,  # 5 MB
        backupCount=3,
        encoding="utf-8"
    )
    file_handler.setFormatter(formatter)

    # Обработчик для вывода в консоль
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    # Добавляем обработчики к логгеру
    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    logger.propagate = False

    return logger
