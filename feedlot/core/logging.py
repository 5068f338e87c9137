# feedlot/core/logging.py
import logging
import os
import sys
from typing import Any, Optional

from loguru import logger

from feedlot.core.config import settings

# Loggers estándar que redirigimos a loguru
INTERCEPTED_LOGGERS = (
    "uvicorn",
    "uvicorn.error",
    "uvicorn.access",
    "fastapi",
    "sqlalchemy",
)

TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level> | {extra}"
)

JSON_FORMAT = (
    '{{"time":"{time}","level":"{level}","message":{message!r},'
    '"name":"{name}","function":"{function}","line":{line}}}'
)


class InterceptHandler(logging.Handler):
    """
    Redirige los logs de logging estándar a loguru.
    """
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        # sube en la pila hasta salir de logging/__init__.py
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(
            depth=depth,
            exception=record.exc_info,
        ).log(level, record.getMessage())


def setup_logging(
    *,
    json_logs: Optional[bool] = None,
    log_file: Optional[bool] = None,
    log_dir: Optional[str] = None,
) -> None:
    """
    Config global del ledger:
    - Intercepta logging estándar (uvicorn, fastapi, sqlalchemy)
    - Consola: INFO y superiores
    - Ficheros (si log_file):
        - ledger_YYYY-MM-DD.log → INFO y WARNING
        - error_YYYY-MM-DD.log  → ERROR y superiores

    Los parámetros que no se pasan salen de settings.
    """
    json_logs = settings.LOG_JSON if json_logs is None else json_logs
    log_file = settings.LOG_TO_FILE if log_file is None else log_file
    log_dir = log_dir or settings.LOG_DIR

    logging.root.handlers = []
    logging.root.setLevel(logging.INFO)

    for name in INTERCEPTED_LOGGERS:
        logging.getLogger(name).handlers = [InterceptHandler()]
        logging.getLogger(name).propagate = False

    logger.remove()

    fmt = JSON_FORMAT if json_logs else TEXT_FORMAT

    logger.add(
        sys.stdout,
        format=fmt,
        level="INFO",
        backtrace=True,
        diagnose=False,
    )

    if not log_file:
        return

    os.makedirs(log_dir, exist_ok=True)

    logger.add(
        os.path.join(log_dir, "ledger_{time:YYYY-MM-DD}.log"),
        format=fmt,
        level="INFO",
        filter=lambda record: record["level"].no < 40,  # < ERROR (40)
        rotation="00:00",
        retention="7 days",
        compression="zip",
        enqueue=True,
    )

    logger.add(
        os.path.join(log_dir, "error_{time:YYYY-MM-DD}.log"),
        format=fmt,
        level="ERROR",
        rotation="00:00",
        retention="30 days",
        compression="zip",
        enqueue=True,
    )


def get_logger(**binds: Any):
    """
    Logger con contexto extra.
    Ej: logger = get_logger(module="sale_service")
    """
    return logger.bind(**binds)
