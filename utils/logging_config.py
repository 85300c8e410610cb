"""Конфигурация логирования для кассы клуба."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from config import Settings, get_settings

LOG_FILE_NAME = "lounge.log"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s │ %(message)s"

# Болтливые сторонние логгеры поднимаем до WARNING.
NOISY_LOGGERS = ("googleapiclient.discovery_cache", "urllib3", "httpx", "uvicorn.access")


class PeeweeFilter(logging.Filter):
    """Пропускает SQL peewee, кроме ``SELECT``."""

    def filter(self, record: logging.LogRecord) -> bool:
        sql = getattr(record, "sql", None) or record.getMessage()
        return not str(sql).lstrip().upper().startswith("SELECT")


def _file_handler(logs_dir: Path) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        logs_dir / LOG_FILE_NAME,
        maxBytes=2_000_000,  # 2 MB
        backupCount=3,
        encoding="utf-8",
    )
    return handler


def setup_logging(settings: Settings | None = None) -> None:
    """Вывод в консоль и ``lounge.log`` в каталоге ``LOG_DIR``.

    ``DETAILED_LOGGING`` включает DEBUG и показывает все SQL-запросы.
    """
    settings = settings or get_settings()
    logs_dir = Path(settings.log_dir).expanduser()
    logs_dir.mkdir(parents=True, exist_ok=True)

    level = logging.DEBUG if settings.detailed_logging else getattr(
        logging, settings.log_level, logging.INFO
    )
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = [_file_handler(logs_dir), logging.StreamHandler()]
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    peewee_logger = logging.getLogger("peewee")
    for existing in [f for f in peewee_logger.filters if isinstance(f, PeeweeFilter)]:
        peewee_logger.removeFilter(existing)
    if not settings.detailed_logging:
        peewee_logger.addFilter(PeeweeFilter())
