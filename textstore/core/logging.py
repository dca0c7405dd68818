import logging

from textstore.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None) -> None:
    """Настройка логирования приложения"""
    level_value = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logging.basicConfig(level=level_value, format=LOG_FORMAT)
    logging.getLogger("textstore").setLevel(level_value)
