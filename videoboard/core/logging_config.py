import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from .config import get_settings


def setup_logging() -> None:
    """Configure root logging with a JSON or plain text formatter."""
    settings = get_settings()
    level = getattr(logging, settings.log_level, logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(level)
    # evita handlers duplicados quando create_app roda mais de uma vez
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if settings.log_format == "json":
        handler.setFormatter(
            JsonFormatter(
                "%(asctime)s %(levelname)s %(name)s %(message)s",
                rename_fields={"levelname": "level", "asctime": "timestamp"},
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    logger.addHandler(handler)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
