import logging
import sys

from bloodbank.core import config

_NOISY_LOGGERS = ("sqlalchemy.engine", "httpx", "uvicorn.access")


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=level or config.LOG_LEVEL,
        format="%(asctime)s  %(levelname)-8s  %(name)s - %(message)s",
        stream=sys.stdout,
    )
    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)
