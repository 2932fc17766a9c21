# Logger factory shared by every module.
# One StreamHandler per named logger, level taken from settings.LOG_LEVEL.

import logging

from seo_agent.settings import settings

_FORMAT = "%(asctime)s %(levelname)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(h)
    logger.setLevel(settings.LOG_LEVEL.upper())
    return logger
