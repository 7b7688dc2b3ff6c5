import sys
from loguru import logger

def configure_logging(level: str = "INFO") -> None:
    # replace loguru's default sink so the configured level applies
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
