"""Console logging for sitepub commands"""

import logging

LOGGER_NAME = "sitepub"


def get_logger(name: str = None) -> logging.Logger:
    """Return a logger under the sitepub hierarchy, e.g. 'sitepub.pipeline'."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Send sitepub records to stderr at INFO, or DEBUG when verbose; safe to call repeatedly."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger
