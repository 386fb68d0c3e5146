import logging

LOG_FORMAT = '[%(asctime)s] %(levelname)s %(name)s: %(message)s'


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure the package logger; calling it again only changes the level."""
    logger = logging.getLogger('kd_balancer')
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
