"""Logger utility shared by the simulator modules."""
import logging


def get_logger(name=None, level=logging.INFO):
    """Return a logger with a single stream handler attached."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('[%(asctime)s] [%(name)s] %(levelname)s: %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
