# avsfld/logger.py
import sys

from loguru import logger


class ProgressLogger:
    """
    A small progress logger that can either print to the console
    or forward messages to loguru.
    """

    def __init__(self, mode='loguru'):
        if mode not in ['print', 'loguru']:
            raise ValueError("mode must be 'print' or 'loguru'")
        self.mode = mode

    def log(self, message: str, level: str = "INFO"):
        if self.mode == 'print':
            print(message)
        elif self.mode == 'loguru':
            logger.opt(depth=1).log(level, message)

    def debug(self, message: str):
        if self.mode == 'loguru':
            logger.opt(depth=1).debug(message)


def configure_logging(*, debug: bool = False) -> None:
    """Replace the loguru sinks with a single stderr sink.

    Args:
        debug: Enable verbose debug logging.
    """
    logger.remove()
    level = "DEBUG" if debug else "INFO"
    fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> "
        "| <level>{level: <8}</level> "
        "<cyan>{module}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> "
        "- <level>{message}</level>"
    )
    logger.add(sys.stderr, level=level, format=fmt, backtrace=debug, diagnose=debug)
