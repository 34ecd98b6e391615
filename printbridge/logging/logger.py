import logging
import sys
from typing import TextIO


class Log:
    """Process-wide logging facade shared by request and background threads."""

    _logger: logging.Logger = logging.getLogger("printbridge")
    _FORMAT = "%(asctime)s [%(levelname)s] (%(threadName)s) %(message)s"

    @classmethod
    def configure(cls, log_level: str, stream: TextIO | None = None) -> None:
        """Set the level and attach a single stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(stream or sys.stdout)
            handler.setFormatter(logging.Formatter(cls._FORMAT))
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str) -> None:
        """Log an info message."""
        cls._logger.info(message)

    @classmethod
    def error(cls, message: str) -> None:
        """Log an error message."""
        cls._logger.error(message)

    @classmethod
    def warning(cls, message: str) -> None:
        """Log a warning message."""
        cls._logger.warning(message)

    @classmethod
    def debug(cls, message: str) -> None:
        """Log a debug message."""
        cls._logger.debug(message)

    @classmethod
    def exception(cls, message: str) -> None:
        """Log an error together with the active traceback."""
        cls._logger.error(message, exc_info=True)
