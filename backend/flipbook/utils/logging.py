# backend/flipbook/utils/logging.py
import logging
import sys
from logging.handlers import RotatingFileHandler

from ..config import settings

# Ensure logs directory exists
LOG_DIR = settings.LOG_DIR
LOG_DIR.mkdir(parents=True, exist_ok=True)

verbose_formatter = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s [%(module)s:%(lineno)d] - %(message)s'
)


class FlipbookLogger:
    """Component logger that keeps `extra` fields off reserved LogRecord attributes"""

    # Attributes every LogRecord carries; an `extra` key may not overwrite them
    reserved_attrs = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

    def __init__(self, name: str):
        self.logger = logging.getLogger(f"flipbook.{name}")
        self.logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
        self.setup_handlers()

    def setup_handlers(self):
        """Set up file and console handlers"""
        if self.logger.handlers:
            return

        file_handler = RotatingFileHandler(
            LOG_DIR / f"{self.logger.name}.log",
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5,
            encoding="utf-8"
        )
        file_handler.setFormatter(verbose_formatter)
        self.logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(verbose_formatter)
        self.logger.addHandler(console_handler)

    def _sanitize_extra(self, extra):
        if extra is None:
            return None
        return {f"extra_{key}" if key in self.reserved_attrs else key: value for key, value in extra.items()}

    def _log(self, level: int, msg, extra=None, exc_info=None):
        # stacklevel 3 attributes the record to the caller of debug()/info()/...
        self.logger.log(level, msg, extra=self._sanitize_extra(extra), exc_info=exc_info, stacklevel=3)

    def debug(self, msg, extra=None, exc_info=None):
        self._log(logging.DEBUG, msg, extra, exc_info)

    def info(self, msg, extra=None, exc_info=None):
        self._log(logging.INFO, msg, extra, exc_info)

    def warning(self, msg, extra=None, exc_info=None):
        self._log(logging.WARNING, msg, extra, exc_info)

    def error(self, msg, extra=None, exc_info=None):
        self._log(logging.ERROR, msg, extra, exc_info)

    def critical(self, msg, extra=None, exc_info=None):
        self._log(logging.CRITICAL, msg, extra, exc_info)


api_logger = FlipbookLogger("api")
db_logger = FlipbookLogger("database")
service_logger = FlipbookLogger("service")

__all__ = ["FlipbookLogger", "api_logger", "db_logger", "service_logger"]
