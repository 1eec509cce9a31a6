# utils/logger.py

import os
import logging
import inspect
from typing import Optional, Any, Dict
from logging.handlers import RotatingFileHandler
from pathlib import Path
from magento_migration.config import config

class CustomLogger:
    """Logger with caller information, configured from the environment"""

    LOG_LEVELS = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }

    def __init__(
        self,
        name: str = 'magento_migration',
        log_file: Optional[str] = None,
        level: Optional[str] = None,
        format: str = '%(asctime)s - [%(levelname)s] - %(caller_info)s - %(message)s'
    ):
        self.log_level = level or config['LOG_LEVEL']
        self.log_file = log_file or config['LOG_FILE']

        Path(os.path.dirname(self.log_file)).mkdir(parents=True, exist_ok=True)

        self.logger = logging.getLogger(name)
        self.logger.setLevel(self.LOG_LEVELS.get(self.log_level.upper(), logging.INFO))

        if self.logger.handlers:
            self.logger.handlers.clear()

        formatter = logging.Formatter(format)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        file_handler = RotatingFileHandler(
            self.log_file,
            maxBytes=1024 * 1024,  # 1MB
            backupCount=5
        )
        file_handler.setFormatter(formatter)
        self.logger.addHandler(file_handler)

    def _get_caller_info(self, stack_info: Optional[int] = None) -> str:
        """Get caller information including class name, function name and line number"""
        stack = inspect.stack()
        depth = stack_info if stack_info is not None else 2
        frame = stack[min(depth, len(stack) - 1)]

        filename = os.path.basename(frame.filename)
        line_number = frame.lineno
        function_name = frame.function

        caller_self = frame.frame.f_locals.get('self')
        if caller_self is not None:
            class_name = caller_self.__class__.__name__
            return f"{filename}:{class_name}.{function_name}:{line_number}"

        return f"{filename}:{function_name}:{line_number}"

    def _log(self, level: int, message: str, stack_info: Optional[int] = None,
             exc_info: Optional[Exception] = None, extra: Optional[Dict[str, Any]] = None) -> None:
        """Internal logging method with caller information"""
        if not self.logger.isEnabledFor(level):
            return
        extra = dict(extra or {})
        extra['caller_info'] = self._get_caller_info(stack_info)

        self.logger.log(level, message, exc_info=exc_info, extra=extra)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log(logging.DEBUG, message, extra=extra, stack_info=3)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log(logging.INFO, message, extra=extra, stack_info=3)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log(logging.WARNING, message, extra=extra, stack_info=3)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: Optional[Exception] = None):
        self._log(logging.ERROR, message, extra=extra, stack_info=3, exc_info=exc_info)

    def critical(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log(logging.CRITICAL, message, extra=extra, stack_info=3)

# Create default logger instance
logger = CustomLogger()
