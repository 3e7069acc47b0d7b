# substrate_indexer/core/logging.py
"""
Centralized logging system for the indexer.

Provides:
- IndexerLogger: Global logging configuration, driven by LoggingConfig
- LoggingMixin: Consistent logging behavior for classes
- log_with_context: Structured context on a single record
"""

import logging
import sys
from logging import DEBUG, INFO, ERROR
from pathlib import Path
from typing import List, Optional
from datetime import datetime

from ..types import LoggingConfig


ROOT_LOGGER_NAME = 'substrate_indexer'

MAIN_LOG_FILE = 'indexer.log'
ERROR_LOG_FILE = 'indexer_errors.log'

CONTEXT_ATTRS = [
    'block_number', 'block_hash', 'extrinsic_hash', 'extrinsic_id', 'event_index',
    'log_index', 'section', 'method', 'spec_version', 'session_id', 'statement',
    'step', 'version', 'validator_count', 'start', 'end', 'processed', 'skipped', 'failed',
    'error', 'exception_type',
]


class IndexerFormatter(logging.Formatter):
    """``time - logger - LEVEL - message`` with an optional ``| key=value ...`` context suffix"""

    def __init__(self, include_context: bool = True):
        self.include_context = include_context
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        base_msg = f"{timestamp} - {record.name} - {record.levelname} - {record.getMessage()}"

        if not self.include_context:
            return base_msg

        context = " ".join(
            f"{attr}={getattr(record, attr)}" for attr in CONTEXT_ATTRS if hasattr(record, attr)
        )
        return f"{base_msg} | {context}" if context else base_msg


class IndexerLogger:
    """Global logging configuration and management"""

    _configured = False

    @classmethod
    def configure(cls,
                  log_dir: Optional[Path] = None,
                  log_level: str = "INFO",
                  console_enabled: bool = True,
                  file_enabled: bool = False,
                  structured_format: bool = True) -> None:

        if cls._configured:
            return

        level = getattr(logging, log_level.upper())
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        for handler in cls._build_handlers(level, log_dir, console_enabled, file_enabled, structured_format):
            root_logger.addHandler(handler)

        cls._configured = True

    @classmethod
    def configure_from(cls, config: LoggingConfig) -> None:
        cls.configure(
            log_dir=config.log_dir,
            log_level=config.log_level,
            console_enabled=config.console_enabled,
            file_enabled=config.file_enabled,
            structured_format=config.structured_format,
        )

    @staticmethod
    def _build_handlers(level: int,
                        log_dir: Optional[Path],
                        console_enabled: bool,
                        file_enabled: bool,
                        structured_format: bool) -> List[logging.Handler]:
        handlers = []

        if console_enabled:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            console_handler.setFormatter(IndexerFormatter(include_context=structured_format))
            handlers.append(console_handler)

        # file logs always carry context; errors are duplicated into their own file
        if file_enabled and log_dir:
            log_dir.mkdir(parents=True, exist_ok=True)
            file_formatter = IndexerFormatter(include_context=True)

            for filename, file_level in ((MAIN_LOG_FILE, level), (ERROR_LOG_FILE, logging.ERROR)):
                file_handler = logging.FileHandler(log_dir / filename)
                file_handler.setLevel(file_level)
                file_handler.setFormatter(file_formatter)
                handlers.append(file_handler)

        return handlers

    @classmethod
    def reset(cls) -> None:
        """Close handlers so the next configure() call takes effect"""
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()
        root_logger.setLevel(logging.NOTSET)
        cls._configured = False

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        if not name.startswith(ROOT_LOGGER_NAME):
            name = f'{ROOT_LOGGER_NAME}.{name}'

        return logging.getLogger(name)


def get_class_logger(cls_instance) -> logging.Logger:
    module = cls_instance.__class__.__module__
    prefix = f'{ROOT_LOGGER_NAME}.'
    if module.startswith(prefix):
        module = module[len(prefix):]

    return IndexerLogger.get_logger(f"{module}.{cls_instance.__class__.__name__}")


def log_with_context(logger: logging.Logger, level: int, message: str, **context) -> None:
    if logger.isEnabledFor(level):
        record = logger.makeRecord(
            logger.name, level, "", 0, message, (), None
        )
        for key, value in context.items():
            setattr(record, key, value)
        logger.handle(record)


class LoggingMixin:
    """Class-named logger plus ``log_<level>(message, **context)`` helpers"""

    @property
    def logger(self) -> logging.Logger:
        if not hasattr(self, '_logger'):
            self._logger = get_class_logger(self)
        return self._logger

    def log_debug(self, message: str, **context) -> None:
        log_with_context(self.logger, DEBUG, message, **context)

    def log_info(self, message: str, **context) -> None:
        log_with_context(self.logger, INFO, message, **context)

    def log_warning(self, message: str, **context) -> None:
        log_with_context(self.logger, logging.WARNING, message, **context)

    def log_error(self, message: str, **context) -> None:
        log_with_context(self.logger, ERROR, message, **context)
