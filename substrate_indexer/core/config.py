# substrate_indexer/core/config.py

import os
import logging
from pathlib import Path
from typing import Optional, Mapping

from msgspec import Struct
from dotenv import find_dotenv, load_dotenv

from ..types import DatabaseConfig, FeeConfig, LoggingConfig, DEFAULT_FEE_MODULES
from .logging import IndexerLogger, log_with_context


DEFAULT_DB_URL = "sqlite+aiosqlite:///indexer.db"


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    value = env.get(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    value = env.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() == "true"


class IndexerConfig(Struct):
    database: DatabaseConfig
    fees: FeeConfig
    logging: LoggingConfig

    @classmethod
    def from_env(cls, env_vars: Optional[Mapping[str, str]] = None) -> 'IndexerConfig':
        if env_vars is None:
            load_dotenv(find_dotenv(usecwd=True))
            env = os.environ
        else:
            env = env_vars

        database = cls._create_database_config(env)
        fees = cls._create_fee_config(env)
        logging_config = cls._create_logging_config(env)

        config = cls(database=database, fees=fees, logging=logging_config)

        logger = IndexerLogger.get_logger('core.config')
        log_with_context(logger, logging.INFO, "IndexerConfig created",
                         fee_modules=len(fees.modules),
                         token_decimals=fees.token_decimals)
        return config

    @staticmethod
    def _create_database_config(env: Mapping[str, str]) -> DatabaseConfig:
        return DatabaseConfig(
            url=env.get("INDEXER_DB_URL") or DEFAULT_DB_URL,
            pool_size=_env_int(env, "INDEXER_DB_POOL_SIZE", 5),
            max_overflow=_env_int(env, "INDEXER_DB_MAX_OVERFLOW", 10),
            echo=_env_bool(env, "INDEXER_DB_ECHO", False),
        )

    @staticmethod
    def _create_fee_config(env: Mapping[str, str]) -> FeeConfig:
        modules_env = env.get("INDEXER_FEE_MODULES")
        if modules_env:
            modules = [m.strip() for m in modules_env.split(",") if m.strip()]
        else:
            modules = list(DEFAULT_FEE_MODULES)

        return FeeConfig(
            modules=modules,
            token_decimals=_env_int(env, "INDEXER_TOKEN_DECIMALS", 18),
            precision=_env_int(env, "INDEXER_FEE_PRECISION", 2),
        )

    @staticmethod
    def _create_logging_config(env: Mapping[str, str]) -> LoggingConfig:
        log_dir_env = env.get("INDEXER_LOG_DIR")
        return LoggingConfig(
            log_dir=Path(log_dir_env) if log_dir_env else Path.cwd() / "logs",
            log_level=env.get("INDEXER_LOG_LEVEL", "INFO"),
            console_enabled=_env_bool(env, "INDEXER_LOG_CONSOLE", True),
            file_enabled=_env_bool(env, "INDEXER_LOG_FILE", False),
            structured_format=_env_bool(env, "INDEXER_LOG_STRUCTURED", True),
        )
