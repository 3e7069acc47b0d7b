# tests/test_config.py

from pathlib import Path

import pytest

from substrate_indexer.core.config import DEFAULT_DB_URL, IndexerConfig
from substrate_indexer.types import DEFAULT_FEE_MODULES


def test_defaults():
    config = IndexerConfig.from_env({})

    assert config.database.url == DEFAULT_DB_URL
    assert config.database.pool_size == 5
    assert config.database.echo is False
    assert config.fees.modules == list(DEFAULT_FEE_MODULES)
    assert config.fees.token_decimals == 18
    assert config.fees.precision == 2
    assert config.logging.log_level == "INFO"
    assert config.logging.console_enabled is True
    assert config.logging.file_enabled is False


def test_environment_overrides():
    config = IndexerConfig.from_env({
        "INDEXER_DB_URL": "postgresql+asyncpg://indexer:secret@db:5432/chain",
        "INDEXER_DB_POOL_SIZE": "20",
        "INDEXER_DB_ECHO": "true",
        "INDEXER_FEE_MODULES": "balances, staking ,",
        "INDEXER_TOKEN_DECIMALS": "12",
        "INDEXER_FEE_PRECISION": "4",
        "INDEXER_LOG_DIR": "/var/log/indexer",
        "INDEXER_LOG_LEVEL": "DEBUG",
        "INDEXER_LOG_FILE": "TRUE",
    })

    assert config.database.url.startswith("postgresql+asyncpg://")
    assert config.database.pool_size == 20
    assert config.database.echo is True
    assert config.fees.modules == ["balances", "staking"]
    assert config.fees.token_decimals == 12
    assert config.fees.precision == 4
    assert config.logging.log_dir == Path("/var/log/indexer")
    assert config.logging.log_level == "DEBUG"
    assert config.logging.file_enabled is True


def test_invalid_integer_names_the_variable():
    with pytest.raises(ValueError, match="INDEXER_TOKEN_DECIMALS"):
        IndexerConfig.from_env({"INDEXER_TOKEN_DECIMALS": "eighteen"})
