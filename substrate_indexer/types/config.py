# substrate_indexer/types/config.py

from typing import List, Optional
from pathlib import Path

from msgspec import Struct


DEFAULT_FEE_MODULES = [
    "balances",
    "dataAvailability",
    "identity",
    "multisig",
    "nominationPools",
    "proxy",
    "staking",
    "utility",
    "vector",
]


class DatabaseConfig(Struct):
    url: str
    pool_size: int = 5
    max_overflow: int = 10
    echo: bool = False


class FeeConfig(Struct):
    modules: List[str] = []
    token_decimals: int = 18
    precision: int = 2


class LoggingConfig(Struct):
    log_dir: Optional[Path] = None
    log_level: str = "INFO"
    console_enabled: bool = True
    file_enabled: bool = False
    structured_format: bool = True
