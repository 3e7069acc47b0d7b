# substrate_indexer/__init__.py

import logging
from typing import Mapping, Optional

from .core.config import IndexerConfig
from .core.logging import IndexerLogger, log_with_context
from .core.services import IndexerServices
from .database.connection import DatabaseManager
from .database.entity_store import SqlEntityStore
from .database.interfaces import EntityStore
from .database.memory_store import MemoryEntityStore
from .decode.interfaces import AccountUpdater, BlockSource, ChainStateClient, FeeOracle
from .pipeline.indexing_pipeline import BlockOutcome, IndexingPipeline, PipelineSummary


def create_indexer(chain: ChainStateClient,
                   fee_oracle: Optional[FeeOracle] = None,
                   account_updater: Optional[AccountUpdater] = None,
                   store: Optional[EntityStore] = None,
                   env_vars: Optional[Mapping[str, str]] = None) -> IndexerServices:
    """
    Build an indexer from environment configuration.

    Without ``env_vars`` the process environment is used, after loading a
    ``.env`` file from the working directory. Without ``store`` the records go
    to the SQL database named by INDEXER_DB_URL. Call ``start()`` (or use
    ``async with``) before running.
    """
    config = IndexerConfig.from_env(env_vars)
    IndexerLogger.configure_from(config.logging)

    logger = IndexerLogger.get_logger('core.init')
    log_with_context(logger, logging.INFO, "Creating indexer instance",
                     log_level=config.logging.log_level)

    db_manager = None
    if store is None:
        db_manager = DatabaseManager(config.database)
        store = SqlEntityStore(db_manager)

    pipeline = IndexingPipeline(
        store=store,
        chain=chain,
        fee_oracle=fee_oracle,
        account_updater=account_updater,
        fee_config=config.fees,
    )

    log_with_context(logger, logging.INFO, "Indexer created successfully",
                     store=type(store).__name__)

    return IndexerServices(config, store, pipeline, db_manager)


__all__ = [
    "create_indexer",
    "IndexerConfig",
    "IndexerServices",
    "IndexingPipeline",
    "BlockOutcome",
    "PipelineSummary",
    "DatabaseManager",
    "SqlEntityStore",
    "MemoryEntityStore",
    "EntityStore",
    "ChainStateClient",
    "FeeOracle",
    "AccountUpdater",
    "BlockSource",
]
