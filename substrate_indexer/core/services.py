# substrate_indexer/core/services.py

from typing import Optional

from ..core.logging import LoggingMixin
from ..database.connection import DatabaseManager
from ..database.interfaces import EntityStore
from ..decode.interfaces import BlockSource
from ..pipeline.indexing_pipeline import IndexingPipeline, PipelineSummary
from .config import IndexerConfig


class IndexerServices(LoggingMixin):
    """
    Wired indexer: configuration, storage and the block pipeline.

    ``db_manager`` is None when a ready-made store was supplied.
    """

    def __init__(self,
                 config: IndexerConfig,
                 store: EntityStore,
                 pipeline: IndexingPipeline,
                 db_manager: Optional[DatabaseManager] = None):
        self.config = config
        self.store = store
        self.pipeline = pipeline
        self.db_manager = db_manager

    async def start(self) -> None:
        if self.db_manager is not None:
            await self.db_manager.initialize()
            await self.db_manager.create_tables()
        self.log_info("Indexer started")

    async def shutdown(self) -> None:
        if self.db_manager is not None:
            await self.db_manager.shutdown()
        self.log_info("Indexer stopped")

    async def run(self, source: BlockSource, start: int, end: int) -> PipelineSummary:
        return await self.pipeline.run(source, start, end)

    async def __aenter__(self) -> 'IndexerServices':
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()
