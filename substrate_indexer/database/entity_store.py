# substrate_indexer/database/entity_store.py

import asyncio
from contextlib import nullcontext
from typing import Mapping, Optional, Sequence

from msgspec import Struct
from sqlalchemy import insert
from sqlalchemy.exc import StatementError

from ..core.logging import IndexerLogger, log_with_context, DEBUG, ERROR
from ..types import EntityKind, RECORD_TYPES
from .connection import DatabaseManager
from .interfaces import EntityStore
from .tables import TABLES


class SqlEntityStore(EntityStore):
    """
    Entity store backed by the SQLAlchemy async engine.

    SQLite runs every session over one shared connection, so operations are
    serialized with a lock there; other backends use the connection pool freely.
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager
        self.logger = IndexerLogger.get_logger('database.entity_store')
        self._lock = asyncio.Lock() if db_manager.is_sqlite else None

    def _guard(self):
        return self._lock if self._lock is not None else nullcontext()

    def _log_failure(self, message: str, kind: Optional[EntityKind], error: Exception, **context) -> None:
        if isinstance(error, StatementError) and error.statement:
            context["statement"] = error.statement
        log_with_context(self.logger, ERROR, message,
                         entity_kind=kind.value if kind else None,
                         error=str(error),
                         exception_type=type(error).__name__,
                         **context)

    async def get(self, kind: EntityKind, id: str) -> Optional[Struct]:
        model_class = TABLES[kind]
        try:
            async with self._guard():
                async with self.db_manager.get_session() as session:
                    row = await session.get(model_class, id)
                    if row is None:
                        return None
                    return row.to_record(RECORD_TYPES[kind])
        except Exception as e:
            self._log_failure(f"Error getting {kind.value} by id", kind, e, record_id=id)
            raise

    async def create(self, kind: EntityKind, record: Struct) -> None:
        model_class = TABLES[kind]
        try:
            async with self._guard():
                async with self.db_manager.get_transaction() as session:
                    await session.merge(model_class.from_record(record))
            log_with_context(self.logger, DEBUG, "Saved record",
                             entity_kind=kind.value, record_id=record.id)
        except Exception as e:
            self._log_failure(f"Error saving {kind.value}", kind, e, record_id=record.id)
            raise

    async def bulk_create(self, batch: Mapping[EntityKind, Sequence[Struct]]) -> int:
        count = 0
        current_kind = None
        try:
            async with self._guard():
                async with self.db_manager.get_transaction() as session:
                    for kind, records in batch.items():
                        if not records:
                            continue
                        current_kind = kind
                        model_class = TABLES[kind]
                        rows = [model_class.from_record(record).to_dict() for record in records]
                        for row in rows:
                            row.pop("created_at", None)
                        await session.execute(insert(model_class), rows)
                        count += len(rows)
                        log_with_context(self.logger, DEBUG, "Bulk inserted records",
                                         entity_kind=kind.value, count=len(rows))
            return count
        except Exception as e:
            self._log_failure("Error bulk creating records", current_kind, e)
            raise
