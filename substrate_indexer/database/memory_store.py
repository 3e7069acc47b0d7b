# substrate_indexer/database/memory_store.py

import asyncio
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from msgspec import Struct

from ..core.logging import IndexerLogger
from ..types import EntityKind
from .interfaces import EntityStore


class DuplicateRecordError(Exception):
    pass


class MemoryEntityStore(EntityStore):
    """
    Dictionary-backed entity store for dry runs and tests.

    Every operation yields to the event loop once, like a database round trip
    would, so concurrent decoding tasks interleave the same way they do
    against a real store.
    """

    def __init__(self):
        self._records: Dict[EntityKind, Dict[str, Struct]] = {kind: {} for kind in EntityKind}
        self.operations: List[Tuple[str, EntityKind, int]] = []
        self.logger = IndexerLogger.get_logger('database.memory_store')

    async def get(self, kind: EntityKind, id: str) -> Optional[Struct]:
        await asyncio.sleep(0)
        return self._records[kind].get(id)

    async def create(self, kind: EntityKind, record: Struct) -> None:
        await asyncio.sleep(0)
        self._records[kind][record.id] = record
        self.operations.append(("create", kind, 1))

    async def bulk_create(self, batch: Mapping[EntityKind, Sequence[Struct]]) -> int:
        await asyncio.sleep(0)
        for kind, records in batch.items():
            seen = set()
            for record in records:
                if record.id in self._records[kind] or record.id in seen:
                    raise DuplicateRecordError(f"{kind.value} {record.id} already exists")
                seen.add(record.id)

        count = 0
        for kind, records in batch.items():
            for record in records:
                self._records[kind][record.id] = record
            count += len(records)
            self.operations.append(("bulk_create", kind, len(records)))

        self.logger.debug(f"Bulk created {count} records")
        return count

    def all(self, kind: EntityKind) -> List[Struct]:
        return list(self._records[kind].values())

    def count(self, kind: EntityKind) -> int:
        return len(self._records[kind])
