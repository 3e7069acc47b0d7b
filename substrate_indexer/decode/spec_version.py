# substrate_indexer/decode/spec_version.py

from typing import Optional

from ..core.logging import LoggingMixin
from ..database.interfaces import EntityStore
from ..types import EntityKind, SpecVersionRecord


class SpecVersionTracker(LoggingMixin):
    """
    Tracks the runtime spec version and the block where it first appeared.

    ``current`` starts empty after every restart and is filled from storage
    on the first block. A record is written only when the version changes,
    and an existing record for the new version is adopted rather than
    rewritten, so first-seen heights never move when blocks are replayed.

    Not thread-safe: ``track`` must be awaited from one event loop and, per
    the block ordering contract, for one block at a time.
    """

    def __init__(self, store: EntityStore):
        self.store = store
        self.current: Optional[SpecVersionRecord] = None

    async def track(self, spec_version: int, block_number: int) -> SpecVersionRecord:
        version_id = str(spec_version)

        if self.current is None:
            self.current = await self.store.get(EntityKind.SPEC_VERSION, version_id)

        if self.current is not None and self.current.id == version_id:
            return self.current

        stored = await self.store.get(EntityKind.SPEC_VERSION, version_id) if self.current is not None else None
        if stored is not None:
            self.current = stored
            return stored

        record = SpecVersionRecord(id=version_id, block_height=block_number)
        await self.store.create(EntityKind.SPEC_VERSION, record)
        self.current = record
        self.log_info("New spec version recorded", spec_version=spec_version, block_number=block_number)
        return record
