# substrate_indexer/decode/description_cache.py

import asyncio
from typing import Dict, Optional, Union

from msgspec import Struct

from ..core.logging import LoggingMixin
from ..database.interfaces import EntityStore
from ..types import (
    CallMeta,
    EventMeta,
    EntityKind,
    ExtrinsicDescriptionRecord,
    EventDescriptionRecord,
    description_id,
)


class CurrentDocs(Struct, tag=True):
    lines: list[str]


class LegacyDocs(Struct, tag=True):
    lines: list[str]


class MissingDocs(Struct, tag=True):
    pass


Documentation = Union[CurrentDocs, LegacyDocs, MissingDocs]


def resolve_documentation(meta: Union[CallMeta, EventMeta]) -> Documentation:
    if meta.docs is not None:
        return CurrentDocs(lines=meta.docs)
    if meta.documentation is not None:
        return LegacyDocs(lines=meta.documentation)
    return MissingDocs()


def documentation_text(docs: Documentation) -> str:
    if isinstance(docs, MissingDocs):
        return ""
    return "\n".join(docs.lines)


class DescriptionCache(LoggingMixin):
    """
    Lookup-or-create of extrinsic and event description records.

    Descriptions never change once written, so resolved ids are kept in memory
    for the life of the process. Concurrent requests for a key that is still
    being resolved share one pending future, which gives a single writer per
    key. Not thread-safe: all callers must run on the same event loop.
    """

    def __init__(self, store: EntityStore):
        self.store = store
        self._known: Dict[tuple, str] = {}
        self._pending: Dict[tuple, asyncio.Future] = {}

    async def get_extrinsic_description(self, section: str, method: str, meta: CallMeta) -> str:
        return await self._get_or_create(EntityKind.EXTRINSIC_DESCRIPTION, section, method, meta)

    async def get_event_description(self, section: str, method: str, meta: EventMeta) -> str:
        return await self._get_or_create(EntityKind.EVENT_DESCRIPTION, section, method, meta)

    async def _get_or_create(self, kind: EntityKind, section: str, method: str,
                             meta: Union[CallMeta, EventMeta]) -> str:
        key = (kind, section, method)

        known = self._known.get(key)
        if known is not None:
            return known

        pending = self._pending.get(key)
        if pending is not None:
            return await asyncio.shield(pending)

        future = asyncio.get_running_loop().create_future()
        self._pending[key] = future
        try:
            record_id = await self._lookup_or_create(kind, section, method, meta)
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as e:
            future.set_exception(e)
            # waiters re-raise it; mark retrieved so an unawaited future does not warn
            future.exception()
            raise
        else:
            self._known[key] = record_id
            future.set_result(record_id)
            return record_id
        finally:
            del self._pending[key]

    async def _lookup_or_create(self, kind: EntityKind, section: str, method: str,
                                meta: Union[CallMeta, EventMeta]) -> str:
        record_id = description_id(section, method)
        existing = await self.store.get(kind, record_id)
        if existing is not None:
            return existing.id

        text = documentation_text(resolve_documentation(meta))
        record = self._build_record(kind, record_id, section, method, text)
        await self.store.create(kind, record)
        self.log_info(f"New {kind.value} recorded", section=section, method=method)
        return record.id

    @staticmethod
    def _build_record(kind: EntityKind, record_id: str, section: str, method: str, text: str):
        if kind == EntityKind.EXTRINSIC_DESCRIPTION:
            return ExtrinsicDescriptionRecord(id=record_id, module=section, call=method, description=text)
        return EventDescriptionRecord(id=record_id, module=section, event=method, description=text)

    def cached(self, kind: EntityKind, section: str, method: str) -> Optional[str]:
        return self._known.get((kind, section, method))
