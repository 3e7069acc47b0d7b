# substrate_indexer/decode/log_decoder.py

from typing import Optional, Union

from msgspec import Struct

from ..core.logging import LoggingMixin
from ..types import LogRecord, RawDigestItem, entity_id
from ..utils.scale import decode_engine_id
from ..utils.values import value_to_str


ENGINE_KINDS = ("Consensus", "Seal", "PreRuntime")
PAYLOAD_KINDS = ("Other", "AuthoritiesChange", "ChangesTrieRoot")


class EngineDigest(Struct, tag=True):
    kind: str
    engine: Optional[str]
    payload: str


class PayloadDigest(Struct, tag=True):
    kind: str
    payload: str


class UnknownDigest(Struct, tag=True):
    kind: str


DigestEntry = Union[EngineDigest, PayloadDigest, UnknownDigest]


def normalize_kind(kind: str) -> str:
    """Node JSON uses camelCase variant names (preRuntime); records use PascalCase"""
    return kind[:1].upper() + kind[1:] if kind else "Unknown"


def classify_digest(item: RawDigestItem) -> DigestEntry:
    kind = normalize_kind(item.type)

    if kind in ENGINE_KINDS:
        value = item.value
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            return UnknownDigest(kind=kind)
        engine, payload = value
        return EngineDigest(kind=kind, engine=decode_engine_id(engine), payload=value_to_str(payload))

    if kind in PAYLOAD_KINDS:
        return PayloadDigest(kind=kind, payload=value_to_str(item.value))

    return UnknownDigest(kind=kind)


class LogDecoder(LoggingMixin):

    def decode(self, block_number: int, index: int, item: RawDigestItem) -> LogRecord:
        entry = classify_digest(item)

        if isinstance(entry, EngineDigest):
            engine, data = entry.engine, entry.payload
        elif isinstance(entry, PayloadDigest):
            engine, data = None, entry.payload
        else:
            self.log_debug("Unrecognized digest item kind",
                           block_number=block_number, log_index=index, kind=entry.kind)
            engine, data = None, ""

        return LogRecord(
            id=entity_id(block_number, index),
            block_id=str(block_number),
            type=entry.kind,
            engine=engine,
            data=data,
        )

    def decode_all(self, block_number: int, digest: list[RawDigestItem]) -> list[LogRecord]:
        return [self.decode(block_number, index, item) for index, item in enumerate(digest)]
