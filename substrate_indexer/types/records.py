# substrate_indexer/types/records.py

import enum
from typing import Optional

from msgspec import Struct


class EntityKind(enum.Enum):
    BLOCK = "Block"
    EXTRINSIC = "Extrinsic"
    EVENT = "Event"
    LOG = "Log"
    SESSION = "Session"
    SPEC_VERSION = "SpecVersion"
    EXTRINSIC_DESCRIPTION = "ExtrinsicDescription"
    EVENT_DESCRIPTION = "EventDescription"
    HEADER_EXTENSION = "HeaderExtension"
    COMMITMENT = "Commitment"
    APP_LOOKUP = "AppLookup"


def entity_id(block_number: int | str, index: int) -> str:
    return f"{block_number}-{index}"


def description_id(section: str, method: str) -> str:
    return f"{section}_{method}"


class BlockRecord(Struct, kw_only=True):
    id: str
    number: int
    hash: str
    timestamp: int
    parent_hash: str
    state_root: str
    extrinsics_root: str
    runtime_version: int
    nb_extrinsics: int
    finalized: bool = False
    session_id: Optional[int] = None
    author: Optional[str] = None


class ExtrinsicRecord(Struct, kw_only=True):
    id: str
    block_id: str
    tx_hash: str
    module: str
    call: str
    block_height: int
    success: bool
    is_signed: bool
    extrinsic_index: int
    timestamp: int
    description_id: str
    signer: Optional[str] = None
    signature: Optional[str] = None
    nonce: Optional[int] = None
    args_name: list[str] = []
    args_value: list[str] = []
    nb_events: int = 0
    fees: Optional[str] = None
    fees_rounded: Optional[float] = None


class EventRecord(Struct, kw_only=True):
    id: str
    block_id: str
    module: str
    event: str
    block_height: int
    event_index: int
    call: str
    description_id: str
    args_name: list[str] = []
    args_value: list[str] = []
    extrinsic_id: Optional[str] = None


class LogRecord(Struct, kw_only=True):
    id: str
    block_id: str
    type: str
    data: str = ""
    engine: Optional[str] = None


class SessionRecord(Struct, kw_only=True):
    id: str
    validators: list[str] = []


class SpecVersionRecord(Struct, kw_only=True):
    id: str
    block_height: int


class ExtrinsicDescriptionRecord(Struct, kw_only=True):
    id: str
    module: str
    call: str
    description: str = ""


class EventDescriptionRecord(Struct, kw_only=True):
    id: str
    module: str
    event: str
    description: str = ""


class HeaderExtensionRecord(Struct, kw_only=True):
    id: str
    block_id: str
    version: str


class CommitmentRecord(Struct, kw_only=True):
    id: str
    block_id: str
    header_extension_id: str
    rows: int
    cols: int
    data_root: Optional[str] = None
    commitment: str = ""


class AppLookupRecord(Struct, kw_only=True):
    id: str
    block_id: str
    header_extension_id: str
    size: int
    index: str = "[]"


RECORD_TYPES = {
    EntityKind.BLOCK: BlockRecord,
    EntityKind.EXTRINSIC: ExtrinsicRecord,
    EntityKind.EVENT: EventRecord,
    EntityKind.LOG: LogRecord,
    EntityKind.SESSION: SessionRecord,
    EntityKind.SPEC_VERSION: SpecVersionRecord,
    EntityKind.EXTRINSIC_DESCRIPTION: ExtrinsicDescriptionRecord,
    EntityKind.EVENT_DESCRIPTION: EventDescriptionRecord,
    EntityKind.HEADER_EXTENSION: HeaderExtensionRecord,
    EntityKind.COMMITMENT: CommitmentRecord,
    EntityKind.APP_LOOKUP: AppLookupRecord,
}
