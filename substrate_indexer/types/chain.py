# substrate_indexer/types/chain.py

from typing import Optional, Any, Union

from msgspec import Struct


class ArgMeta(Struct):
    name: str
    type: Optional[str] = None


class CallMeta(Struct):
    name: str
    args: list[ArgMeta] = []
    docs: Optional[list[str]] = None
    documentation: Optional[list[str]] = None  # metadata before v14


class EventMeta(Struct):
    args: list[str] = []
    docs: Optional[list[str]] = None
    documentation: Optional[list[str]] = None  # metadata before v14


class RawExtrinsic(Struct):
    hash: str
    section: str
    method: str
    meta: CallMeta
    args: list[Any] = []
    is_signed: bool = False
    signer: Optional[str] = None
    signature: Optional[str] = None
    nonce: Optional[int] = None
    call_data: Optional[str] = None  # hex encoded extrinsic, fee oracle input


class ApplyExtrinsic(Struct, tag=True):
    index: int


class Finalization(Struct, tag=True):
    pass


class Initialization(Struct, tag=True):
    pass


Phase = Union[ApplyExtrinsic, Finalization, Initialization]


class RawEvent(Struct):
    section: str
    method: str
    meta: EventMeta
    data: list[Any] = []


class RawEventRecord(Struct):
    phase: Phase
    event: RawEvent

    @property
    def extrinsic_index(self) -> int:
        """Index of the call that emitted the event, -1 when not emitted by a call"""
        if isinstance(self.phase, ApplyExtrinsic):
            return self.phase.index
        return -1


class RawDigestItem(Struct):
    type: str  # PreRuntime, Consensus, Seal, Other, AuthoritiesChange, ...
    value: Any = None


class RawHeader(Struct):
    number: int
    hash: str
    parent_hash: str
    state_root: str
    extrinsics_root: str
    digest: list[RawDigestItem] = []
    extension: Union[str, dict, None] = None  # versioned payload, JSON text or parsed


class RawBlock(Struct):
    header: RawHeader
    timestamp: int  # unix ms
    spec_version: int
    extrinsics: list[RawExtrinsic] = []
    events: list[RawEventRecord] = []

    @property
    def number(self) -> int:
        return self.header.number

    @property
    def hash(self) -> str:
        return self.header.hash
