# tests/conftest.py

from typing import List, Optional

import pytest

from substrate_indexer.database.memory_store import MemoryEntityStore
from substrate_indexer.decode.interfaces import AccountUpdater, BlockSource, ChainStateClient, FeeOracle
from substrate_indexer.types import (
    ApplyExtrinsic,
    ArgMeta,
    CallMeta,
    EventMeta,
    FeeConfig,
    Finalization,
    RawBlock,
    RawDigestItem,
    RawEvent,
    RawEventRecord,
    RawExtrinsic,
    RawHeader,
)


VALIDATORS = ["val-0", "val-1", "val-2", "val-3", "val-4"]
ALICE = "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"
BOB = "5FHneW46xGXgs5mUiveU4sbTyGBzmstUspZC92UhjJM694ty"


# === Fake collaborators ===

class FakeChain(ChainStateClient):
    def __init__(self, session_index: int = 12, validators: Optional[List[str]] = None, fail: bool = False):
        self.session_index = session_index
        self.validators = list(VALIDATORS if validators is None else validators)
        self.fail = fail
        self.validator_calls = 0

    async def current_session_index(self, block_hash: str) -> int:
        if self.fail:
            raise ConnectionError("node unreachable")
        return self.session_index

    async def session_validators(self, block_hash: str) -> List[str]:
        self.validator_calls += 1
        return self.validators


class FakeFeeOracle(FeeOracle):
    def __init__(self, fee: Optional[str] = "1234500000000000000"):
        self.fee = fee
        self.calls = []

    async def get_fee(self, call_data: str, block_hash: str) -> Optional[str]:
        self.calls.append((call_data, block_hash))
        return self.fee


class FakeAccountUpdater(AccountUpdater):
    def __init__(self):
        self.refreshed = []
        self.transfers = []

    async def refresh_accounts(self, account_ids: List[str]) -> None:
        self.refreshed.extend(account_ids)

    async def record_transfer(self, event, block_id, block_hash, timestamp, extrinsic_id) -> None:
        self.transfers.append({
            "event": event,
            "block_id": block_id,
            "block_hash": block_hash,
            "timestamp": timestamp,
            "extrinsic_id": extrinsic_id,
        })


class ListBlockSource(BlockSource):
    def __init__(self, blocks: List[RawBlock]):
        self._blocks = sorted(blocks, key=lambda b: b.number)

    async def blocks(self, start: int, end: int):
        for block in self._blocks:
            if start <= block.number <= end:
                yield block


# === Raw block builders ===

def aura_digest(slot: int) -> List[RawDigestItem]:
    return [
        RawDigestItem(type="preRuntime", value=["aura", "0x" + slot.to_bytes(8, "little").hex()]),
        RawDigestItem(type="seal", value=["aura", "0x" + "ab" * 64]),
    ]


def make_extrinsic(section: str = "balances",
                   method: str = "transferKeepAlive",
                   args: Optional[list] = None,
                   arg_names: Optional[List[str]] = None,
                   signed: bool = True,
                   hash: str = "0xe1") -> RawExtrinsic:
    args = [BOB, 1000] if args is None else args
    arg_names = ["dest", "value"] if arg_names is None else arg_names
    return RawExtrinsic(
        hash=hash,
        section=section,
        method=method,
        meta=CallMeta(
            name=method,
            args=[ArgMeta(name=name) for name in arg_names],
            docs=[f"Call {section}.{method}", "Second line"],
        ),
        args=args,
        is_signed=signed,
        signer=ALICE,
        signature="0x" + "11" * 64,
        nonce=7,
        call_data="0xdeadbeef",
    )


def make_event(section: str, method: str, data: Optional[list] = None,
               extrinsic_index: Optional[int] = 0, arg_types: Optional[List[str]] = None) -> RawEventRecord:
    phase = ApplyExtrinsic(index=extrinsic_index) if extrinsic_index is not None else Finalization()
    data = [] if data is None else data
    return RawEventRecord(
        phase=phase,
        event=RawEvent(
            section=section,
            method=method,
            meta=EventMeta(args=arg_types or [f"T{i}" for i in range(len(data))],
                           documentation=[f"Event {section}.{method}"]),
            data=data,
        ),
    )


def make_block(number: int = 100,
               extrinsics: Optional[List[RawExtrinsic]] = None,
               events: Optional[List[RawEventRecord]] = None,
               digest: Optional[List[RawDigestItem]] = None,
               extension=None,
               spec_version: int = 9,
               timestamp: int = 1_700_000_000_000) -> RawBlock:
    return RawBlock(
        header=RawHeader(
            number=number,
            hash=f"0x{number:064x}",
            parent_hash=f"0x{number - 1:064x}",
            state_root="0x" + "aa" * 32,
            extrinsics_root="0x" + "bb" * 32,
            digest=aura_digest(7) if digest is None else digest,
            extension=extension,
        ),
        timestamp=timestamp,
        spec_version=spec_version,
        extrinsics=[] if extrinsics is None else extrinsics,
        events=[] if events is None else events,
    )


def transfer_block(number: int = 100) -> RawBlock:
    """One signed balances transfer plus the events a node emits for it"""
    return make_block(
        number=number,
        extrinsics=[make_extrinsic()],
        events=[
            make_event("balances", "Withdraw", [ALICE, 125]),
            make_event("balances", "Transfer", [ALICE, BOB, 1000]),
            make_event("transactionPayment", "TransactionFeePaid", [ALICE, 125, 0]),
            make_event("system", "ExtrinsicSuccess", [{"weight": 1}]),
        ],
    )


# === Fixtures ===

@pytest.fixture
def store():
    return MemoryEntityStore()


@pytest.fixture
def chain():
    return FakeChain()


@pytest.fixture
def fee_oracle():
    return FakeFeeOracle()


@pytest.fixture
def account_updater():
    return FakeAccountUpdater()


@pytest.fixture
def fee_config():
    return FeeConfig(modules=["balances", "utility"], token_decimals=18, precision=2)
