# tests/test_entity_store.py

import pytest
from sqlalchemy.exc import IntegrityError

from substrate_indexer.database.connection import DatabaseManager
from substrate_indexer.database.entity_store import SqlEntityStore
from substrate_indexer.database.memory_store import DuplicateRecordError
from substrate_indexer.pipeline.indexing_pipeline import BlockOutcome, IndexingPipeline
from substrate_indexer.types import (
    BlockRecord,
    DatabaseConfig,
    EntityKind,
    EventRecord,
    ExtrinsicRecord,
    SessionRecord,
)

from conftest import FakeAccountUpdater, FakeChain, FakeFeeOracle, transfer_block


@pytest.fixture
async def sql_store():
    db_manager = DatabaseManager(DatabaseConfig(url="sqlite+aiosqlite:///:memory:"))
    await db_manager.initialize()
    await db_manager.create_tables()
    yield SqlEntityStore(db_manager)
    await db_manager.shutdown()


def block_record(number=1, author=None):
    return BlockRecord(
        id=str(number), number=number, hash=f"0x{number:02x}", timestamp=1000,
        parent_hash="0x00", state_root="0x01", extrinsics_root="0x02",
        runtime_version=3, nb_extrinsics=0, author=author,
    )


def extrinsic_record(index):
    return ExtrinsicRecord(
        id=f"1-{index}", block_id="1", tx_hash=f"0x{index}", module="system", call="remark",
        block_height=1, success=True, is_signed=False, extrinsic_index=index, timestamp=1000,
        description_id="system_remark", args_name=["remark"], args_value=["0x00"],
    )


def event_record(index):
    return EventRecord(
        id=f"1-{index}", block_id="1", module="system", event="ExtrinsicSuccess", block_height=1,
        event_index=index, call="ExtrinsicSuccess", description_id="system_ExtrinsicSuccess",
        extrinsic_id=f"1-{index}",
    )


async def test_get_missing_returns_none(sql_store):
    assert await sql_store.get(EntityKind.BLOCK, "404") is None
    assert not await sql_store.exists(EntityKind.BLOCK, "404")


async def test_create_and_get_round_trip(sql_store):
    await sql_store.create(EntityKind.BLOCK, block_record(1, author="val-1"))
    await sql_store.create(EntityKind.SESSION, SessionRecord(id="4", validators=["a", "b"]))

    assert await sql_store.get(EntityKind.BLOCK, "1") == block_record(1, author="val-1")
    assert (await sql_store.get(EntityKind.SESSION, "4")).validators == ["a", "b"]


async def test_create_replaces_existing(sql_store):
    await sql_store.create(EntityKind.BLOCK, block_record(1))
    await sql_store.create(EntityKind.BLOCK, block_record(1, author="val-3"))

    assert (await sql_store.get(EntityKind.BLOCK, "1")).author == "val-3"


async def test_bulk_create(sql_store):
    count = await sql_store.bulk_create({
        EntityKind.EXTRINSIC: [extrinsic_record(0), extrinsic_record(1)],
        EntityKind.EVENT: [event_record(0), event_record(1)],
    })

    assert count == 4
    stored = await sql_store.get(EntityKind.EXTRINSIC, "1-1")
    assert stored.args_value == ["0x00"]
    assert (await sql_store.get(EntityKind.EVENT, "1-0")).extrinsic_id == "1-0"


async def test_bulk_create_is_all_or_nothing(sql_store):
    await sql_store.bulk_create({EntityKind.EXTRINSIC: [extrinsic_record(0)]})

    with pytest.raises(IntegrityError):
        await sql_store.bulk_create({
            EntityKind.EVENT: [event_record(5)],
            EntityKind.EXTRINSIC: [extrinsic_record(0)],
        })

    assert await sql_store.get(EntityKind.EVENT, "1-5") is None


async def test_memory_store_bulk_create_is_all_or_nothing(store):
    await store.bulk_create({EntityKind.EXTRINSIC: [extrinsic_record(0)]})

    with pytest.raises(DuplicateRecordError):
        await store.bulk_create({
            EntityKind.EVENT: [event_record(5)],
            EntityKind.EXTRINSIC: [extrinsic_record(0)],
        })

    assert await store.get(EntityKind.EVENT, "1-5") is None


async def test_pipeline_against_sql_store(sql_store, fee_config):
    pipeline = IndexingPipeline(sql_store, FakeChain(), FakeFeeOracle(), FakeAccountUpdater(), fee_config)

    assert await pipeline.process_block(transfer_block(100)) == BlockOutcome.PROCESSED
    assert await pipeline.process_block(transfer_block(100)) == BlockOutcome.SKIPPED

    block = await sql_store.get(EntityKind.BLOCK, "100")
    assert block.author == "val-2"
    assert (await sql_store.get(EntityKind.EXTRINSIC, "100-0")).fees == "1234500000000000000"
    assert (await sql_store.get(EntityKind.EVENT, "100-3")).extrinsic_id == "100-0"
    assert (await sql_store.get(EntityKind.LOG, "100-1")).type == "Seal"
