# substrate_indexer/pipeline/indexing_pipeline.py

import asyncio
import enum
from typing import Awaitable, List, Optional, Tuple

from msgspec import Struct

from ..core.logging import LoggingMixin
from ..database.interfaces import EntityStore
from ..decode.description_cache import DescriptionCache
from ..decode.event_decoder import EventDecoder
from ..decode.extension_decoder import ExtensionDecoder
from ..decode.extrinsic_decoder import ExtrinsicDecoder, group_events_by_extrinsic
from ..decode.interfaces import AccountUpdater, BlockSource, ChainStateClient, FeeOracle
from ..decode.log_decoder import LogDecoder
from ..decode.session_resolver import SessionResolver
from ..decode.spec_version import SpecVersionTracker
from ..types import (
    BlockRecord,
    DEFAULT_FEE_MODULES,
    EntityKind,
    EventRecord,
    ExtrinsicRecord,
    FeeConfig,
    LogRecord,
    RawBlock,
)


class BlockOutcome(enum.Enum):
    PROCESSED = "processed"
    SKIPPED = "skipped"
    FAILED = "failed"


class PipelineSummary(Struct):
    processed: int = 0
    skipped: int = 0
    failed: int = 0
    failed_blocks: list[int] = []

    def add(self, block_number: int, outcome: BlockOutcome) -> None:
        if outcome == BlockOutcome.PROCESSED:
            self.processed += 1
        elif outcome == BlockOutcome.SKIPPED:
            self.skipped += 1
        else:
            self.failed += 1
            self.failed_blocks.append(block_number)


async def gather_in_order(awaitables: List[Awaitable]) -> list:
    """
    Run awaitables concurrently and return their results in argument order.

    On the first failure the remaining tasks are cancelled and drained before
    the error is re-raised, so no decoding work outlives an aborted block.
    """
    tasks = [asyncio.ensure_future(a) for a in awaitables]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class IndexingPipeline(LoggingMixin):
    """
    Turns raw blocks into normalized records.

    Per block:
    1. Skip when a Block record already exists (replays are idempotent)
    2. Header phase, run concurrently: digest logs, session and author,
       spec version, header extension. Failures here are logged and the
       Block record is still saved.
    3. Call phase, run concurrently: every extrinsic and every event. Any
       failure aborts the block before anything of this phase is written.
    4. One bulk write of all extrinsic and event records, in index order.

    The description and spec-version caches live on this object and are
    shared by every block it processes. Blocks must be fed one at a time
    from a single event loop.
    """

    def __init__(self,
                 store: EntityStore,
                 chain: ChainStateClient,
                 fee_oracle: Optional[FeeOracle] = None,
                 account_updater: Optional[AccountUpdater] = None,
                 fee_config: Optional[FeeConfig] = None):
        self.store = store
        fee_config = fee_config or FeeConfig(modules=list(DEFAULT_FEE_MODULES))

        self.descriptions = DescriptionCache(store)
        self.spec_versions = SpecVersionTracker(store)
        self.sessions = SessionResolver(store, chain)
        self.log_decoder = LogDecoder()
        self.extension_decoder = ExtensionDecoder(store)
        self.extrinsic_decoder = ExtrinsicDecoder(self.descriptions, fee_oracle, fee_config)
        self.event_decoder = EventDecoder(self.descriptions, account_updater)

    async def process_block(self, block: RawBlock) -> BlockOutcome:
        block_number = block.number
        block_saved = False
        try:
            if block_number % 100 == 0:
                self.log_info("Handling block", block_number=block_number, spec_version=block.spec_version)

            if await self.store.exists(EntityKind.BLOCK, str(block_number)):
                self.log_debug("Block already indexed, skipping", block_number=block_number)
                return BlockOutcome.SKIPPED

            await self.handle_header(block)
            block_saved = True

            extrinsics, events = await self.decode_calls_and_events(block)
            await self.store.bulk_create({
                EntityKind.EXTRINSIC: extrinsics,
                EntityKind.EVENT: events,
            })
            return BlockOutcome.PROCESSED

        except Exception as e:
            self.log_error("Record block error",
                           block_number=block_number,
                           error=str(e),
                           exception_type=type(e).__name__)
            if block_saved:
                # the Block record stays, so a replay will skip this block
                self.log_error("Block saved without its extrinsics and events",
                               block_number=block_number)
            return BlockOutcome.FAILED

    async def handle_header(self, block: RawBlock) -> BlockRecord:
        header = block.header
        block_record = BlockRecord(
            id=str(header.number),
            number=header.number,
            hash=header.hash,
            timestamp=block.timestamp,
            parent_hash=header.parent_hash,
            state_root=header.state_root,
            extrinsics_root=header.extrinsics_root,
            runtime_version=block.spec_version,
            nb_extrinsics=len(block.extrinsics),
            finalized=False,
        )

        steps = ("logs", "session", "spec_version", "extension")
        results = await asyncio.gather(
            self.handle_logs(block),
            self.sessions.resolve(header.number, header.hash, header.digest),
            self.spec_versions.track(block.spec_version, header.number),
            self.extension_decoder.handle(header.number, header.extension),
            return_exceptions=True,
        )

        for step, result in zip(steps, results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, BaseException):
                self.log_error("Record block header error",
                               block_number=header.number,
                               step=step,
                               error=str(result),
                               exception_type=type(result).__name__)

        session = results[1]
        if not isinstance(session, BaseException):
            block_record.session_id, block_record.author = session

        await self.store.create(EntityKind.BLOCK, block_record)
        return block_record

    async def handle_logs(self, block: RawBlock) -> List[LogRecord]:
        records = self.log_decoder.decode_all(block.number, block.header.digest)
        if records:
            await self.store.bulk_create({EntityKind.LOG: records})
        return records

    async def decode_calls_and_events(self, block: RawBlock) -> Tuple[List[ExtrinsicRecord], List[EventRecord]]:
        block_number = block.number
        grouped = group_events_by_extrinsic(block)

        extrinsic_jobs = [
            self.extrinsic_decoder.decode(block, index, extrinsic, grouped.get(index, []))
            for index, extrinsic in enumerate(block.extrinsics)
        ]
        event_jobs = [
            self.event_decoder.decode(block_number, index, record, record.extrinsic_index,
                                      block.hash, block.timestamp)
            for index, record in enumerate(block.events)
        ]

        results = await gather_in_order(extrinsic_jobs + event_jobs)
        split = len(extrinsic_jobs)
        return results[:split], results[split:]

    async def run(self, source: BlockSource, start: int, end: int) -> PipelineSummary:
        """Process blocks start..end (inclusive) sequentially"""
        summary = PipelineSummary()
        self.log_info("Starting indexing run", start=start, end=end)

        async for block in source.blocks(start, end):
            outcome = await self.process_block(block)
            summary.add(block.number, outcome)

        self.log_info("Indexing run finished",
                      processed=summary.processed,
                      skipped=summary.skipped,
                      failed=summary.failed)
        return summary
