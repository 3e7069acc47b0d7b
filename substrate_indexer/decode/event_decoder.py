# substrate_indexer/decode/event_decoder.py

from typing import Optional

from ..core.logging import LoggingMixin
from ..types import EventRecord, RawEventRecord, entity_id
from ..utils.values import sanitize_event_value, value_to_str
from .description_cache import DescriptionCache
from .interfaces import AccountUpdater


BALANCE_EVENTS = frozenset([
    "balances.BalanceSet",
    "balances.Deposit",
    "balances.DustLost",
    "balances.Endowed",
    "balances.Reserved",
    "balances.Slashed",
    "balances.Unreserved",
    "balances.Withdraw",
])
FEE_EVENTS = frozenset(["transactionPayment.TransactionFeePaid"])
TRANSFER_EVENTS = frozenset(["balances.Transfer"])


class EventDecoder(LoggingMixin):

    def __init__(self, descriptions: DescriptionCache, account_updater: Optional[AccountUpdater]):
        self.descriptions = descriptions
        self.account_updater = account_updater

    async def decode(self, block_number: int, index: int, record: RawEventRecord,
                     extrinsic_index: int, block_hash: str, timestamp: int) -> EventRecord:
        try:
            event = record.event
            description_id = await self.descriptions.get_event_description(
                event.section, event.method, event.meta
            )

            event_record = EventRecord(
                id=entity_id(block_number, index),
                block_id=str(block_number),
                module=event.section,
                event=event.method,
                block_height=block_number,
                event_index=index,
                call=event.method,
                description_id=description_id,
                args_name=[str(arg) for arg in event.meta.args],
                args_value=[sanitize_event_value(value) for value in event.data],
            )
            if extrinsic_index >= 0:
                event_record.extrinsic_id = entity_id(block_number, extrinsic_index)

            await self.handle_accounts_and_transfers(
                record, str(block_number), block_hash, timestamp, event_record.extrinsic_id or ""
            )
            return event_record

        except Exception as e:
            self.log_error("Record event error",
                           block_number=block_number,
                           event_index=index,
                           error=str(e),
                           exception_type=type(e).__name__)
            raise

    async def handle_accounts_and_transfers(self, record: RawEventRecord, block_id: str, block_hash: str,
                                            timestamp: int, extrinsic_id: str) -> None:
        if self.account_updater is None:
            return

        key = f"{record.event.section}.{record.event.method}"

        if key in BALANCE_EVENTS or key in FEE_EVENTS:
            if record.event.data:
                who = record.event.data[0]
                await self.account_updater.refresh_accounts([value_to_str(who)])

        if key in TRANSFER_EVENTS:
            await self.account_updater.record_transfer(record, block_id, block_hash, timestamp, extrinsic_id)
