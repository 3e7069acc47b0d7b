# substrate_indexer/decode/extrinsic_decoder.py

from typing import Dict, List, Optional

from ..core.errors import DecodeError
from ..core.logging import LoggingMixin
from ..types import ExtrinsicRecord, FeeConfig, RawBlock, RawEventRecord, RawExtrinsic, entity_id
from ..utils.amounts import round_fee
from ..utils.values import value_to_str
from .description_cache import DescriptionCache
from .interfaces import FeeOracle


def extrinsic_events(block: RawBlock, index: int) -> List[RawEventRecord]:
    """Events emitted while applying the call at ``index``"""
    return [record for record in block.events if record.extrinsic_index == index]


def group_events_by_extrinsic(block: RawBlock) -> Dict[int, List[RawEventRecord]]:
    grouped: Dict[int, List[RawEventRecord]] = {}
    for record in block.events:
        if record.extrinsic_index >= 0:
            grouped.setdefault(record.extrinsic_index, []).append(record)
    return grouped


def is_successful(events: List[RawEventRecord]) -> bool:
    return not any(
        record.event.section == "system" and record.event.method == "ExtrinsicFailed"
        for record in events
    )


class ExtrinsicDecoder(LoggingMixin):

    def __init__(self, descriptions: DescriptionCache, fee_oracle: Optional[FeeOracle], fee_config: FeeConfig):
        self.descriptions = descriptions
        self.fee_oracle = fee_oracle
        self.fee_config = fee_config
        self._fee_modules = frozenset(fee_config.modules)

    def should_get_fees(self, module: str) -> bool:
        return self.fee_oracle is not None and module in self._fee_modules

    async def decode(self, block: RawBlock, index: int, extrinsic: RawExtrinsic,
                     events: Optional[List[RawEventRecord]] = None) -> ExtrinsicRecord:
        block_number = block.number
        try:
            args_name = [arg.name for arg in extrinsic.meta.args]
            args_value = [value_to_str(arg) for arg in extrinsic.args]
            if len(args_name) != len(args_value):
                raise DecodeError(
                    f"{len(args_name)} argument names for {len(args_value)} values",
                    block_number=block_number,
                    entity=f"extrinsic {entity_id(block_number, index)}",
                )

            if events is None:
                events = extrinsic_events(block, index)
            description_id = await self.descriptions.get_extrinsic_description(
                extrinsic.section, extrinsic.method, extrinsic.meta
            )

            record = ExtrinsicRecord(
                id=entity_id(block_number, index),
                block_id=str(block_number),
                tx_hash=extrinsic.hash,
                module=extrinsic.section,
                call=extrinsic.method,
                block_height=block_number,
                success=is_successful(events),
                is_signed=extrinsic.is_signed,
                extrinsic_index=index,
                timestamp=block.timestamp,
                description_id=description_id,
                signer=extrinsic.signer if extrinsic.is_signed else None,
                signature=extrinsic.signature if extrinsic.is_signed else None,
                nonce=extrinsic.nonce if extrinsic.is_signed else None,
                args_name=args_name,
                args_value=args_value,
                nb_events=len(events),
            )

            if self.should_get_fees(record.module) and extrinsic.call_data:
                record.fees = await self.fee_oracle.get_fee(extrinsic.call_data, block.hash)
                record.fees_rounded = round_fee(
                    record.fees, self.fee_config.token_decimals, self.fee_config.precision
                ) if record.fees else None

            return record

        except Exception as e:
            self.log_error("Record extrinsic error",
                           block_number=block_number,
                           extrinsic_hash=extrinsic.hash,
                           extrinsic_id=entity_id(block_number, index),
                           error=str(e),
                           exception_type=type(e).__name__)
            raise
