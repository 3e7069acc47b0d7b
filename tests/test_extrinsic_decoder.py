# tests/test_extrinsic_decoder.py

import pytest

from substrate_indexer.core.errors import DecodeError
from substrate_indexer.decode.description_cache import DescriptionCache
from substrate_indexer.decode.extrinsic_decoder import (
    ExtrinsicDecoder,
    extrinsic_events,
    group_events_by_extrinsic,
    is_successful,
)
from substrate_indexer.types import FeeConfig

from conftest import ALICE, BOB, make_block, make_event, make_extrinsic, transfer_block


def make_decoder(store, fee_oracle, fee_config):
    return ExtrinsicDecoder(DescriptionCache(store), fee_oracle, fee_config)


def test_event_grouping_by_phase():
    block = make_block(events=[
        make_event("system", "ExtrinsicSuccess", extrinsic_index=0),
        make_event("balances", "Deposit", extrinsic_index=1),
        make_event("system", "ExtrinsicSuccess", extrinsic_index=1),
        make_event("staking", "EraPaid", extrinsic_index=None),
    ])

    grouped = group_events_by_extrinsic(block)

    assert sorted(grouped) == [0, 1]
    assert len(grouped[1]) == 2
    assert len(extrinsic_events(block, 1)) == 2
    assert extrinsic_events(block, 5) == []


def test_success_is_absence_of_failure_event():
    assert is_successful([make_event("system", "ExtrinsicSuccess")])
    assert is_successful([])
    assert not is_successful([make_event("system", "ExtrinsicFailed", [{"module": 1}])])


async def test_signed_transfer(store, fee_oracle, fee_config):
    block = transfer_block(100)
    decoder = make_decoder(store, fee_oracle, fee_config)

    record = await decoder.decode(block, 0, block.extrinsics[0])

    assert record.id == "100-0"
    assert record.block_id == "100"
    assert record.tx_hash == "0xe1"
    assert record.module == "balances"
    assert record.call == "transferKeepAlive"
    assert record.block_height == 100
    assert record.extrinsic_index == 0
    assert record.timestamp == block.timestamp
    assert record.description_id == "balances_transferKeepAlive"
    assert record.success is True
    assert record.is_signed is True
    assert record.signer == ALICE
    assert record.nonce == 7
    assert record.args_name == ["dest", "value"]
    assert record.args_value == [BOB, "1000"]
    assert record.nb_events == 4


async def test_fees_for_allow_listed_module(store, fee_oracle, fee_config):
    block = transfer_block(100)
    decoder = make_decoder(store, fee_oracle, fee_config)

    record = await decoder.decode(block, 0, block.extrinsics[0])

    assert fee_oracle.calls == [("0xdeadbeef", block.hash)]
    assert record.fees == "1234500000000000000"
    assert record.fees_rounded == 1.23


async def test_no_fees_outside_allow_list(store, fee_oracle, fee_config):
    block = make_block(extrinsics=[make_extrinsic(section="timestamp", method="set",
                                                  args=[1], arg_names=["now"], signed=False)])
    decoder = make_decoder(store, fee_oracle, fee_config)

    record = await decoder.decode(block, 0, block.extrinsics[0])

    assert fee_oracle.calls == []
    assert record.fees is None
    assert record.fees_rounded is None


async def test_unsigned_extrinsic_has_no_signer(store, fee_oracle, fee_config):
    block = make_block(extrinsics=[make_extrinsic(section="timestamp", method="set",
                                                  args=[1], arg_names=["now"], signed=False)])
    decoder = make_decoder(store, fee_oracle, fee_config)

    record = await decoder.decode(block, 0, block.extrinsics[0])

    assert record.is_signed is False
    assert record.signer is None
    assert record.signature is None
    assert record.nonce is None


async def test_failed_extrinsic(store, fee_oracle, fee_config):
    block = make_block(
        extrinsics=[make_extrinsic()],
        events=[make_event("system", "ExtrinsicFailed", [{"module": 1}])],
    )
    decoder = make_decoder(store, fee_oracle, fee_config)

    record = await decoder.decode(block, 0, block.extrinsics[0])

    assert record.success is False
    assert record.nb_events == 1


async def test_structured_args_are_json_encoded(store, fee_oracle):
    block = make_block(extrinsics=[make_extrinsic(
        section="utility", method="batch",
        args=[[{"callIndex": "0x0500", "args": {"value": 1}}]], arg_names=["calls"],
    )])
    decoder = make_decoder(store, fee_oracle, FeeConfig(modules=[]))

    record = await decoder.decode(block, 0, block.extrinsics[0])

    assert record.args_value == ['[{"callIndex":"0x0500","args":{"value":1}}]']


async def test_argument_count_mismatch_raises(store, fee_oracle, fee_config):
    block = make_block(extrinsics=[make_extrinsic(args=[BOB], arg_names=["dest", "value"])])
    decoder = make_decoder(store, fee_oracle, fee_config)

    with pytest.raises(DecodeError) as exc_info:
        await decoder.decode(block, 0, block.extrinsics[0])

    assert exc_info.value.block_number == 100
    assert "100-0" in str(exc_info.value)
