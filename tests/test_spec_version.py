# tests/test_spec_version.py

from substrate_indexer.decode.spec_version import SpecVersionTracker
from substrate_indexer.types import EntityKind


async def test_one_record_per_version_change(store):
    tracker = SpecVersionTracker(store)

    for block_number, version in enumerate([1, 1, 2, 2, 3], start=10):
        await tracker.track(version, block_number)

    records = {r.id: r.block_height for r in store.all(EntityKind.SPEC_VERSION)}
    assert records == {"1": 10, "2": 12, "3": 14}
    assert tracker.current.id == "3"


async def test_restart_reads_current_version_from_store(store):
    await SpecVersionTracker(store).track(5, 1000)
    writes = len(store.operations)

    restarted = SpecVersionTracker(store)
    record = await restarted.track(5, 2000)

    assert record.block_height == 1000
    assert len(store.operations) == writes


async def test_replay_keeps_first_seen_height(store):
    tracker = SpecVersionTracker(store)
    await tracker.track(1, 10)
    await tracker.track(2, 20)

    # blocks of version 1 processed again out of a re-run range
    record = await tracker.track(1, 15)

    assert record.block_height == 10
    assert store.count(EntityKind.SPEC_VERSION) == 2
