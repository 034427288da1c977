import asyncio
import logging

from hls_mirror.core.progress import ProgressAggregator


async def test_signals_are_consumed_in_arrival_order(caplog):
    caplog.set_level(logging.INFO, logger="hls_mirror")
    aggregator = ProgressAggregator(3)
    for index in (3, 1, 2):
        aggregator.signal(index)

    assert await aggregator.run() == [3, 1, 2]
    assert aggregator.completed == 3
    assert "progress: 3/3" in caplog.text


async def test_waits_until_every_worker_reported():
    aggregator = ProgressAggregator(2)
    task = asyncio.create_task(aggregator.run())

    aggregator.signal(2)
    await asyncio.sleep(0)
    assert not task.done()

    aggregator.signal(1)
    assert await asyncio.wait_for(task, timeout=1) == [2, 1]


async def test_counter_is_zero_padded_to_worker_count(caplog):
    caplog.set_level(logging.INFO, logger="hls_mirror")
    aggregator = ProgressAggregator(12)
    for index in range(1, 13):
        aggregator.signal(index)

    await aggregator.run()
    assert "Worker 01 finished, progress: 01/12" in caplog.text
