"""
Collects worker completion signals and logs the running total.
"""

import asyncio
import logging

log = logging.getLogger(__name__)


class ProgressAggregator:
    """
    Consumes exactly one completion signal per worker.

    Signals are handled in arrival order, which is not necessarily worker order.
    The aggregator only observes: it never blocks or steers the workers.
    """

    def __init__(self, worker_count: int, queue: asyncio.Queue | None = None):
        self.worker_count = worker_count
        self.queue: asyncio.Queue = queue or asyncio.Queue(maxsize=worker_count)
        self.completed = 0

    def signal(self, worker_index: int) -> None:
        """Reports that a worker finished its range. Called once per worker."""
        self.queue.put_nowait(worker_index)

    async def run(self) -> list[int]:
        """
        Waits for every worker to report.

        Returns:
            The worker indexes in the order their signals arrived.
        """
        width = len(str(self.worker_count))
        arrival_order = []
        while self.completed < self.worker_count:
            worker_index = await self.queue.get()
            self.completed += 1
            arrival_order.append(worker_index)
            log.info(
                f"Worker {worker_index:0{width}d} finished, "
                f"progress: {self.completed:0{width}d}/{self.worker_count}"
            )
            self.queue.task_done()
        return arrival_order
