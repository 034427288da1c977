"""
Splits an ordered task list into contiguous ranges, one per worker.
"""

from hls_mirror.models.playlist import TaskRange


def partition(total_tasks: int, worker_count: int, worker_index: int) -> TaskRange:
    """
    Returns the range of tasks owned by one worker.

    The ranges of workers 1..worker_count cover ``[0, total_tasks)`` exactly once.
    Leftover tasks go one each to the first workers instead of piling up on the
    last one, so no worker runs more than one task longer than the others.

    Args:
        total_tasks: Number of tasks in the ordered list.
        worker_count: Number of workers sharing the list.
        worker_index: 1-based index of the worker asking for its share.
    """
    if total_tasks < 0:
        raise ValueError(f"total_tasks cannot be negative: {total_tasks}")
    if worker_count < 1:
        raise ValueError(f"worker_count must be at least 1: {worker_count}")
    if not 1 <= worker_index <= worker_count:
        raise ValueError(f"worker_index {worker_index} is outside 1..{worker_count}")

    if total_tasks < worker_count:
        if worker_index > total_tasks:
            return TaskRange(0, 0)
        return TaskRange(worker_index - 1, worker_index)

    base, remainder = divmod(total_tasks, worker_count)
    offset = (worker_index - 1) * base
    if worker_index <= remainder:
        start = offset + worker_index - 1
        return TaskRange(start, start + base + 1)
    start = offset + remainder
    return TaskRange(start, start + base)


def partition_all(total_tasks: int, worker_count: int) -> list[TaskRange]:
    """Returns the ranges of every worker, in worker order."""
    return [
        partition(total_tasks, worker_count, index)
        for index in range(1, worker_count + 1)
    ]
