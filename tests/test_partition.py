import pytest

from hls_mirror.models.playlist import TaskRange
from hls_mirror.utils.partition import partition, partition_all


@pytest.mark.parametrize("workers", range(1, 13))
@pytest.mark.parametrize("total", range(0, 41))
def test_ranges_cover_every_task_exactly_once(total, workers):
    ranges = partition_all(total, workers)

    covered = [
        index
        for task_range in ranges
        for index in range(task_range.start, task_range.end)
    ]
    assert sorted(covered) == list(range(total))

    sizes = [len(task_range) for task_range in ranges]
    assert max(sizes) - min(sizes) <= 1


def test_remainder_goes_to_the_first_workers():
    assert partition_all(10, 3) == [TaskRange(0, 4), TaskRange(4, 7), TaskRange(7, 10)]
    assert partition_all(11, 4) == [
        TaskRange(0, 3),
        TaskRange(3, 6),
        TaskRange(6, 9),
        TaskRange(9, 11),
    ]


def test_fewer_tasks_than_workers():
    assert partition_all(2, 4) == [
        TaskRange(0, 1),
        TaskRange(1, 2),
        TaskRange(0, 0),
        TaskRange(0, 0),
    ]


def test_zero_tasks_and_single_worker():
    assert partition(0, 1, 1) == TaskRange(0, 0)
    assert partition(7, 1, 1) == TaskRange(0, 7)


def test_ranges_are_contiguous_when_every_worker_has_work():
    ranges = partition_all(23, 5)
    assert ranges[0].start == 0
    assert ranges[-1].end == 23
    for previous, current in zip(ranges, ranges[1:]):
        assert previous.end == current.start


@pytest.mark.parametrize(
    "total, workers, index",
    [(-1, 1, 1), (5, 0, 1), (5, 2, 0), (5, 2, 3)],
)
def test_invalid_arguments(total, workers, index):
    with pytest.raises(ValueError):
        partition(total, workers, index)


def test_task_range_slices_a_list():
    items = list("abcdef")
    assert items[TaskRange(2, 4).as_slice()] == ["c", "d"]
    assert items[TaskRange(0, 0).as_slice()] == []
