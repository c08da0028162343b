import pytest

from piloom.errors import InvalidInputError
from piloom.partition import WorkRange, partition


def test_partition_ten_by_three():
    ranges = partition(10, 3)
    assert [len(r) for r in ranges] == [4, 3, 3]
    assert ranges == [WorkRange(0, 4), WorkRange(4, 7), WorkRange(7, 10)]


def test_partition_covers_range_exactly():
    for n in range(0, 60):
        for workers in range(1, 12):
            ranges = partition(n, workers)
            assert len(ranges) == workers
            assert ranges[0].start == 0
            assert ranges[-1].end == n
            for left, right in zip(ranges, ranges[1:]):
                assert left.end == right.start
            sizes = [len(r) for r in ranges]
            assert sum(sizes) == n
            assert max(sizes) - min(sizes) <= 1
            assert sizes == sorted(sizes, reverse=True)
            assert [k for r in ranges for k in r] == list(range(n))


def test_partition_zero_iterations_gives_empty_ranges():
    ranges = partition(0, 4)
    assert len(ranges) == 4
    assert all(len(r) == 0 for r in ranges)
    assert all(not r for r in ranges)


def test_more_workers_than_iterations():
    ranges = partition(2, 5)
    assert [len(r) for r in ranges] == [1, 1, 0, 0, 0]


@pytest.mark.parametrize("n,workers", [(10, 0), (10, -2), (-1, 2), (10, 1.5), (True, 2)])
def test_partition_rejects_invalid_input(n, workers):
    with pytest.raises(InvalidInputError):
        partition(n, workers)
