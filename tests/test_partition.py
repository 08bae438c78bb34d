"""Tests for the partition strategies."""

from __future__ import annotations

import random
from pathlib import Path

import pytest

from treecut.models import FileRecord
from treecut.partition.strategies import (
    bucket_totals,
    distribute_categories,
    partition_by_count,
    partition_by_size,
)


def _records(sizes: list[int]) -> list[FileRecord]:
    return [FileRecord(Path(f"/src/file{index}"), size) for index, size in enumerate(sizes)]


class TestPartitionByCount:
    """Test partition_by_count function."""

    def test_five_files_two_buckets(self) -> None:
        """Files alternate between buckets by index."""
        paths = [Path(f"/src/{name}") for name in "abcde"]

        buckets = partition_by_count(paths, 2)

        assert buckets == [
            [paths[0], paths[2], paths[4]],
            [paths[1], paths[3]],
        ]

    @pytest.mark.parametrize("count,partitions", [(1, 1), (7, 3), (10, 10), (3, 5), (100, 7)])
    def test_round_robin_property(self, count: int, partitions: int) -> None:
        """Every element i lands in bucket i % n and nothing is lost."""
        paths = [f"p{index}" for index in range(count)]

        buckets = partition_by_count(paths, partitions)

        assert len(buckets) == partitions
        assert sum(len(bucket) for bucket in buckets) == count
        for index, path in enumerate(paths):
            assert path in buckets[index % partitions]

    def test_more_buckets_than_files(self) -> None:
        """Extra buckets are present and empty."""
        assert partition_by_count(["a"], 3) == [["a"], [], []]

    def test_empty_input(self) -> None:
        assert partition_by_count([], 2) == [[], []]

    @pytest.mark.parametrize("partitions", [0, -1])
    def test_non_positive_partitions(self, partitions: int) -> None:
        assert partition_by_count(["a", "b"], partitions) == []


class TestPartitionBySize:
    """Test partition_by_size function."""

    def test_greedy_assignment(self) -> None:
        """Largest first, each to the lightest bucket, lowest index on ties."""
        records = _records([100, 200, 300, 400, 500])

        buckets = partition_by_size(records, 2)

        assert [[r.size for r in bucket] for bucket in buckets] == [
            [500, 200, 100],
            [400, 300],
        ]
        assert bucket_totals(buckets) == [800, 700]

    def test_stable_on_equal_sizes(self) -> None:
        """Equal sizes keep their original relative order."""
        records = _records([5, 5, 5, 5])

        buckets = partition_by_size(records, 2)

        assert buckets == [[records[0], records[2]], [records[1], records[3]]]

    def test_does_not_mutate_input(self) -> None:
        records = _records([1, 3, 2])
        original = list(records)

        partition_by_size(records, 2)

        assert records == original

    def test_missing_size_counts_as_zero(self) -> None:
        records = [FileRecord(Path("/a")), FileRecord(Path("/b"), 10)]

        buckets = partition_by_size(records, 2)

        assert bucket_totals(buckets) == [10, 0]

    @pytest.mark.parametrize("partitions", [1, 2, 3, 5])
    def test_balance_bound(self, partitions: int) -> None:
        """Totals are preserved and differ by at most the largest record."""
        rng = random.Random(partitions)
        sizes = [rng.randint(1, 10_000) for _ in range(60)]

        buckets = partition_by_size(_records(sizes), partitions)
        totals = bucket_totals(buckets)

        assert len(buckets) == partitions
        assert sum(totals) == sum(sizes)
        assert sum(len(bucket) for bucket in buckets) == len(sizes)
        assert max(totals) - min(totals) <= max(sizes)

    @pytest.mark.parametrize("partitions", [0, -3])
    def test_non_positive_partitions(self, partitions: int) -> None:
        assert partition_by_size(_records([1, 2]), partitions) == []


class TestDistributeCategories:
    """Test distribute_categories function."""

    def test_round_robin_in_label_order(self) -> None:
        category_map = {
            "text": [Path("/t1"), Path("/t2")],
            "audio": [Path("/a1")],
            "image": [Path("/i1")],
        }

        slots = distribute_categories(category_map, 2)

        assert slots == [
            {"audio": [Path("/a1")], "text": [Path("/t1"), Path("/t2")]},
            {"image": [Path("/i1")]},
        ]

    def test_category_never_split(self) -> None:
        """A dominant category lands entirely in one slot."""
        category_map = {"image": [Path(f"/i{index}") for index in range(50)], "text": [Path("/t")]}

        slots = distribute_categories(category_map, 3)

        assert slots[0] == {"image": category_map["image"]}
        assert slots[1] == {"text": [Path("/t")]}
        assert slots[2] == {}

    def test_non_positive_partitions(self) -> None:
        assert distribute_categories({"text": [Path("/t")]}, 0) == []
