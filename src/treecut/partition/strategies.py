"""Bucket assignment strategies."""

from __future__ import annotations

from typing import List, Sequence, TypeVar

from treecut.models import CategoryMap, FileRecord

T = TypeVar("T")


def partition_by_count(paths: Sequence[T], partitions: int) -> List[List[T]]:
    """Deal ``paths`` round-robin: item ``i`` lands in bucket ``i % partitions``.

    Returns an empty list when ``partitions`` is not positive.
    """
    if partitions <= 0:
        return []

    buckets: List[List[T]] = [[] for _ in range(partitions)]
    for index, path in enumerate(paths):
        buckets[index % partitions].append(path)
    return buckets


def _min_index(totals: Sequence[int]) -> int:
    min_index = 0
    for index in range(1, len(totals)):
        if totals[index] < totals[min_index]:
            min_index = index
    return min_index


def partition_by_size(records: Sequence[FileRecord], partitions: int) -> List[List[FileRecord]]:
    """Balance total bytes per bucket with longest-processing-time-first placement.

    Records are taken largest first (stable on ties) and each goes to the bucket
    with the smallest running total, lowest index on ties. Records without a
    size count as zero bytes. Returns an empty list when ``partitions`` is not
    positive.
    """
    if partitions <= 0:
        return []

    ordered = sorted(records, key=lambda record: record.size or 0, reverse=True)
    buckets: List[List[FileRecord]] = [[] for _ in range(partitions)]
    totals = [0] * partitions

    for record in ordered:
        target = _min_index(totals)
        buckets[target].append(record)
        totals[target] += record.size or 0
    return buckets


def bucket_totals(buckets: Sequence[Sequence[FileRecord]]) -> List[int]:
    return [sum(record.size or 0 for record in bucket) for bucket in buckets]


def distribute_categories(category_map: CategoryMap, partitions: int) -> List[CategoryMap]:
    """Assign whole categories to output slots round-robin in label order.

    A category is never split, so one dominant category makes the slot that
    receives it much larger than the others.
    """
    if partitions <= 0:
        return []

    slots: List[CategoryMap] = [{} for _ in range(partitions)]
    for index, category in enumerate(sorted(category_map)):
        slots[index % partitions][category] = list(category_map[category])
    return slots
