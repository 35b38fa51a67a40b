"""Data manipulation utility functions."""

import math
from typing import List, Any, Iterator


def batched(xs: List[Any], n: int) -> Iterator[List[Any]]:
    """Yield successive n-sized chunks from a list.

    Args:
        xs: List to batch
        n: Batch size

    Yields:
        Batches of size n (last batch may be smaller)
    """
    for i in range(0, len(xs), n):
        yield xs[i:i+n]


def split_into_shards(xs: List[Any], workers: int) -> List[List[Any]]:
    """Split a list into at most `workers` contiguous shards.

    Shards hold ceil(len(xs) / workers) items each; the last one may be shorter.

    Args:
        xs: List to split
        workers: Number of concurrent workers

    Returns:
        List of shards, empty when xs is empty
    """
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    if not xs:
        return []
    chunk_size = math.ceil(len(xs) / workers)
    return list(batched(xs, chunk_size))
