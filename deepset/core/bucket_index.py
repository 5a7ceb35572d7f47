# deepset/core/bucket_index.py
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, Iterator, List, Optional, Sequence, TypeVar

import numpy as np

T = TypeVar("T")


@dataclass
class BucketStats:
    """Occupancy summary of a BucketIndex."""
    size: int
    bucket_count: int
    max_bucket_size: int
    collisions: int  # values sharing a bucket with an earlier value
    # histogram[k] = number of buckets holding exactly k values
    histogram: List[int] = field(default_factory=list)

    @property
    def load_factor(self) -> float:
        """Average bucket length; 1.0 means no collisions at all."""
        if self.bucket_count == 0:
            return 0.0
        return self.size / self.bucket_count

    def to_dict(self) -> Dict[str, object]:
        return {
            "size": self.size,
            "bucket_count": self.bucket_count,
            "max_bucket_size": self.max_bucket_size,
            "collisions": self.collisions,
            "load_factor": self.load_factor,
            "histogram": list(self.histogram),
        }


class BucketIndex(Generic[T]):
    """Hash key -> ordered collision list.

    Notes
    -----
    - Buckets are kept in the order their hash key was first registered; that
      order, then the order inside each bucket, is the iteration order.
    - Empty buckets must not stay registered. Whoever removes a value calls
      ``remove_bucket_if_empty`` right after.
    - ``size`` is recomputed on each call, never cached.
    """

    __slots__ = ("_buckets",)

    def __init__(self) -> None:
        self._buckets: Dict[int, List[T]] = {}

    # ----------------------------
    # Bucket access
    # ----------------------------
    def get_or_create_bucket(self, hash_key: int) -> List[T]:
        """Return the bucket for ``hash_key``, registering an empty one if needed."""
        bucket = self._buckets.get(hash_key)
        if bucket is None:
            bucket = self._buckets[hash_key] = []
        return bucket

    def bucket_for(self, hash_key: int) -> Optional[Sequence[T]]:
        """Return the bucket for ``hash_key`` or None. Never registers anything."""
        return self._buckets.get(hash_key)

    def remove_bucket_if_empty(self, hash_key: int) -> bool:
        bucket = self._buckets.get(hash_key)
        if bucket is not None and not bucket:
            del self._buckets[hash_key]
            return True
        return False

    def clear(self) -> None:
        self._buckets.clear()

    # ----------------------------
    # Traversal
    # ----------------------------
    def buckets(self) -> Iterator[Sequence[T]]:
        """Yield buckets in hash-introduction order."""
        return iter(self._buckets.values())

    def hash_keys(self) -> Iterator[int]:
        return iter(self._buckets.keys())

    # ----------------------------
    # Introspection / utilities
    # ----------------------------
    @property
    def size(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())

    @property
    def bucket_count(self) -> int:
        return len(self._buckets)

    def copy(self, deep: bool = True, rehash: Optional[Callable[[T], int]] = None) -> "BucketIndex[T]":
        """Copy the index with fresh bucket lists.

        With ``deep`` every stored value is ``copy.deepcopy``-ed as well, so the
        copy shares no mutable state with this index. With ``rehash`` each copied
        value is filed under ``rehash(copied_value)`` rather than its old key,
        which keeps values whose hash depends on object identity reachable.
        """
        clone: BucketIndex[T] = BucketIndex()
        memo: Dict[int, object] = {}
        for hash_key, bucket in self._buckets.items():
            for value in bucket:
                copied = copy.deepcopy(value, memo) if deep else value
                key = rehash(copied) if rehash is not None else hash_key
                clone._buckets.setdefault(key, []).append(copied)
        return clone

    def stats(self) -> BucketStats:
        lengths = np.fromiter(
            (len(bucket) for bucket in self._buckets.values()),
            dtype=np.int64,
            count=len(self._buckets),
        )
        if lengths.size == 0:
            return BucketStats(size=0, bucket_count=0, max_bucket_size=0, collisions=0)
        size = int(lengths.sum())
        return BucketStats(
            size=size,
            bucket_count=int(lengths.size),
            max_bucket_size=int(lengths.max()),
            collisions=size - int(lengths.size),
            histogram=np.bincount(lengths).tolist(),
        )
