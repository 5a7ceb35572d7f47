# deepset/core/deep_set.py
"""
DeepSet: a set whose membership is decided by deep equality.

Values are grouped into buckets by a structural hash; a lookup only scans the
one bucket its hash points to, using the equality provider to tell colliding
values apart. Both providers are injected and default to
``StructuralHasher`` / ``DeepEquality``.

Usage notes
-----------
- Iteration order is the order in which distinct hashes first appeared, then
  insertion order inside each bucket. With colliding hashes this is not plain
  insertion order: after adding A, B and then C (colliding with A), the set
  iterates as A, C, B.
- Traversals are live views, not snapshots. Mutating the set while one of
  its iterators (or a higher-order callback) is running is undefined; in
  CPython opening or dropping a bucket mid-traversal raises ``RuntimeError``.
- Not safe for concurrent mutation from several threads. ``clone()`` is the
  way to get an independent copy.
- Values must not be mutated in ways that change their hash while stored.
"""
from __future__ import annotations

import logging
from typing import Any, Generic, Iterable, Iterator, Optional, Sequence, Tuple, TypeVar

from typing_extensions import Self

from ..config import DeepSetConfig
from ..providers import EqualityProvider, HashProvider, default_providers
from .algebra import SetAlgebraMixin
from .bucket_index import BucketIndex, BucketStats
from .traversal import TraversalMixin

T = TypeVar("T")

logger = logging.getLogger(__name__)


class DeepSet(SetAlgebraMixin[T], TraversalMixin[T], Generic[T]):
    """Set of values deduplicated by structural equality."""

    def __init__(
        self,
        values: Iterable[T] = (),
        *,
        hasher: Optional[HashProvider[T]] = None,
        equals: Optional[EqualityProvider[T]] = None,
        config: Optional[DeepSetConfig] = None,
    ) -> None:
        """
        Create a DeepSet, optionally seeded with ``values``.

        Args:
            values: Initial values; deep-equal duplicates collapse to one
            hasher: Hash provider, ``equal(a, b)`` must imply equal hashes
            equals: Equality provider, an equivalence relation
            config: Used to build whichever provider was not given
        """
        if hasher is None or equals is None:
            default_hasher, default_equals = default_providers(config)
            hasher = hasher if hasher is not None else default_hasher
            equals = equals if equals is not None else default_equals
        self._hasher: HashProvider[T] = hasher
        self._equals: EqualityProvider[T] = equals
        self._index: BucketIndex[T] = BucketIndex()
        self.update(values)

    @classmethod
    def of(cls, *values: T, **kwargs: Any) -> "DeepSet[T]":
        """Build a set from positional values, e.g. ``DeepSet.of(1, 2, 3)``."""
        return cls(values, **kwargs)

    @property
    def hasher(self) -> HashProvider[T]:
        return self._hasher

    @property
    def equals(self) -> EqualityProvider[T]:
        return self._equals

    def _spawn(self) -> "DeepSet[T]":
        """Empty set sharing this set's providers."""
        return type(self)(hasher=self._hasher, equals=self._equals)

    def clone(self) -> "DeepSet[T]":
        """
        Independent copy: new buckets and a ``copy.deepcopy`` of every value.

        Mutating the clone, or any value inside it, never affects this set.
        """
        result = self._spawn()
        result._index = self._index.copy(deep=True, rehash=self._hasher)
        logger.debug("cloned DeepSet with %d values", len(result),
                     extra={"operation": "clone", "size": len(result)})
        return result

    __copy__ = clone

    def __deepcopy__(self, memo) -> "DeepSet[T]":
        return self.clone()

    # ----------------------------
    # Membership
    # ----------------------------
    def _position(self, bucket: Sequence[T], value: T) -> int:
        for i, candidate in enumerate(bucket):
            if self._equals(candidate, value):
                return i
        return -1

    def _add(self, value: T) -> None:
        hash_key = self._hasher(value)
        bucket = self._index.get_or_create_bucket(hash_key)
        if self._position(bucket, value) == -1:
            if bucket and logger.isEnabledFor(logging.DEBUG):
                logger.debug("hash collision on %#x (bucket size %d)", hash_key, len(bucket) + 1,
                             extra={"operation": "add", "hash_key": hash_key, "bucket_size": len(bucket) + 1})
            bucket.append(value)

    def add(self, *values: T) -> Self:
        """
        Add one or more values, in order.

        Values already present (by deep equality) are skipped.

        Returns:
            This set, for chaining
        """
        for value in values:
            self._add(value)
        return self

    def update(self, values: Iterable[T]) -> Self:
        """Add every value of an iterable, in order."""
        for value in values:
            self._add(value)
        return self

    def has(self, value: T) -> bool:
        """True if a deep-equal value is stored. Only the matching bucket is scanned."""
        bucket = self._index.bucket_for(self._hasher(value))
        return bucket is not None and self._position(bucket, value) != -1

    def delete(self, value: T) -> bool:
        """
        Remove the stored value deep-equal to ``value``.

        Returns:
            True if something was removed, False (and no change) otherwise
        """
        hash_key = self._hasher(value)
        bucket = self._index.bucket_for(hash_key)
        if bucket is None:
            return False
        position = self._position(bucket, value)
        if position == -1:
            return False
        del self._index.get_or_create_bucket(hash_key)[position]
        self._index.remove_bucket_if_empty(hash_key)
        return True

    def discard(self, value: T) -> None:
        """Like ``delete`` but returns nothing, as ``set.discard`` does."""
        self.delete(value)

    def clear(self) -> None:
        self._index.clear()
        logger.debug("cleared DeepSet", extra={"operation": "clear", "size": 0})

    @property
    def size(self) -> int:
        return self._index.size

    def __len__(self) -> int:
        return self._index.size

    def __contains__(self, value: object) -> bool:
        return self.has(value)

    # ----------------------------
    # Iteration
    # ----------------------------
    def values(self) -> Iterator[T]:
        """
        Lazily yield every value: buckets in hash-introduction order, then
        insertion order within each bucket.

        Each call starts a fresh traversal of the current contents.
        """
        for bucket in self._index.buckets():
            yield from bucket

    def keys(self) -> Iterator[T]:
        """Same sequence as ``values()``; a set's values are its keys."""
        return self.values()

    def entries(self) -> Iterator[Tuple[T, T]]:
        """Yield ``(value, value)`` pairs, mirroring associative containers."""
        for value in self.values():
            yield value, value

    def __iter__(self) -> Iterator[T]:
        return self.values()

    # ----------------------------
    # Introspection / utilities
    # ----------------------------
    def stats(self) -> BucketStats:
        """Bucket occupancy, useful for judging the hash provider's collision rate."""
        return self._index.stats()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.values())!r})"

    def __rich_repr__(self):
        yield list(self.values())
