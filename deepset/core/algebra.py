# deepset/core/algebra.py
"""
Set algebra for DeepSet, written only against membership and iteration.

Every operation returns a new set built with the receiver's providers and
leaves both operands untouched.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, Iterable, List, TypeVar, Union

if TYPE_CHECKING:
    from .deep_set import DeepSet

T = TypeVar("T")

logger = logging.getLogger(__name__)


class SetAlgebraMixin(Generic[T]):
    """Union, intersection, difference and the subset family."""

    def intersection(self, other: "DeepSet[T]") -> "DeepSet[T]":
        """Values of this set that ``other`` also has, in this set's order."""
        result = self._spawn()
        for value in self.values():
            if other.has(value):
                result.add(value)
        return result

    def union(self, *others: Union["DeepSet[T]", Iterable["DeepSet[T]"]]) -> "DeepSet[T]":
        """
        Clone this set, then add every value of each other set in turn.

        Each argument may be a DeepSet or a list/tuple of DeepSets, so
        ``a.union(b, c)`` and ``a.union([b, c])`` are the same.

        Returns:
            New set in this set's order followed by newly introduced values
        """
        sets = _flatten_sets(others)
        result = self.clone()
        for other in sets:
            for value in other.values():
                result.add(value)
        logger.debug("union of %d set(s) -> %d values", len(sets) + 1, len(result),
                     extra={"operation": "union", "operands": len(sets) + 1, "size": len(result)})
        return result

    def difference(self, other: "DeepSet[T]") -> "DeepSet[T]":
        """Values of this set that ``other`` lacks, in this set's order."""
        result = self._spawn()
        for value in self.values():
            if not other.has(value):
                result.add(value)
        return result

    def symmetric_difference(self, other: "DeepSet[T]") -> "DeepSet[T]":
        """
        Values found in exactly one of the two sets.

        This set's exclusive values come first, then ``other``'s, built in one
        pass each without going through ``union``.
        """
        result = self._spawn()
        for value in self.values():
            if not other.has(value):
                result.add(value)
        for value in other.values():
            if not self.has(value):
                result.add(value)
        return result

    def is_subset_of(self, other: "DeepSet[T]") -> bool:
        """True if every value of this set is in ``other`` (always for an empty set)."""
        return all(other.has(value) for value in self.values())

    def is_superset_of(self, other: "DeepSet[T]") -> bool:
        return all(self.has(value) for value in other.values())

    def is_disjoint_from(self, other: "DeepSet[T]") -> bool:
        """True if no value is shared; stops at the first common value."""
        # scan the smaller side against the larger one's hash index
        small, large = (self, other) if len(self) <= len(other) else (other, self)
        return not any(large.has(value) for value in small.values())

    # ----------------------------
    # Operators
    # ----------------------------
    def __or__(self, other):
        if not isinstance(other, SetAlgebraMixin):
            return NotImplemented
        return self.union(other)

    def __and__(self, other):
        if not isinstance(other, SetAlgebraMixin):
            return NotImplemented
        return self.intersection(other)

    def __sub__(self, other):
        if not isinstance(other, SetAlgebraMixin):
            return NotImplemented
        return self.difference(other)

    def __xor__(self, other):
        if not isinstance(other, SetAlgebraMixin):
            return NotImplemented
        return self.symmetric_difference(other)

    def __le__(self, other):
        if not isinstance(other, SetAlgebraMixin):
            return NotImplemented
        return self.is_subset_of(other)

    def __ge__(self, other):
        if not isinstance(other, SetAlgebraMixin):
            return NotImplemented
        return self.is_superset_of(other)

    def __eq__(self, other):
        if not isinstance(other, SetAlgebraMixin):
            return NotImplemented
        return len(self) == len(other) and self.is_subset_of(other)

    __hash__ = None  # mutable container


def _flatten_sets(others) -> List["DeepSet"]:
    sets: List["DeepSet"] = []
    for other in others:
        if isinstance(other, SetAlgebraMixin):
            sets.append(other)
        else:
            sets.extend(other)
    return sets
