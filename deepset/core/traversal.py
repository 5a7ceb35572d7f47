# deepset/core/traversal.py
"""
Higher-order traversal helpers for DeepSet.

Callbacks are called positionally with ``(value, index, deep_set)`` where
``index`` is the zero-based traversal position; ``reduce`` passes the
accumulator first. None of these mutate the set, and a callback that mutates
it while the traversal runs gets undefined results.

There is no way to stop ``for_each`` early. Use ``some``, ``every`` or
``find`` when the walk should end at the first match.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Generic, Iterable, List, Optional, TypeVar

if TYPE_CHECKING:
    from .deep_set import DeepSet

T = TypeVar("T")
U = TypeVar("U")

PredicateFn = Callable[[T, int, "DeepSet[T]"], bool]
EachFn = Callable[[T, int, "DeepSet[T]"], Any]
MapFn = Callable[[T, int, "DeepSet[T]"], U]
FlatMapFn = Callable[[T, int, "DeepSet[T]"], Iterable[U]]
ReduceFn = Callable[[U, T, int, "DeepSet[T]"], U]


class TraversalMixin(Generic[T]):
    """for_each / map / filter / reduce / some / every / find / flat_map."""

    def for_each(self, callback: EachFn) -> None:
        for index, value in enumerate(self.values()):
            callback(value, index, self)

    def map(self, callback: MapFn) -> List[U]:
        """List of ``callback`` results, one per value, in traversal order."""
        return [callback(value, index, self) for index, value in enumerate(self.values())]

    def filter(self, predicate: PredicateFn) -> List[T]:
        """Values satisfying ``predicate``, as a list in traversal order."""
        return [value for index, value in enumerate(self.values()) if predicate(value, index, self)]

    def reduce(self, callback: ReduceFn, initial: U) -> U:
        """Left fold over the values starting from ``initial``."""
        accumulator = initial
        for index, value in enumerate(self.values()):
            accumulator = callback(accumulator, value, index, self)
        return accumulator

    def some(self, predicate: PredicateFn) -> bool:
        for index, value in enumerate(self.values()):
            if predicate(value, index, self):
                return True
        return False

    def every(self, predicate: PredicateFn) -> bool:
        for index, value in enumerate(self.values()):
            if not predicate(value, index, self):
                return False
        return True

    def find(self, predicate: PredicateFn, default: Optional[T] = None) -> Optional[T]:
        """
        First value satisfying ``predicate``.

        Args:
            predicate: Test called as ``predicate(value, index, deep_set)``
            default: Returned when nothing matches; pass a sentinel when None
                can itself be a member

        Returns:
            The matching value or ``default``
        """
        for index, value in enumerate(self.values()):
            if predicate(value, index, self):
                return value
        return default

    def flat_map(self, callback: FlatMapFn) -> List[U]:
        """Concatenate the iterables returned by ``callback``, one level deep."""
        result: List[U] = []
        for index, value in enumerate(self.values()):
            result.extend(callback(value, index, self))
        return result
