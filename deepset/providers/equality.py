# deepset/providers/equality.py
"""
Deep (structural) equality, the companion of ``StructuralHasher``.

Two values are deep-equal when they have the same type and recursively equal
contents. Dict keys and set members are matched structurally as well, so
``{1: "a"}`` and ``{True: "a"}`` differ under strict numeric comparison even
though Python's own ``==`` says otherwise.
"""
from __future__ import annotations

import math
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Tuple

import numpy as np

from .hashing import StructuralHasher
from .kinds import Kind, classify, record_fields

# Used only to pair up dict keys / set members; salt is irrelevant here.
_KEY_HASHERS = {
    True: StructuralHasher(strict_numeric=True),
    False: StructuralHasher(strict_numeric=False),
}

_EXACT_KEY_TYPES = (str, bytes)


def _float_equal(a: float, b: float) -> bool:
    return a == b or (math.isnan(a) and math.isnan(b))


def _arrays_equal(a: np.ndarray, b: np.ndarray, strict_numeric: bool) -> bool:
    if a.dtype != b.dtype or a.shape != b.shape:
        return False
    if a.dtype.kind == "O":
        return deep_equal(a.tolist(), b.tolist(), strict_numeric)
    if a.dtype.kind in "fc":
        return bool(np.array_equal(a, b, equal_nan=True))
    return bool(np.array_equal(a, b))


def _index(items: Iterable[Tuple[Any, Any]], strict_numeric: bool) -> Dict[int, List[Tuple[Any, Any]]]:
    hasher = _KEY_HASHERS[strict_numeric]
    index: Dict[int, List[Tuple[Any, Any]]] = defaultdict(list)
    for key, value in items:
        index[hasher(key)].append((key, value))
    return index


def _all_exact_keys(*collections: Iterable[Any]) -> bool:
    return all(type(k) in _EXACT_KEY_TYPES for c in collections for k in c)


def _take_match(candidates: List[Tuple[Any, Any]], matches) -> bool:
    """Remove the first candidate accepted by ``matches``; each one pairs up only once."""
    for i, candidate in enumerate(candidates):
        if matches(candidate):
            del candidates[i]
            return True
    return False


def _mappings_equal(a, b, strict_numeric: bool) -> bool:
    if len(a) != len(b):
        return False
    if _all_exact_keys(a, b):
        # str/bytes keys: native lookup is already structural
        if a.keys() != b.keys():
            return False
        return all(deep_equal(a[k], b[k], strict_numeric) for k in a)

    # Keys hashing by identity can be structurally equal within one mapping
    index = _index(b.items(), strict_numeric)
    hasher = _KEY_HASHERS[strict_numeric]
    for key, value in a.items():
        candidates = index.get(hasher(key), [])
        if not _take_match(
            candidates,
            lambda pair: deep_equal(key, pair[0], strict_numeric) and deep_equal(value, pair[1], strict_numeric),
        ):
            return False
    return True


def _sets_equal(a, b, strict_numeric: bool) -> bool:
    if len(a) != len(b):
        return False
    if _all_exact_keys(a, b):
        return a == b

    index = _index(((item, None) for item in b), strict_numeric)
    hasher = _KEY_HASHERS[strict_numeric]
    for item in a:
        candidates = index.get(hasher(item), [])
        if not _take_match(candidates, lambda pair: deep_equal(item, pair[0], strict_numeric)):
            return False
    return True


def deep_equal(a: Any, b: Any, strict_numeric: bool = True) -> bool:
    """
    Structural equality over nested values.

    Args:
        a: First value
        b: Second value
        strict_numeric: When False, bool/int/float compare by numeric value

    Returns:
        True if ``a`` and ``b`` are deep-equal
    """
    if a is b:
        return True

    kind = classify(a, strict_numeric)
    if classify(b, strict_numeric) != kind:
        return False
    if kind == Kind.NUMBER:
        return _float_equal(a, b) if isinstance(a, float) or isinstance(b, float) else a == b
    if type(a) is not type(b):
        return False

    if kind == Kind.FLOAT:
        return _float_equal(a, b)
    if kind == Kind.COMPLEX:
        return _float_equal(a.real, b.real) and _float_equal(a.imag, b.imag)
    if kind == Kind.BYTES:
        return bytes(a) == bytes(b)
    if kind == Kind.NDARRAY:
        return _arrays_equal(a, b, strict_numeric)
    if kind == Kind.NPSCALAR:
        return a.dtype == b.dtype and deep_equal(a.item(), b.item(), strict_numeric)
    if kind == Kind.MAPPING:
        return _mappings_equal(a, b, strict_numeric)
    if kind == Kind.SET:
        return _sets_equal(a, b, strict_numeric)
    if kind == Kind.SEQUENCE:
        return len(a) == len(b) and all(
            deep_equal(x, y, strict_numeric) for x, y in zip(a, b)
        )
    if kind in (Kind.DATACLASS, Kind.OBJECT):
        return _mappings_equal(record_fields(a), record_fields(b), strict_numeric)
    # NONE, BOOL, INT, STR, ENUM and anything bringing its own __eq__
    return bool(a == b)


class DeepEquality:
    """Equality provider bound to a numeric strictness setting."""

    __slots__ = ("strict_numeric",)

    def __init__(self, strict_numeric: bool = True) -> None:
        self.strict_numeric = strict_numeric

    def __call__(self, a: Any, b: Any) -> bool:
        return deep_equal(a, b, self.strict_numeric)

    def __repr__(self) -> str:
        return f"DeepEquality(strict_numeric={self.strict_numeric})"
