# deepset/providers/kinds.py
"""
Value classification shared by the default hash and equality providers.

Both providers must dispatch identically, otherwise two values could compare
deep-equal while hashing differently. Every supported value is mapped to one
of the ``Kind`` constants below and both providers switch on that.
"""
from __future__ import annotations

import dataclasses
import functools
import types
from collections.abc import Mapping, Sequence, Set as AbstractSet
from enum import Enum
from typing import Any, Tuple

import numpy as np


class Kind:
    NONE = "none"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    NUMBER = "number"  # bool/int/float when strict_numeric is off
    COMPLEX = "complex"
    STR = "str"
    BYTES = "bytes"
    ENUM = "enum"
    NDARRAY = "ndarray"
    NPSCALAR = "npscalar"
    MAPPING = "mapping"
    SET = "set"
    SEQUENCE = "sequence"
    DATACLASS = "dataclass"
    OBJECT = "object"
    HASHABLE = "hashable"


# Callables and namespaces carry a __dict__ but are not plain data records.
_NON_RECORD_TYPES = (
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.ModuleType,
)


def classify(value: Any, strict_numeric: bool = True) -> str:
    """Return the Kind used to hash and compare ``value``."""
    if value is None:
        return Kind.NONE
    # numpy scalars subclass float/int in places, so they are checked first
    if isinstance(value, np.ndarray):
        return Kind.NDARRAY
    if isinstance(value, np.generic):
        return Kind.NPSCALAR
    if isinstance(value, Enum):
        return Kind.ENUM
    if isinstance(value, bool):
        return Kind.BOOL if strict_numeric else Kind.NUMBER
    if isinstance(value, int):
        return Kind.INT if strict_numeric else Kind.NUMBER
    if isinstance(value, float):
        return Kind.FLOAT if strict_numeric else Kind.NUMBER
    if isinstance(value, complex):
        return Kind.COMPLEX
    if isinstance(value, str):
        return Kind.STR
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Kind.BYTES
    if isinstance(value, Mapping):
        return Kind.MAPPING
    if isinstance(value, AbstractSet):
        return Kind.SET
    if isinstance(value, Sequence):
        return Kind.SEQUENCE
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return Kind.DATACLASS
    if _is_record(value):
        return Kind.OBJECT
    return Kind.HASHABLE


def type_tag(value: Any) -> str:
    """Fully qualified type name, used to keep e.g. list and tuple apart."""
    cls = type(value)
    return f"{cls.__module__}.{cls.__qualname__}"


@functools.lru_cache(maxsize=None)
def _slot_names(cls: type) -> Tuple[str, ...]:
    """Instance attribute slots declared along the MRO, with private names mangled."""
    names = []
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in ("__dict__", "__weakref__"):
                continue
            if slot.startswith("__") and not slot.endswith("__"):
                slot = f"_{klass.__name__.lstrip('_')}{slot}"
            if slot not in names:
                names.append(slot)
    return tuple(names)


def _is_record(value: Any) -> bool:
    if isinstance(value, _NON_RECORD_TYPES) or type(value).__eq__ is not object.__eq__:
        return False
    return hasattr(value, "__dict__") or bool(_slot_names(type(value)))


def record_fields(value: Any) -> dict:
    """Field mapping for DATACLASS and OBJECT kinds. Unset slots are left out."""
    if dataclasses.is_dataclass(value):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    fields = {}
    for name in _slot_names(type(value)):
        if hasattr(value, name):
            fields[name] = getattr(value, name)
    if hasattr(value, "__dict__"):
        fields.update(vars(value))
    return fields
