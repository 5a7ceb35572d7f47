# deepset/providers/hashing.py
"""
Structural hashing for arbitrarily nested values.

``StructuralHasher`` walks a value and feeds a canonical, type-tagged byte
encoding into BLAKE2b. Structurally identical values built independently hash
the same; ordered containers are hashed in order and unordered ones (dicts,
sets) through their sorted member digests. Cyclic values are not supported.
"""
from __future__ import annotations

import hashlib
import math
from typing import Any, List

import numpy as np

from .kinds import Kind, classify, record_fields, type_tag

MAX_DIGEST_SIZE = 64  # blake2b limit, bytes
MAX_SALT_SIZE = 16  # blake2b limit, bytes


def _float_token(value: float) -> str:
    # 0.0 == -0.0 and NaN is treated as equal to itself
    if math.isnan(value):
        return "nan"
    if value == 0:
        return "0.0"
    return repr(float(value))


def _number_token(value: Any) -> str:
    """Token for bool/int/float when numeric types are not distinguished."""
    if isinstance(value, float):
        if math.isnan(value):
            return "nan"
        if math.isinf(value):
            return repr(value)
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(int(value))


def _canonical_array(arr: np.ndarray) -> np.ndarray:
    arr = np.ascontiguousarray(arr)
    if arr.dtype.kind in "fc":
        # fold -0.0 into 0.0 and every NaN payload into one
        arr = arr + 0
        arr = np.where(np.isnan(arr), np.nan, arr).astype(arr.dtype)
    return arr


class StructuralHasher:
    """
    Hash provider computing an integer fingerprint from a value's structure.

    Notes
    -----
    - ``digest_size`` is in bytes; the default of 8 yields a 64-bit hash.
    - ``salt`` changes every hash, so two hashers with different salts must not
      be mixed within one container.
    - With ``strict_numeric`` off, ``True``, ``1`` and ``1.0`` hash alike, which
      matches ``deep_equal(..., strict_numeric=False)``.
    """
    __slots__ = ("_digest_size", "_salt", "_strict_numeric")

    def __init__(self, digest_size: int = 8, salt: bytes = b"",
                 strict_numeric: bool = True) -> None:
        if not 1 <= digest_size <= MAX_DIGEST_SIZE:
            raise ValueError(f"digest_size must be between 1 and {MAX_DIGEST_SIZE}, got {digest_size}")
        if len(salt) > MAX_SALT_SIZE:
            raise ValueError(f"salt must be at most {MAX_SALT_SIZE} bytes, got {len(salt)}")
        self._digest_size = digest_size
        self._salt = salt
        self._strict_numeric = strict_numeric

    @property
    def digest_size(self) -> int:
        return self._digest_size

    @property
    def strict_numeric(self) -> bool:
        return self._strict_numeric

    def __call__(self, value: Any) -> int:
        return int.from_bytes(self.digest(value), "little")

    def __repr__(self) -> str:
        return (f"StructuralHasher(digest_size={self._digest_size}, "
                f"strict_numeric={self._strict_numeric})")

    def digest(self, value: Any) -> bytes:
        """Raw BLAKE2b digest of ``value``'s canonical encoding."""
        h = self._new()
        self._feed(h, value)
        return h.digest()

    # ----------------------------
    # Encoding
    # ----------------------------
    def _new(self):
        return hashlib.blake2b(digest_size=self._digest_size, salt=self._salt)

    @staticmethod
    def _write(h, data: bytes) -> None:
        # length prefix keeps adjacent tokens from running together
        h.update(len(data).to_bytes(8, "little"))
        h.update(data)

    def _feed(self, h, value: Any) -> None:
        kind = classify(value, self._strict_numeric)
        self._write(h, kind.encode())
        if kind != Kind.NUMBER:
            self._write(h, type_tag(value).encode())

        if kind == Kind.NONE:
            return
        if kind in (Kind.BOOL, Kind.INT):
            self._write(h, str(int(value)).encode())
        elif kind == Kind.FLOAT:
            self._write(h, _float_token(value).encode())
        elif kind == Kind.NUMBER:
            self._write(h, _number_token(value).encode())
        elif kind == Kind.COMPLEX:
            self._write(h, _float_token(value.real).encode())
            self._write(h, _float_token(value.imag).encode())
        elif kind == Kind.STR:
            self._write(h, value.encode("utf-8", errors="surrogatepass"))
        elif kind == Kind.BYTES:
            self._write(h, bytes(value))
        elif kind == Kind.ENUM:
            self._write(h, value.name.encode())
        elif kind == Kind.NDARRAY:
            self._feed_array(h, value)
        elif kind == Kind.NPSCALAR:
            self._write(h, value.dtype.str.encode())
            self._feed(h, value.item())
        elif kind == Kind.MAPPING:
            self._feed_unordered(h, [self._pair_digest(k, v) for k, v in value.items()])
        elif kind == Kind.SET:
            self._feed_unordered(h, [self.digest(item) for item in value])
        elif kind == Kind.SEQUENCE:
            self._write(h, len(value).to_bytes(8, "little"))
            for item in value:
                self._feed(h, item)
        elif kind in (Kind.DATACLASS, Kind.OBJECT):
            fields = record_fields(value)
            self._feed_unordered(h, [self._pair_digest(k, v) for k, v in fields.items()])
        else:
            # Anything else must bring its own __hash__; TypeError propagates
            self._write(h, hash(value).to_bytes(8, "little", signed=True))

    def _feed_array(self, h, arr: np.ndarray) -> None:
        self._write(h, arr.dtype.str.encode())
        self._write(h, repr(arr.shape).encode())
        if arr.dtype.kind == "O":
            self._feed(h, arr.tolist())
        else:
            self._write(h, _canonical_array(arr).tobytes())

    def _pair_digest(self, key: Any, value: Any) -> bytes:
        h = self._new()
        self._feed(h, key)
        self._feed(h, value)
        return h.digest()

    def _feed_unordered(self, h, digests: List[bytes]) -> None:
        self._write(h, len(digests).to_bytes(8, "little"))
        for d in sorted(digests):
            self._write(h, d)


_DEFAULT_HASHER = StructuralHasher()


def structural_hash(value: Any) -> int:
    """Hash ``value`` with the default 64-bit structural hasher."""
    return _DEFAULT_HASHER(value)
