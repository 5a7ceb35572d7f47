"""Default hash and equality providers for DeepSet."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional, Tuple, TypeVar

from .equality import DeepEquality, deep_equal
from .hashing import StructuralHasher, structural_hash

if TYPE_CHECKING:
    from ..config import DeepSetConfig

T = TypeVar("T")
HashProvider = Callable[[T], int]
EqualityProvider = Callable[[T, T], bool]


def default_providers(config: Optional["DeepSetConfig"] = None) -> Tuple[HashProvider[Any], EqualityProvider[Any]]:
    """
    Build the conventional (hasher, equals) pairing.

    Args:
        config: Optional configuration; defaults give a 64-bit unsalted hasher
            with strict numeric comparison

    Returns:
        A consistent hash provider and equality provider
    """
    if config is None:
        return StructuralHasher(), DeepEquality()
    hasher = StructuralHasher(
        digest_size=config.digest_size,
        salt=config.salt.encode("utf-8"),
        strict_numeric=config.strict_numeric,
    )
    return hasher, DeepEquality(strict_numeric=config.strict_numeric)


__all__ = [
    "DeepEquality",
    "EqualityProvider",
    "HashProvider",
    "StructuralHasher",
    "deep_equal",
    "default_providers",
    "structural_hash",
]
