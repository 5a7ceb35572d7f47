"""deepset - a set container deduplicating values by deep equality."""

__version__ = "0.1.0"

from .config import DeepSetConfig
from .core.bucket_index import BucketStats
from .core.deep_set import DeepSet
from .errors import ConfigurationError, DeepSetError
from .providers import DeepEquality, StructuralHasher, deep_equal, default_providers, structural_hash

__all__ = [
    "BucketStats",
    "ConfigurationError",
    "DeepEquality",
    "DeepSet",
    "DeepSetConfig",
    "DeepSetError",
    "StructuralHasher",
    "deep_equal",
    "default_providers",
    "structural_hash",
    "__version__",
]
