"""Core container: bucket index, membership, iteration and derived operations."""

from .bucket_index import BucketIndex, BucketStats
from .deep_set import DeepSet

__all__ = ["BucketIndex", "BucketStats", "DeepSet"]
