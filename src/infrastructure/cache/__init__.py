"""Cache infrastructure module."""

from src.infrastructure.cache.bounded_cache import BoundedCache
from src.infrastructure.cache.schema_cache import SchemaCache

__all__ = [
    "BoundedCache",
    "SchemaCache",
]
