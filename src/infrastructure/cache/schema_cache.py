"""Schema caching service."""

import logging
from typing import Any

from src.infrastructure.cache.bounded_cache import BoundedCache
from src.services.crud.models import TableDescriptor

logger = logging.getLogger(__name__)


class SchemaCache:
    """Caches introspected TableDescriptors to avoid repeated catalog reads."""

    def __init__(self, max_size: int = 100, ttl_seconds: int = 300) -> None:
        self._cache: BoundedCache[TableDescriptor] = BoundedCache(
            max_size=max_size, ttl_seconds=ttl_seconds
        )

    @staticmethod
    def key(table_name: str, primary_key_column: str) -> str:
        return f"schema_{table_name}:{primary_key_column}"

    def get(self, table_name: str, primary_key_column: str) -> TableDescriptor | None:
        """Get a cached descriptor, or None if missing or expired."""
        return self._cache.get(self.key(table_name, primary_key_column))

    def set(self, descriptor: TableDescriptor) -> None:
        """Cache a descriptor. Empty descriptors are not cached."""
        if descriptor.is_empty:
            logger.debug("Not caching empty descriptor for %s", descriptor.table_name)
            return
        self._cache.set(
            self.key(descriptor.table_name, descriptor.primary_key_column), descriptor
        )

    def clear(self) -> None:
        """Clear all cached descriptors."""
        self._cache.clear()

    def get_stats(self) -> dict[str, Any]:
        return self._cache.get_stats()
