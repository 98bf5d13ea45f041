"""Cache adapters for sitecaps."""

from sitecaps.adapters.cache.file_cache import FileCapabilityCache
from sitecaps.adapters.cache.memory_cache import MemoryCapabilityCache


__all__ = ["FileCapabilityCache", "MemoryCapabilityCache"]
