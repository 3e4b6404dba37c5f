"""
Key-value storage module for slug mappings.

This module implements the Strategy Pattern for pluggable key-value backends.
"""

from .strategies import KVStoreStrategy, InMemoryKVStore, RedisKVStore, SQLKVStore
from .factory import KVStoreFactory, KVBackend

__all__ = [
    "KVStoreStrategy",
    "InMemoryKVStore",
    "RedisKVStore",
    "SQLKVStore",
    "KVStoreFactory",
    "KVBackend",
]
