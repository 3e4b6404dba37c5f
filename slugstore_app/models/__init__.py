"""
Database models for the SQL key-value backend.
"""

from .kv_entry import KVEntry

__all__ = ["KVEntry"]
