"""
Key-value storage strategies using Strategy Pattern.

The slug service only needs get, put and a paginated list, so any store
offering those can back it:
- InMemory: Development/testing
- Redis: Production, atomic SET NX
- SQL: Any SQLAlchemy database (SQLite, PostgreSQL, ...)
"""

import base64
import binascii
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from starlette.concurrency import run_in_threadpool

from slugstore_app.errors import InvalidCursorError
from slugstore_app.models.kv_entry import KVEntry
from slugstore_app.schemas.keys import KeyInfo, KeyListPage


def encode_cursor(last_key: str) -> str:
    """Opaque cursor for keyset pagination: the last key returned"""
    return base64.urlsafe_b64encode(last_key.encode("utf-8")).decode("ascii")


def decode_cursor(cursor: str) -> str:
    try:
        return base64.urlsafe_b64decode(cursor.encode("ascii")).decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise InvalidCursorError() from e


def _page_from_sorted_keys(keys: List[str], limit: int) -> KeyListPage:
    """
    Build a page from up to limit + 1 sorted keys.

    The extra key only tells us whether another page exists.
    """
    has_more = len(keys) > limit
    page_keys = keys[:limit]
    return KeyListPage(
        keys=[KeyInfo(name=key) for key in page_keys],
        list_complete=not has_more,
        cursor=encode_cursor(page_keys[-1]) if has_more else None,
    )


class KVStoreStrategy(ABC):
    """
    Abstract base class for key-value stores.

    All methods are async because real backends involve I/O.
    Errors are not swallowed: a failing backend surfaces to the caller.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Get value by key.

        Returns:
            Stored value or None if the key is absent
        """
        pass

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """Store value under key, overwriting any previous value"""
        pass

    @abstractmethod
    async def put_if_absent(self, key: str, value: str) -> bool:
        """
        Store value under key only if key is not present yet.

        Returns:
            True if written, False if the key already existed
        """
        pass

    @abstractmethod
    async def list(self, cursor: Optional[str] = None, limit: int = 1000) -> KeyListPage:
        """
        List keys one page at a time.

        Args:
            cursor: Opaque cursor from a previous page, None for the first page
            limit: Maximum number of keys to return (a hint for Redis)

        Raises:
            InvalidCursorError: if the cursor was not produced by this backend
        """
        pass


class InMemoryKVStore(KVStoreStrategy):
    """
    In-memory store using a Python dict.

    Lost on restart and not shared between processes.
    Good for development and tests.
    """

    def __init__(self):
        self._data: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def put(self, key: str, value: str) -> None:
        self._data[key] = value

    async def put_if_absent(self, key: str, value: str) -> bool:
        # No await between check and write, so this is atomic on the event loop
        if key in self._data:
            return False
        self._data[key] = value
        return True

    async def list(self, cursor: Optional[str] = None, limit: int = 1000) -> KeyListPage:
        keys = sorted(self._data)
        if cursor:
            after = decode_cursor(cursor)
            keys = [key for key in keys if key > after]
        return _page_from_sorted_keys(keys[:limit + 1], limit)


class RedisKVStore(KVStoreStrategy):
    """
    Redis implementation.

    Keys are stored as "<namespace>:<key>" so several services can share
    one Redis database. put_if_absent uses SET NX, which is atomic.
    Listing uses SCAN; the cursor is Redis' own SCAN cursor.
    """

    def __init__(self, redis_client, namespace: str = "CM8ME_KV"):
        """
        Args:
            redis_client: Redis client instance (redis.Redis)
            namespace: Prefix for all keys
        """
        self.redis = redis_client
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def _strip(self, raw_key) -> str:
        if isinstance(raw_key, bytes):
            raw_key = raw_key.decode("utf-8")
        return raw_key[len(self.namespace) + 1:]

    async def get(self, key: str) -> Optional[str]:
        value = await run_in_threadpool(self.redis.get, self._key(key))
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def put(self, key: str, value: str) -> None:
        await run_in_threadpool(self.redis.set, self._key(key), value)

    async def put_if_absent(self, key: str, value: str) -> bool:
        return bool(await run_in_threadpool(self.redis.set, self._key(key), value, nx=True))

    async def list(self, cursor: Optional[str] = None, limit: int = 1000) -> KeyListPage:
        scan_cursor = self._parse_scan_cursor(cursor)
        next_cursor, raw_keys = await run_in_threadpool(
            self.redis.scan,
            cursor=scan_cursor,
            match=f"{self.namespace}:*",
            count=limit,
        )
        next_cursor = int(next_cursor)
        return KeyListPage(
            keys=[KeyInfo(name=self._strip(raw_key)) for raw_key in raw_keys],
            list_complete=next_cursor == 0,
            cursor=str(next_cursor) if next_cursor != 0 else None,
        )

    @staticmethod
    def _parse_scan_cursor(cursor: Optional[str]) -> int:
        if not cursor:
            return 0
        try:
            value = int(cursor)
        except ValueError as e:
            raise InvalidCursorError() from e
        if value < 0:
            raise InvalidCursorError()
        return value


class SQLKVStore(KVStoreStrategy):
    """
    SQLAlchemy implementation on top of the kv_entries table.

    put_if_absent is a plain INSERT guarded by the (namespace, key)
    primary key. Listing uses keyset pagination ordered by key.

    Sessions are sync; each operation runs in Starlette's threadpool
    so the event loop is not blocked on database I/O.
    """

    def __init__(self, session_factory, namespace: str = "CM8ME_KV"):
        """
        Args:
            session_factory: sessionmaker bound to an engine with kv_entries created
            namespace: Namespace column value for all rows of this store
        """
        self.session_factory = session_factory
        self.namespace = namespace

    async def get(self, key: str) -> Optional[str]:
        return await run_in_threadpool(self._get, key)

    async def put(self, key: str, value: str) -> None:
        await run_in_threadpool(self._put, key, value)

    async def put_if_absent(self, key: str, value: str) -> bool:
        return await run_in_threadpool(self._insert, key, value)

    async def list(self, cursor: Optional[str] = None, limit: int = 1000) -> KeyListPage:
        after = decode_cursor(cursor) if cursor else None
        keys = await run_in_threadpool(self._keys_after, after, limit + 1)
        return _page_from_sorted_keys(keys, limit)

    def _get(self, key: str) -> Optional[str]:
        with self.session_factory() as session:
            entry = session.get(KVEntry, (self.namespace, key))
            return entry.value if entry else None

    def _put(self, key: str, value: str) -> None:
        with self.session_factory() as session:
            session.merge(KVEntry(namespace=self.namespace, key=key, value=value))
            session.commit()

    def _insert(self, key: str, value: str) -> bool:
        with self.session_factory() as session:
            session.add(KVEntry(namespace=self.namespace, key=key, value=value))
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                return False
            return True

    def _keys_after(self, after: Optional[str], count: int) -> List[str]:
        query = (
            select(KVEntry.key)
            .where(KVEntry.namespace == self.namespace)
            .order_by(KVEntry.key)
            .limit(count)
        )
        if after is not None:
            query = query.where(KVEntry.key > after)

        with self.session_factory() as session:
            return list(session.scalars(query))
