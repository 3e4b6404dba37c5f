"""
Tests for key-value store strategies and their factory.
"""
import asyncio
from unittest.mock import MagicMock

import pytest

from slugstore_app.config import Settings
from slugstore_app.database.connection import Base, create_session_factory
from slugstore_app.errors import InvalidCursorError
from slugstore_app.storage.factory import KVStoreFactory, KVBackend
from slugstore_app.storage.strategies import (
    InMemoryKVStore,
    RedisKVStore,
    SQLKVStore,
    decode_cursor,
    encode_cursor,
)


@pytest.fixture
def sql_store(tmp_path):
    """SQL store on a throwaway SQLite file"""
    engine, session_factory = create_session_factory(f"sqlite:///{tmp_path / 'kv.db'}")
    Base.metadata.create_all(bind=engine)
    yield SQLKVStore(session_factory, namespace="TEST_KV")
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request, sql_store):
    if request.param == "memory":
        return InMemoryKVStore()
    return sql_store


class TestKVStores:
    """Behaviour shared by the in-memory and SQL stores"""

    def test_get_missing(self, store):
        assert asyncio.run(store.get("missing")) is None

    def test_put_and_get(self, store):
        asyncio.run(store.put("abc1234", "https://example.com"))
        assert asyncio.run(store.get("abc1234")) == "https://example.com"

    def test_put_overwrites(self, store):
        asyncio.run(store.put("abc1234", "https://old.example"))
        asyncio.run(store.put("abc1234", "https://new.example"))
        assert asyncio.run(store.get("abc1234")) == "https://new.example"

    def test_put_if_absent(self, store):
        assert asyncio.run(store.put_if_absent("abc1234", "https://first.example")) is True
        assert asyncio.run(store.put_if_absent("abc1234", "https://second.example")) is False
        assert asyncio.run(store.get("abc1234")) == "https://first.example"

    def test_list_empty(self, store):
        page = asyncio.run(store.list())
        assert page.keys == []
        assert page.list_complete is True
        assert page.cursor is None

    def test_list_pages_in_key_order(self, store):
        for slug in ["ccccccc", "aaaaaaa", "ddddddd", "bbbbbbb"]:
            asyncio.run(store.put(slug, f"https://{slug}.example"))

        first = asyncio.run(store.list(limit=3))
        assert [key.name for key in first.keys] == ["aaaaaaa", "bbbbbbb", "ccccccc"]
        assert first.list_complete is False

        second = asyncio.run(store.list(cursor=first.cursor, limit=3))
        assert [key.name for key in second.keys] == ["ddddddd"]
        assert second.list_complete is True
        assert second.cursor is None

    def test_list_invalid_cursor(self, store):
        with pytest.raises(InvalidCursorError):
            asyncio.run(store.list(cursor="abc"))


class TestSQLNamespaces:

    def test_namespaces_are_isolated(self, sql_store):
        other = SQLKVStore(sql_store.session_factory, namespace="OTHER_KV")
        asyncio.run(sql_store.put("abc1234", "https://mine.example"))

        assert asyncio.run(other.get("abc1234")) is None
        assert asyncio.run(other.list()).keys == []
        assert asyncio.run(other.put_if_absent("abc1234", "https://theirs.example")) is True


class TestRedisKVStore:
    """Redis store against a mocked client"""

    def test_get_decodes_and_namespaces(self):
        client = MagicMock()
        client.get.return_value = b"https://example.com"
        store = RedisKVStore(client, namespace="NS")

        assert asyncio.run(store.get("abc1234")) == "https://example.com"
        client.get.assert_called_once_with("NS:abc1234")

    def test_get_missing(self):
        client = MagicMock()
        client.get.return_value = None
        store = RedisKVStore(client, namespace="NS")

        assert asyncio.run(store.get("abc1234")) is None

    def test_put_if_absent_uses_set_nx(self):
        client = MagicMock()
        client.set.side_effect = [True, None]
        store = RedisKVStore(client, namespace="NS")

        assert asyncio.run(store.put_if_absent("abc1234", "https://example.com")) is True
        assert asyncio.run(store.put_if_absent("abc1234", "https://other.example")) is False
        client.set.assert_called_with("NS:abc1234", "https://other.example", nx=True)

    def test_list_uses_scan_cursor(self):
        client = MagicMock()
        client.scan.return_value = (42, [b"NS:aaaaaaa", b"NS:bbbbbbb"])
        store = RedisKVStore(client, namespace="NS")

        page = asyncio.run(store.list(cursor="17", limit=50))

        client.scan.assert_called_once_with(cursor=17, match="NS:*", count=50)
        assert [key.name for key in page.keys] == ["aaaaaaa", "bbbbbbb"]
        assert page.list_complete is False
        assert page.cursor == "42"

    def test_list_last_page(self):
        client = MagicMock()
        client.scan.return_value = (0, [b"NS:aaaaaaa"])
        store = RedisKVStore(client, namespace="NS")

        page = asyncio.run(store.list())

        client.scan.assert_called_once_with(cursor=0, match="NS:*", count=1000)
        assert page.list_complete is True
        assert page.cursor is None

    def test_list_invalid_cursor(self):
        store = RedisKVStore(MagicMock(), namespace="NS")

        with pytest.raises(InvalidCursorError):
            asyncio.run(store.list(cursor="not-a-number"))


class TestCursorEncoding:

    def test_cursor_is_opaque_and_reversible(self):
        cursor = encode_cursor("abc1234")
        assert cursor != "abc1234"
        assert decode_cursor(cursor) == "abc1234"


class TestKVStoreFactory:
    """Test store factory"""

    @pytest.fixture(autouse=True)
    def reset_factory(self):
        KVStoreFactory.clear_instance()
        yield
        KVStoreFactory.clear_instance()

    def test_creates_memory_store(self):
        store = KVStoreFactory.create(KVBackend.MEMORY, Settings(_env_file=None))
        assert isinstance(store, InMemoryKVStore)

    def test_returns_cached_instance(self):
        settings = Settings(_env_file=None)
        assert KVStoreFactory.create(KVBackend.MEMORY, settings) is KVStoreFactory.create(
            KVBackend.MEMORY, settings
        )

    def test_creates_sql_store(self, tmp_path):
        settings = Settings(
            _env_file=None,
            database_url=f"sqlite:///{tmp_path / 'factory.db'}",
            kv_namespace="FACTORY_KV",
        )

        store = KVStoreFactory.create(KVBackend.SQL, settings)

        assert isinstance(store, SQLKVStore)
        assert store.namespace == "FACTORY_KV"
        assert asyncio.run(store.put_if_absent("abc1234", "https://example.com")) is True


class TestBlockingCallsOffLoop:
    """Sync SQL and Redis calls run in the threadpool, not on the event loop"""

    @pytest.fixture
    def threadpool_calls(self, monkeypatch):
        from slugstore_app.storage import strategies

        calls = []
        real_run_in_threadpool = strategies.run_in_threadpool

        async def recording_run_in_threadpool(func, *args, **kwargs):
            calls.append(getattr(func, "__name__", repr(func)))
            return await real_run_in_threadpool(func, *args, **kwargs)

        monkeypatch.setattr(strategies, "run_in_threadpool", recording_run_in_threadpool)
        return calls

    def test_sql_store_uses_threadpool(self, sql_store, threadpool_calls):
        asyncio.run(sql_store.put_if_absent("abc1234", "https://example.com"))
        asyncio.run(sql_store.get("abc1234"))
        asyncio.run(sql_store.list())

        assert threadpool_calls == ["_insert", "_get", "_keys_after"]

    def test_redis_store_uses_threadpool(self, threadpool_calls):
        client = MagicMock()
        client.get.__name__ = "get"
        client.get.return_value = b"https://example.com"
        store = RedisKVStore(client, namespace="NS")

        assert asyncio.run(store.get("abc1234")) == "https://example.com"
        assert threadpool_calls == ["get"]
