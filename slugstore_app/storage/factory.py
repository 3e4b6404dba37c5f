"""
Factory for creating key-value store instances.
Simple, clean factory with singleton caching.
"""

import logging
from enum import Enum

from .strategies import KVStoreStrategy, InMemoryKVStore, RedisKVStore, SQLKVStore
from slugstore_app.config import Settings

logger = logging.getLogger(__name__)


class KVBackend(Enum):
    """Available key-value backends"""
    MEMORY = "memory"
    REDIS = "redis"
    SQL = "sql"


class KVStoreFactory:
    """
    Simple factory for creating key-value store instances.
    
    Uses Singleton Pattern - creates instance once, reuses it.
    Configuration is passed in explicitly as a Settings object.
    """
    
    _instance: KVStoreStrategy = None  # Single cached instance
    
    @classmethod
    def create(cls, backend: KVBackend, settings: Settings) -> KVStoreStrategy:
        """
        Create or return cached store instance.
        
        A Redis connection failure is raised; there is no in-memory fallback.
        
        Args:
            backend: Type of store backend (from enum)
            settings: Application settings (URLs, namespace)
            
        Returns:
            Singleton store instance
        """
        if cls._instance is not None:
            return cls._instance
        
        if backend == KVBackend.REDIS:
            import redis
            
            redis_client = redis.from_url(
                settings.redis_url,
                decode_responses=False,
                socket_connect_timeout=2,
            )
            redis_client.ping()
            
            cls._instance = RedisKVStore(redis_client, namespace=settings.kv_namespace)
            logger.info("Redis key-value store initialized")
            
        elif backend == KVBackend.SQL:
            from slugstore_app.database.connection import Base, create_session_factory
            
            engine, session_factory = create_session_factory(settings.database_url)
            Base.metadata.create_all(bind=engine)
            
            cls._instance = SQLKVStore(session_factory, namespace=settings.kv_namespace)
            logger.info("SQL key-value store initialized")
            
        elif backend == KVBackend.MEMORY:
            cls._instance = InMemoryKVStore()
            logger.info("In-memory key-value store initialized")
            
        else:
            raise ValueError(f"Unknown key-value backend: {backend}")
        
        return cls._instance
    
    @classmethod
    def clear_instance(cls):
        """Clear cached instance (for testing)"""
        cls._instance = None
