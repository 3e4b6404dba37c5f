"""
FastAPI dependencies for dependency injection.

This module provides the settings, key-value store, prober and slug
service that are injected into routes. Tests replace any of them via
app.dependency_overrides.
"""

import secrets
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from slugstore_app.config import Settings, get_settings
from slugstore_app.services.reachability import ReachabilityProber
from slugstore_app.services.slug_service import SlugService
from slugstore_app.storage.factory import KVStoreFactory, KVBackend
from slugstore_app.storage.strategies import KVStoreStrategy


def get_kv_store(settings: Settings = Depends(get_settings)) -> KVStoreStrategy:
    """
    Get key-value store instance (singleton).
    
    The factory caches the instance, so the backend is only
    initialized on the first request.
    """
    backend = KVBackend(settings.kv_backend)
    return KVStoreFactory.create(backend, settings)


@lru_cache()
def get_prober() -> ReachabilityProber:
    """
    Get reachability prober (singleton).
    
    Cached so every request shares one requests.Session and its
    connection pool. @lru_cache ensures this is called only once.
    """
    settings = get_settings()
    return ReachabilityProber(
        enabled=settings.probe_enabled,
        timeout=settings.probe_timeout
    )


def get_slug_service(
    settings: Settings = Depends(get_settings),
    store: KVStoreStrategy = Depends(get_kv_store),
    prober: ReachabilityProber = Depends(get_prober)
) -> SlugService:
    """
    Get SlugService with all dependencies injected.
    
    Controller depends on service, service depends on infrastructure
    (store, prober) and explicit settings.
    """
    return SlugService(store=store, settings=settings, prober=prober)


def require_api_token(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings)
) -> None:
    """
    Check the Authorization header against the configured API token.
    
    The header value is compared verbatim (no "Bearer " prefix handling).
    An unset token rejects every request.
    """
    expected = settings.api_token
    if (
        not expected
        or authorization is None
        or not secrets.compare_digest(authorization.encode("utf-8"), expected.encode("utf-8"))
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API token."
        )
