import logging
from typing import Optional

from slugstore_app.config import Settings
from slugstore_app.errors import (
    MappingNotFoundError,
    ShortenFailedError,
    SlugAllocationError,
)
from slugstore_app.schemas.keys import KeyListPage
from slugstore_app.schemas.mapping import SlugMapping, validate_target_url
from slugstore_app.services.reachability import ReachabilityProber
from slugstore_app.services.slug_strategies import RandomBase36SlugStrategy, SlugStrategy
from slugstore_app.storage.strategies import KVStoreStrategy

logger = logging.getLogger(__name__)


class SlugService:
    """
    Slug store service with dependency injection for store and prober.

    This follows the Dependency Injection pattern:
    - The key-value store and settings are injected (not global)
    - Easy to test (inject an in-memory store and a stub prober)
    - Flexible (swap backends without changing code)
    """

    def __init__(
        self,
        store: KVStoreStrategy,
        settings: Settings,
        prober: Optional[ReachabilityProber] = None,
        slug_strategy: Optional[SlugStrategy] = None
    ):
        """
        Initialize slug service with dependencies.

        Args:
            store: Key-value store holding slug -> target
            settings: Application settings (host URL, slug length, ...)
            prober: Scheme prober for bare hosts (built from settings if None)
            slug_strategy: Slug generator (random base-36 if None)
        """
        self.store = store
        self.settings = settings
        self.prober = prober or ReachabilityProber(
            enabled=settings.probe_enabled,
            timeout=settings.probe_timeout
        )
        self.slug_strategy = slug_strategy or RandomBase36SlugStrategy(
            length=settings.slug_length
        )

    def short_url(self, slug: str) -> str:
        """Full short URL returned by POST /"""
        return f"{self.settings.host_url.rstrip('/')}/{slug}"

    def bare_short_url(self, slug: str) -> str:
        """Scheme-less short URL returned by /shorten"""
        return f"{self.settings.short_domain}/{slug}"

    async def create(self, target: str) -> SlugMapping:
        """Create a mapping for target under a fresh slug

        Process:
        1. Generate a candidate slug
        2. Skip it if the store already has it
        3. Write with put_if_absent; if another writer took the slug
           in the meantime, start over with a new candidate

        Retries are unbounded unless settings.max_slug_attempts is set.

        Raises:
            SlugAllocationError: if max_slug_attempts candidates were all taken
        """
        attempts = 0
        while True:
            attempts += 1
            max_attempts = self.settings.max_slug_attempts
            if max_attempts is not None and attempts > max_attempts:
                raise SlugAllocationError(
                    f"Could not allocate a unique slug after {max_attempts} attempts"
                )

            slug = self.slug_strategy.generate()

            if await self.store.get(slug) is not None:
                logger.debug(f"Slug collision on {slug}, retrying")
                continue

            if await self.store.put_if_absent(slug, target):
                logger.info(f"Created slug {slug} -> {target}")
                return SlugMapping(slug=slug, target=target)

            logger.debug(f"Slug {slug} taken by a concurrent writer, retrying")

    async def create_from_bare_host(self, host: str) -> SlugMapping:
        """
        Create a mapping for a host given without scheme.

        The scheme is chosen by probing HTTPS first and falling back to
        HTTP. Any failure on this path is logged and reported as a
        generic ShortenFailedError.
        """
        try:
            logger.info(f"Received long URL: {host}")
            target = validate_target_url(await self.prober.choose_url(host))
            return await self.create(target)
        except Exception as e:
            logger.exception(f"Error shortening bare host {host!r}")
            raise ShortenFailedError() from e

    async def resolve(self, slug: str) -> str:
        """
        Get the target URL for slug.

        Raises:
            MappingNotFoundError: if the slug is not stored
        """
        target = await self.store.get(slug)
        if not target:
            raise MappingNotFoundError()
        return target

    async def list(self, cursor: Optional[str] = None, limit: Optional[int] = None) -> KeyListPage:
        """
        List stored slugs, passing the cursor through to the store.

        Raises:
            InvalidCursorError: if the store cannot decode the cursor
        """
        if limit is None:
            limit = self.settings.list_limit
        return await self.store.list(cursor=cursor, limit=limit)
