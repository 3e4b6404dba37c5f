"""
Scheme detection for bare hosts.

A bare host like "example.com/page" is probed over HTTPS first; if that
fails or answers with a non-2xx status, plain HTTP is used instead.
"""

import logging
from typing import Optional

import requests
from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)


class ReachabilityProber:
    """
    Chooses https:// or http:// for a bare host with a HEAD request.
    
    requests is blocking, so the probe runs in Starlette's threadpool
    to keep the event loop free.
    """
    
    def __init__(
        self,
        enabled: bool = True,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Args:
            enabled: When False, https:// is assumed without a network call
            timeout: Probe timeout in seconds (None = no timeout)
            session: requests session to use (a new one if not given)
        """
        self.enabled = enabled
        self.timeout = timeout
        self.session = session or requests.Session()
    
    def is_reachable(self, url: str) -> bool:
        """True if a HEAD request to url succeeds with a 2xx status"""
        try:
            response = self.session.head(url, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as e:
            logger.warning(f"HTTPS request failed for {url}: {e}")
            return False
        
        if not 200 <= response.status_code < 300:
            logger.warning(f"HTTPS not reachable ({response.status_code}) for {url}")
            return False
        return True
    
    async def choose_url(self, host: str) -> str:
        """
        Prefix host with the scheme it is reachable on.
        
        Returns:
            "https://<host>" if the HTTPS probe succeeds (or probing is
            disabled), "http://<host>" otherwise
        """
        https_url = f"https://{host}"
        if not self.enabled:
            return https_url
        
        if await run_in_threadpool(self.is_reachable, https_url):
            return https_url
        
        logger.warning(f"Falling back to HTTP for {host}")
        return f"http://{host}"
