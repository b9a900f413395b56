"""Pooled httpx client shared by outbound calls."""
import logging
from typing import Optional

import httpx

from .. import __version__
from ..core.config import get_settings

logger = logging.getLogger(__name__)

_shared_client: Optional[httpx.AsyncClient] = None


def get_shared_http_client() -> httpx.AsyncClient:
    """
    Return the process-wide AsyncClient, creating it on first use.

    The analysis loop calls the vision gateway every few seconds, so keeping
    one pool avoids a TLS handshake per frame. Per-request timeouts still
    override the pool default.
    """
    global _shared_client

    if _shared_client is None:
        settings = get_settings()
        _shared_client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.vision_timeout_seconds, connect=10.0),
            limits=httpx.Limits(
                max_keepalive_connections=settings.http_max_keepalive,
                max_connections=settings.http_max_connections,
                keepalive_expiry=30.0,
            ),
            headers={"User-Agent": f"ppe-monitor/{__version__}"},
            http2=True,
        )
        logger.info(
            f"Created shared HTTP client "
            f"(max {settings.http_max_connections} connections, timeout {settings.vision_timeout_seconds}s)"
        )

    return _shared_client


async def close_shared_http_client() -> None:
    """Close the pool; the next get_shared_http_client() call builds a new one."""
    global _shared_client

    if _shared_client is None:
        return
    client, _shared_client = _shared_client, None
    await client.aclose()
    logger.info("Closed shared HTTP client")
