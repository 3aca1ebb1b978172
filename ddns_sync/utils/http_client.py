"""
HTTP client - Shared httpx transport for every provider and resolver

A single AsyncClient is built per run so that connections to the same vendor
can be reused across records and domains.
"""

from typing import Optional

import httpx

from .. import __version__

USER_AGENT = f"ddns-sync/{__version__}"


def build_async_client(
    timeout_seconds: float,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create the shared `httpx.AsyncClient` with an explicit timeout."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds),
        headers={"User-Agent": USER_AGENT},
        transport=transport,
    )
