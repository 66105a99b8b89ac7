"""
Shared HTTP client for GitHub API operations.

Org-wide searches issue hundreds of content fetches per request, so every
GitHubService shares one pooled AsyncClient instead of opening a connection
(and paying an SSL handshake) per file.
"""

import logging

import httpx

from app.config import settings

logger = logging.getLogger(__name__)

API_VERSION = "2022-11-28"

_client: httpx.AsyncClient | None = None


def get_github_client() -> httpx.AsyncClient:
    """
    Get or create the shared HTTP client for GitHub API calls.

    The client carries the API base URL and the versioned Accept headers.
    Auth is passed per-request so services with different tokens can share it.
    """
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(
            base_url=settings.github_api_url,
            headers={
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": API_VERSION,
            },
            timeout=httpx.Timeout(30.0, connect=5.0),
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
            http2=True,
        )
        logger.debug(f"Created GitHub HTTP client for {settings.github_api_url}")
    return _client


async def close_github_client() -> None:
    """Close the shared HTTP client (called from the app lifespan on shutdown)."""
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
        _client = None
        logger.debug("Closed GitHub HTTP client")
