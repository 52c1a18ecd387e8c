"""
Deployment environment for outgoing platform calls.

URLs come from the environment the same way the other services read their
peers' addresses. Every outgoing request carries the cache-busting header.
"""
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx


# Configuration
CONTEXT_URL = os.getenv("CONTEXT_URL", "http://localhost:8080/pentaho/")
SCHEDULER_PLUGIN_PATH = os.getenv("SCHEDULER_PLUGIN_PATH", "plugin/scheduler-plugin/")
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

NO_CACHE_HEADERS = {"If-Modified-Since": "01 Jan 1970 00:00:00 GMT"}


def _with_slash(url: str) -> str:
    return url if url.endswith("/") else url + "/"


def get_fully_qualified_url(context_url: Optional[str] = None) -> str:
    """Deployment context root, always ending with a slash."""
    return _with_slash(context_url or CONTEXT_URL)


def get_scheduler_plugin_context_url(context_url: Optional[str] = None) -> str:
    """Context root of the scheduler plugin, always ending with a slash."""
    return get_fully_qualified_url(context_url) + _with_slash(SCHEDULER_PLUGIN_PATH)


@asynccontextmanager
async def open_client(client: Optional[httpx.AsyncClient] = None) -> AsyncIterator[httpx.AsyncClient]:
    """
    Yield an AsyncClient.

    An injected client is used as-is and left open for its owner; otherwise a
    short-lived client is created and closed on exit.
    """
    if client is not None:
        yield client
        return

    async with httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS) as owned:
        yield owned
