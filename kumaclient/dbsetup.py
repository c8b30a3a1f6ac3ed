"""First-run database configuration for servers that ask for it."""

from __future__ import annotations

import asyncio
import contextlib
import json
from typing import Any, Optional

import httpx

from kumaclient.errors import KumaError

ENTRY_PAGE_PATH = "/api/entry-page"
SETUP_DATABASE_PATH = "/setup-database"
_SETUP_DATABASE = "setup-database"


def http_url(base_url: str) -> str:
    """Turn a WebSocket base URL into the matching HTTP URL."""
    return base_url.replace("ws://", "http://", 1).replace("wss://", "https://", 1)


def _parse_object(body: bytes, what: str) -> dict[str, Any]:
    try:
        value = json.loads(body)
    except ValueError as exc:
        raise KumaError(f"parse {what} response: {exc}") from exc
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise KumaError(f"parse {what} response: expected a JSON object")
    return value


async def _needs_setup(client: httpx.AsyncClient, root: str) -> bool:
    # Connection errors are left as they are, so callers may retry.
    response = await client.get(root + ENTRY_PAGE_PATH, timeout=15.0)
    if response.status_code != 200:
        raise KumaError(f"entry-page returned status {response.status_code}")
    page = _parse_object(response.content, "entry-page")
    return page.get("type") == _SETUP_DATABASE


async def _configure_sqlite(client: httpx.AsyncClient, root: str) -> None:
    try:
        response = await client.post(
            root + SETUP_DATABASE_PATH,
            json={"dbConfig": {"type": "sqlite"}},
            timeout=5.0,
        )
    except httpx.HTTPError as exc:
        raise KumaError(f"setup database: {exc}") from exc
    if response.status_code != 200:
        raise KumaError(f"setup-database returned status {response.status_code}")
    result = _parse_object(response.content, "setup-database")
    if result.get("ok") is not True:
        raise KumaError("setup-database failed")


async def _wait_for_restart(
    client: httpx.AsyncClient, root: str, restart_timeout: float, poll_interval: float
) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + restart_timeout
    while True:
        await asyncio.sleep(poll_interval)
        remaining = deadline - loop.time()
        if remaining <= 0:
            raise KumaError("timeout waiting for server restart")
        try:
            response = await client.get(root + ENTRY_PAGE_PATH, timeout=min(2.0, remaining))
            page = json.loads(response.content)
        except (httpx.HTTPError, ValueError):
            continue
        if page is None:
            page = {}
        if isinstance(page, dict) and page.get("type") != _SETUP_DATABASE:
            return


async def setup_database(
    base_url: str,
    http_client: Optional[httpx.AsyncClient] = None,
    restart_timeout: float = 30.0,
    poll_interval: float = 0.1,
) -> bool:
    """Configure SQLite if the server asks for database setup.

    Waits until the server has restarted and left the database setup
    stage. Returns whether setup was performed.
    """
    root = http_url(base_url)
    async with contextlib.AsyncExitStack() as stack:
        client = http_client
        if client is None:
            client = await stack.enter_async_context(httpx.AsyncClient())
        if not await _needs_setup(client, root):
            return False
        await _configure_sqlite(client, root)
        await _wait_for_restart(client, root, restart_timeout, poll_interval)
    return True