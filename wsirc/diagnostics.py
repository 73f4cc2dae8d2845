"""Bridge reachability probe run after a transport error."""

from __future__ import annotations

import asyncio
import logging

import aiohttp

from .constants import BRIDGE_PROBE_SNIPPET_CHARS, BRIDGE_PROBE_TIMEOUT_SECONDS
from .logs.logger import logger


def probe_url(server: str, port: int | None = None) -> str:
    return f"https://{server}:{port}" if port else f"https://{server}"


async def probe_bridge(
    server: str,
    port: int | None = None,
    *,
    session: aiohttp.ClientSession | None = None,
    timeout: float = BRIDGE_PROBE_TIMEOUT_SECONDS,
) -> tuple[int, str] | None:
    """Fetch the bridge over HTTPS and log what answers.

    A WebSocket error says little on its own; the plain HTTP response of the
    bridge (certificate problems, "403 - Too many ongoing connections", ...)
    usually explains it.

    Returns:
        ``(status, body snippet)``, or None when the probe itself failed.
    """
    url = probe_url(server, port)
    owns_session = session is None
    if owns_session:
        session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout))
    try:
        async with session.get(url) as response:
            body = await response.text(errors="replace")
            snippet = body[:BRIDGE_PROBE_SNIPPET_CHARS].strip()
            logger.log_event(
                "transport",
                "probe_result",
                level=logging.WARNING,
                probe_url=url,
                status=response.status,
                snippet=snippet,
            )
            return response.status, snippet
    except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
        logger.log_event(
            "transport",
            "probe_failed",
            level=logging.WARNING,
            probe_url=url,
            error=str(e) or type(e).__name__,
        )
        return None
    finally:
        if owns_session:
            await session.close()
