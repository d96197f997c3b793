# =============================================================================
# Redis Connection Management
# =============================================================================
#
# One async Redis client (and its connection pool) per process, created
# lazily on first use and closed by the application lifespan on shutdown.
#
# decode_responses=True: search results and JSON documents come back as
# `str`, which json.loads and the result parsers expect.
# =============================================================================

from __future__ import annotations

import logging

import redis.asyncio as aioredis

from people_api.config import settings

logger = logging.getLogger(__name__)

_redis_client: aioredis.Redis | None = None


def get_redis() -> aioredis.Redis:
    """Lazily create and cache the async Redis client."""
    global _redis_client
    if _redis_client is None:
        logger.info("Connecting to Redis at %s", settings.redis_url)
        _redis_client = aioredis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_timeout=settings.redis_socket_timeout,
        )
    return _redis_client


async def close_redis() -> None:
    """Close the cached client, if one was created."""
    global _redis_client
    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None
