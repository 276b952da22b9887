"""
Database Module - Redis client for cart snapshots

Provides a singleton async Upstash Redis client and the key layout used
for persisted carts.
"""

import os
from typing import Optional

from upstash_redis.asyncio import Redis as AsyncRedis


# Upstash uses REST_URL and REST_TOKEN
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

CART_SESSION_ID = os.environ.get("CART_SESSION_ID", "default")

_redis_client: Optional[AsyncRedis] = None


def get_redis() -> AsyncRedis:
    """
    Get async Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _redis_client

    if _redis_client is None:
        if not UPSTASH_REDIS_REST_URL or not UPSTASH_REDIS_REST_TOKEN:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _redis_client = AsyncRedis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _redis_client


class RedisKeys:
    """Redis key prefixes for different data types."""

    CART = "cart:"  # cart:{session_id}

    @staticmethod
    def cart_key(session_id: str = CART_SESSION_ID) -> str:
        return f"{RedisKeys.CART}{session_id}"
