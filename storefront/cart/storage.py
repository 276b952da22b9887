"""Cart snapshot persistence over a key-value slot."""
import json
from typing import Dict, Optional, Protocol

from storefront.db import get_redis, RedisKeys, CART_SESSION_ID
from storefront.logging import get_logger, sanitize_id_for_logging
from .models import Cart

logger = get_logger(__name__)


class CartStorageError(Exception):
    """Snapshot slot could not be written."""


class SnapshotBackend(Protocol):
    """Async key-value slot holding serialized carts."""

    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(self, key: str, value: str) -> object:
        ...


class MemorySnapshotBackend:
    """Process-local backend for development and tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> bool:
        self.data[key] = value
        return True


class RedisSnapshotBackend:
    """Upstash Redis backend. Snapshots have no TTL: they live as long as the session."""

    def __init__(self, redis=None):
        self._redis = redis  # Lazy initialization

    @property
    def redis(self):
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            self._redis = get_redis()
        return self._redis

    async def get(self, key: str) -> Optional[str]:
        return await self.redis.get(key)

    async def set(self, key: str, value: str) -> object:
        return await self.redis.set(key, value)


class CartSnapshotStore:
    """Reads and overwrites the single snapshot slot of one cart session."""

    def __init__(self, backend: SnapshotBackend, session_id: str = CART_SESSION_ID):
        self.backend = backend
        self.session_id = session_id
        self.key = RedisKeys.cart_key(session_id)

    async def load(self) -> Cart:
        """Restore the stored cart; an absent or unreadable slot yields an empty cart."""
        session = sanitize_id_for_logging(self.session_id)
        try:
            raw = await self.backend.get(self.key)
        except Exception as e:
            logger.warning(f"Failed to read cart snapshot for session {session}: {e}")
            return Cart()

        if not raw:
            return Cart()

        try:
            cart = Cart.from_list(json.loads(raw))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Corrupted cart snapshot for session {session}: {e}")
            return Cart()

        logger.info(f"Restored cart for session {session} with {cart.size} items")
        return cart

    async def save(self, cart: Cart) -> None:
        """Overwrite the slot with the whole cart.

        Raises:
            CartStorageError: the backend failed, whatever its own error type
        """
        try:
            await self.backend.set(self.key, json.dumps(cart.to_list()))
        except Exception as e:
            logger.error(f"Failed to save cart snapshot for session {sanitize_id_for_logging(self.session_id)}: {e}")
            raise CartStorageError(f"Cart storage unavailable: {e}") from e
