"""Cart engine: stock-validated mutations mirrored to the snapshot store."""
import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import httpx
from pydantic import ValidationError

from storefront import errors
from storefront.db import CART_SESSION_ID
from storefront.logging import get_logger
from storefront.services.api import StorefrontApi, StorefrontApiError
from storefront.services.notifications import LoggingNotificationSink, NotificationSink
from .models import Cart, CartItem
from .storage import CartSnapshotStore, CartStorageError, RedisSnapshotBackend, SnapshotBackend

logger = get_logger(__name__)

# Failures from collaborators that an operation reports instead of raising
UNEXPECTED_ERRORS = (
    httpx.HTTPError,
    StorefrontApiError,
    CartStorageError,
    ValidationError,
    ValueError,
    TypeError,
    KeyError,
    OSError,
)


class CartStatus(str, Enum):
    """Outcome of a cart operation."""
    APPLIED = "applied"  # New cart persisted and installed
    REJECTED = "rejected"  # Validation failed, cart unchanged
    FAILED = "failed"  # Unexpected error, cart unchanged
    IGNORED = "ignored"  # Silent no-op


@dataclass(frozen=True)
class CartResult:
    """What an operation did, the cart after it, and the message sent (if any)."""
    status: CartStatus
    cart: Cart
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == CartStatus.APPLIED


class CartManager:
    """
    Owns the cart state for one session.

    Every operation reads the current cart, validates against live stock,
    persists the replacement, then installs it. Rejections and failures are
    reported through the notification sink and never raised.
    """

    def __init__(
        self,
        api: StorefrontApi,
        store: CartSnapshotStore,
        notifier: NotificationSink,
        cart: Optional[Cart] = None,
    ):
        self.api = api
        self.store = store
        self.notifier = notifier
        self._cart = cart if cart is not None else Cart()
        self._lock = asyncio.Lock()

    @classmethod
    async def restore(
        cls,
        api: StorefrontApi,
        store: CartSnapshotStore,
        notifier: NotificationSink,
    ) -> "CartManager":
        """Create a manager seeded from the snapshot store."""
        cart = await store.load()
        return cls(api, store, notifier, cart=cart)

    @property
    def cart(self) -> Cart:
        return self._cart

    @property
    def items(self) -> Tuple[CartItem, ...]:
        return self._cart.items

    async def _commit(self, cart: Cart) -> CartResult:
        # Durable first: a later restore must match what memory holds
        await self.store.save(cart)
        self._cart = cart
        return CartResult(CartStatus.APPLIED, cart)

    def _reject(self, message: str, status: CartStatus = CartStatus.REJECTED) -> CartResult:
        self.notifier.error(message)
        return CartResult(status, self._cart, message)

    async def add_product(self, product_id: int) -> CartResult:
        """Add one unit of a product, fetching catalog data on first addition."""
        async with self._lock:
            try:
                current = self._cart
                existing = current.find(product_id)
                stock = await self.api.get_stock(product_id)

                if stock is None or stock.amount == 0 or (
                    existing is not None and existing.amount >= stock.amount
                ):
                    logger.info(f"Add rejected for product {product_id}: out of stock")
                    return self._reject(errors.OUT_OF_STOCK)

                if existing is not None:
                    return await self._commit(current.with_amount(product_id, existing.amount + 1))

                product = await self.api.get_product(product_id)
                if product is None or product.id != product_id:
                    logger.warning(f"Catalog has no usable data for product {product_id}")
                    return self._reject(errors.ADD_PRODUCT_FAILED, CartStatus.FAILED)

                return await self._commit(current.with_item(CartItem.from_product(product)))
            except UNEXPECTED_ERRORS as e:
                logger.error(f"Failed to add product {product_id}: {e}", exc_info=True)
                return self._reject(errors.ADD_PRODUCT_FAILED, CartStatus.FAILED)

    async def remove_product(self, product_id: int) -> CartResult:
        """Remove a product from the cart entirely."""
        async with self._lock:
            current = self._cart
            if current.find(product_id) is None:
                return self._reject(errors.REMOVE_PRODUCT_FAILED)

            try:
                return await self._commit(current.without(product_id))
            except UNEXPECTED_ERRORS as e:
                logger.error(f"Failed to remove product {product_id}: {e}", exc_info=True)
                return self._reject(errors.REMOVE_PRODUCT_FAILED, CartStatus.FAILED)

    async def update_product_amount(self, product_id: int, amount: int) -> CartResult:
        """
        Set the held quantity of a product already in the cart.

        Amounts below 1 are ignored without notification; use remove_product
        to delete an item.
        """
        async with self._lock:
            try:
                if amount < 1:
                    return CartResult(CartStatus.IGNORED, self._cart)

                current = self._cart
                if current.find(product_id) is None:
                    return self._reject(errors.UPDATE_AMOUNT_FAILED)

                stock = await self.api.get_stock(product_id)
                if stock is None or stock.amount < amount:
                    logger.info(f"Update rejected for product {product_id}: {amount} exceeds stock")
                    return self._reject(errors.OUT_OF_STOCK)

                return await self._commit(current.with_amount(product_id, amount))
            except UNEXPECTED_ERRORS as e:
                logger.error(f"Failed to update product {product_id} amount: {e}", exc_info=True)
                return self._reject(errors.STOCK_LIMIT_REACHED, CartStatus.FAILED)


async def create_cart_manager(
    session_id: str = CART_SESSION_ID,
    api: Optional[StorefrontApi] = None,
    backend: Optional[SnapshotBackend] = None,
    notifier: Optional[NotificationSink] = None,
) -> CartManager:
    """
    Build and restore a CartManager for one session.

    Defaults: HTTP API from STOREFRONT_API_URL, Upstash Redis snapshots,
    notifications written to the log.
    """
    store = CartSnapshotStore(backend or RedisSnapshotBackend(), session_id)
    return await CartManager.restore(
        api or StorefrontApi(),
        store,
        notifier or LoggingNotificationSink(),
    )
