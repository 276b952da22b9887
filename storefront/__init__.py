"""
Storefront Cart

Stateful core of the storefront client:
- cart: line items, snapshot storage, cart engine
- services: stock/catalog API client, notification sinks
- db: Redis client for snapshots

Imports are lazy so that importing the package does not pull in httpx or
the Redis client until they are used.
"""

__all__ = [
    "CartManager",
    "create_cart_manager",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "CartManager":
        from storefront.cart import CartManager
        return CartManager
    elif name == "create_cart_manager":
        from storefront.cart import create_cart_manager
        return create_cart_manager
    raise AttributeError(f"module 'storefront' has no attribute '{name}'")
