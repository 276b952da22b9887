"""External collaborators of the cart: HTTP API, notifications, money helpers."""
