"""Cart models with Decimal-based pricing.

Both classes are immutable: every change produces a new Cart, so readers
never observe a half-updated collection.
"""
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Iterator, List, Optional, Tuple

from storefront.services.models import Product
from storefront.services.money import to_decimal, parse_money, round_money, multiply, to_float


@dataclass(frozen=True)
class CartItem:
    """Single product entry in the cart with its held quantity."""
    id: int
    name: str
    price: Decimal
    image_url: str
    amount: int

    def __post_init__(self):
        # Normalize numeric fields
        object.__setattr__(self, "price", to_decimal(self.price))
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValueError("amount must be an integer")
        if self.amount < 1:
            raise ValueError(f"amount must be >= 1, got {self.amount}")

    @property
    def subtotal(self) -> Decimal:
        """Price for all units of this item."""
        return round_money(multiply(self.price, self.amount))

    def with_amount(self, amount: int) -> "CartItem":
        return replace(self, amount=amount)

    @classmethod
    def from_product(cls, product: Product, amount: int = 1) -> "CartItem":
        """Create a line item from catalog data."""
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            image_url=product.image_url,
            amount=amount,
        )

    def to_dict(self) -> dict:
        """Convert to the snapshot representation."""
        return {
            "id": self.id,
            "name": self.name,
            "price": str(self.price),
            "imageUrl": self.image_url,
            "amount": self.amount,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartItem":
        """Create from the snapshot representation."""
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            price=parse_money(data["price"]),
            image_url=str(data.get("imageUrl", "")),
            amount=data["amount"],
        )


@dataclass(frozen=True)
class Cart:
    """Insertion-ordered collection of line items with distinct product ids."""
    items: Tuple[CartItem, ...] = field(default_factory=tuple)

    def __post_init__(self):
        items = tuple(self.items)
        ids = [item.id for item in items]
        if len(ids) != len(set(ids)):
            raise ValueError("cart contains duplicate product ids")
        object.__setattr__(self, "items", items)

    def __iter__(self) -> Iterator[CartItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def size(self) -> int:
        """Number of distinct products in the cart."""
        return len(self.items)

    @property
    def total_items(self) -> int:
        """Total number of units in the cart."""
        return sum(item.amount for item in self.items)

    @property
    def total(self) -> Decimal:
        """Sum of all item subtotals."""
        return round_money(sum((item.subtotal for item in self.items), Decimal("0")))

    def find(self, product_id: int) -> Optional[CartItem]:
        """Get line item for a product, None if not in cart."""
        return next((item for item in self.items if item.id == product_id), None)

    def with_item(self, item: CartItem) -> "Cart":
        """New cart with item appended at the end."""
        return Cart(self.items + (item,))

    def with_amount(self, product_id: int, amount: int) -> "Cart":
        """New cart with one item's amount replaced, order preserved."""
        return Cart(tuple(
            item.with_amount(amount) if item.id == product_id else item
            for item in self.items
        ))

    def without(self, product_id: int) -> "Cart":
        """New cart with one product filtered out."""
        return Cart(tuple(item for item in self.items if item.id != product_id))

    def summary(self) -> dict:
        """Totals for display (floats)."""
        return {
            "is_empty": not self.items,
            "size": self.size,
            "total_items": self.total_items,
            "items": [
                {
                    "id": item.id,
                    "name": item.name,
                    "amount": item.amount,
                    "price": to_float(item.price),
                    "subtotal": to_float(item.subtotal),
                }
                for item in self.items
            ],
            "total": to_float(self.total),
        }

    def to_list(self) -> List[dict]:
        """Convert to the snapshot representation (a plain array of items)."""
        return [item.to_dict() for item in self.items]

    @classmethod
    def from_list(cls, data: list) -> "Cart":
        """Create from the snapshot representation."""
        if not isinstance(data, list):
            raise TypeError(f"cart snapshot must be a list, got {type(data).__name__}")
        return cls(tuple(CartItem.from_dict(item) for item in data))
