"""
Shopping cart models.

The cart is a plain accumulator of (product, quantity) lines kept in
insertion order. Lines are validated once, when they are added:

    add(product, quantity)
      ├── quantity must be a positive integer      -> ValueError
      ├── quantity <= product.available_stock      -> InsufficientStockError
      └── expirable product not expired today      -> ExpiredProductError

A rejected add leaves the cart exactly as it was.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Any, Iterator, List, Optional, Tuple

from core.clock import Clock, SystemClock
from core.exceptions import ExpiredProductError, InsufficientStockError
from models.product import Product
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)


@dataclass(frozen=True)
class CartLine:
    """A product together with the quantity the customer asked for."""

    product: Product
    quantity: int

    @property
    def line_total(self) -> Decimal:
        """unit_price x quantity."""
        return self.product.unit_price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product": self.product.name,
            "quantity": self.quantity,
            "unit_price": str(self.product.unit_price),
            "line_total": str(self.line_total),
            "is_shippable": self.product.is_shippable,
        }


def validate_line(product: Product, quantity: int, clock: Clock) -> None:
    """
    Run the add-time checks for one line.

    Raises:
        ValueError: If quantity is not a positive integer
        InsufficientStockError: If quantity exceeds available stock
        ExpiredProductError: If the product is expirable and already expired
    """
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValueError(f"Quantity must be a positive integer, got {quantity!r}")

    if quantity > product.available_stock:
        raise InsufficientStockError(product.name, quantity, product.available_stock)

    today = clock.today()
    if product.is_expired(today):
        raise ExpiredProductError(product.name, product.expires_on, today)


class Cart:
    """
    Ordered collection of cart lines for a single customer.

    Stock is informational only: adding a line never changes the product,
    and separate carts are not reconciled against each other.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock or SystemClock()
        self._lines: List[CartLine] = []

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def lines(self) -> Tuple[CartLine, ...]:
        """Lines in insertion order (read-only view)."""
        return tuple(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(tuple(self._lines))

    def add(self, product: Product, quantity: int) -> CartLine:
        """
        Add a product line to the cart.

        Args:
            product: Product to add
            quantity: Requested number of units

        Returns:
            The appended CartLine

        Raises:
            ValueError: If quantity is not a positive integer
            InsufficientStockError: If quantity exceeds product stock
            ExpiredProductError: If the product has expired
        """
        try:
            validate_line(product, quantity, self._clock)
        except (InsufficientStockError, ExpiredProductError) as e:
            logger.warning(f"Rejected {product.name} x{quantity}: {e}")
            raise

        line = CartLine(product=product, quantity=quantity)
        self._lines.append(line)
        logger.info(f"Added {quantity}x {product.name} to cart ({len(self._lines)} lines)")
        return line

    def shippable_lines(self) -> List[CartLine]:
        """Lines whose product needs shipment, in cart order."""
        return [line for line in self._lines if line.product.is_shippable]

    def clear(self) -> None:
        """Discard every line."""
        self._lines.clear()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lines": [line.to_dict() for line in self._lines],
            "line_count": len(self._lines),
        }
