"""
Product catalog entries.

A Product is immutable reference data created once by the caller. Its stock
figure is read at add time and never decremented.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Any, Optional, Union


def parse_expiry_date(value: Union[date, str, None]) -> Optional[date]:
    """
    Normalize an expiry date.

    Accepts a date, an ISO 'YYYY-MM-DD' string or None. Empty or malformed
    strings yield None, which the expiry check treats as "not expired".
    """
    if isinstance(value, datetime):
        return value.date()
    if value is None or isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


@dataclass(frozen=True)
class Product:
    """
    A purchasable item.

    unit_weight is only meaningful for shippable products and is 0 by
    convention otherwise.
    """

    name: str
    """Display name, also used in receipts and error messages."""

    unit_price: Decimal
    """Price of one unit."""

    available_stock: int
    """Units on hand when the product was described."""

    is_expirable: bool = False
    """Whether purchase depends on the expiry date."""

    is_shippable: bool = False
    """Whether the product needs physical shipment."""

    unit_weight: Decimal = Decimal("0")
    """Weight of one unit in kg."""

    expiry_date: Union[date, str, None] = None
    """Expiry day (date or ISO string); only read when is_expirable."""

    def __post_init__(self):
        if not self.name:
            raise ValueError("Product name must not be empty")
        object.__setattr__(self, "unit_price", Decimal(str(self.unit_price)))
        object.__setattr__(self, "unit_weight", Decimal(str(self.unit_weight)))
        if not self.unit_price.is_finite() or self.unit_price <= 0:
            raise ValueError(f"Unit price must be a finite positive amount for product: {self.name}")
        if not self.unit_weight.is_finite() or self.unit_weight < 0:
            raise ValueError(f"Unit weight must be a finite non-negative amount for product: {self.name}")
        stock = self.available_stock
        if isinstance(stock, bool) or not isinstance(stock, int) or stock < 0:
            raise ValueError(f"Available stock must be a non-negative integer for product: {self.name}")

    @property
    def expires_on(self) -> Optional[date]:
        """Parsed expiry date, or None when absent or malformed."""
        return parse_expiry_date(self.expiry_date)

    def is_expired(self, today: date) -> bool:
        """
        Check whether the product is expired on the given day.

        Non-expirable products never expire. A product expiring today is
        still purchasable; only dates strictly before today count.
        """
        if not self.is_expirable:
            return False
        expires_on = self.expires_on
        if expires_on is None:
            return False
        return expires_on < today

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        expires_on = self.expires_on
        return {
            "name": self.name,
            "unit_price": str(self.unit_price),
            "available_stock": self.available_stock,
            "is_expirable": self.is_expirable,
            "is_shippable": self.is_shippable,
            "unit_weight": str(self.unit_weight),
            "expiry_date": expires_on.isoformat() if expires_on else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        """Create from dictionary (e.g., a catalog file entry)."""
        return cls(
            name=data.get("name", ""),
            unit_price=Decimal(str(data.get("unit_price", "0"))),
            available_stock=int(data.get("available_stock", 0)),
            is_expirable=bool(data.get("is_expirable", False)),
            is_shippable=bool(data.get("is_shippable", False)),
            unit_weight=Decimal(str(data.get("unit_weight", "0"))),
            expiry_date=data.get("expiry_date"),
        )
