"""
Order data models.

These models are produced fresh by every successful checkout and are never
persisted:

    Order
    ├── receipt_lines   - one ReceiptLine per cart line, in cart order
    ├── subtotal, shipping_fee, total
    └── manifest        - ShipmentManifest, or None when nothing ships

All models are frozen; a checkout hands them to the caller as a snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Any, Optional, Tuple


@dataclass(frozen=True)
class ShipmentLine:
    """
    One shippable cart line.

    Exists only for the duration of a checkout and in the Order it produces.
    """

    name: str
    """Product name."""

    quantity: int
    """Units to ship."""

    total_weight: Decimal
    """unit_weight x quantity, in kg."""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "total_weight": str(self.total_weight),
        }


@dataclass(frozen=True)
class ShipmentManifest:
    """Ordered shipment lines and their aggregate weight."""

    lines: Tuple[ShipmentLine, ...]
    total_weight: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lines": [line.to_dict() for line in self.lines],
            "total_weight": str(self.total_weight),
        }


@dataclass(frozen=True)
class ReceiptLine:
    """Receipt entry for one cart line."""

    name: str
    quantity: int
    line_total: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "line_total": str(self.line_total),
        }


@dataclass(frozen=True)
class Order:
    """
    Computed result of a successful checkout.

    remaining_balance is the ledger balance right after the debit.
    """

    subtotal: Decimal
    """Sum of unit_price x quantity over all lines."""

    shipping_fee: Decimal
    """Flat shipping surcharge."""

    total: Decimal
    """subtotal + shipping_fee, the amount debited."""

    receipt_lines: Tuple[ReceiptLine, ...] = field(default_factory=tuple)
    """Per-line receipt entries in cart order."""

    manifest: Optional[ShipmentManifest] = None
    """Shipment manifest; None when no line is shippable."""

    remaining_balance: Decimal = Decimal("0")
    """Balance left after the debit."""

    @property
    def shipment_lines(self) -> Tuple[ShipmentLine, ...]:
        """Shipment lines, empty when nothing ships."""
        return self.manifest.lines if self.manifest else ()

    @property
    def requires_shipping(self) -> bool:
        return self.manifest is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "receipt_lines": [line.to_dict() for line in self.receipt_lines],
            "subtotal": str(self.subtotal),
            "shipping_fee": str(self.shipping_fee),
            "total": str(self.total),
            "remaining_balance": str(self.remaining_balance),
            "manifest": self.manifest.to_dict() if self.manifest else None,
        }
