"""
Checkout result data models.

A CheckoutResult is the classified outcome of a checkout attempt. Callers
branch on `status` and `error_kind` rather than parsing error text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Dict, Any, List, Optional

from core.exceptions import ErrorKind, ShopCheckoutError
from models.order import Order


class CheckoutStatus(Enum):
    """Outcome of a checkout attempt."""

    COMPLETED = "completed"
    """Manifest built, balance debited, receipt emitted."""

    FAILED = "failed"
    """Nothing changed; see error_kind."""


@dataclass
class CheckoutResult:
    """
    Result of a checkout attempt.

    On success `order` is set and `balance` is the balance after the debit.
    On failure `order` is None and `balance` is the untouched balance.
    """

    status: CheckoutStatus
    """Whether the checkout completed."""

    balance: Decimal
    """Ledger balance after the attempt."""

    order: Optional[Order] = None
    """Computed order (success only)."""

    error_kind: Optional[ErrorKind] = None
    """Failure classification (failure only)."""

    error_message: str = ""
    """Human-readable failure message."""

    details: Dict[str, Any] = field(default_factory=dict)
    """Structured failure context (product name, total, balance)."""

    output: List[str] = field(default_factory=list)
    """Lines emitted to the output sink during the attempt."""

    completed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    """When the attempt finished."""

    @property
    def succeeded(self) -> bool:
        return self.status == CheckoutStatus.COMPLETED

    @classmethod
    def create_completed(
        cls,
        order: Order,
        output: Optional[List[str]] = None
    ) -> "CheckoutResult":
        """
        Create a result for a completed checkout.

        Args:
            order: Order produced by the engine
            output: Manifest and receipt lines that were emitted

        Returns:
            CheckoutResult in COMPLETED status
        """
        return cls(
            status=CheckoutStatus.COMPLETED,
            balance=order.remaining_balance,
            order=order,
            output=list(output or []),
        )

    @classmethod
    def create_failed(
        cls,
        error: ShopCheckoutError,
        balance: Decimal
    ) -> "CheckoutResult":
        """
        Create a result for a failed checkout.

        Args:
            error: The classified exception raised by the engine
            balance: Unchanged ledger balance

        Returns:
            CheckoutResult in FAILED status
        """
        return cls(
            status=CheckoutStatus.FAILED,
            balance=balance,
            error_kind=error.kind,
            error_message=error.message,
            details=dict(error.details),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "status": self.status.value,
            "balance": str(self.balance),
            "order": self.order.to_dict() if self.order else None,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "error_message": self.error_message,
            "details": self.details,
            "output": list(self.output),
            "completed_at": self.completed_at.isoformat(),
        }
