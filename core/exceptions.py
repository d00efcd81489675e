"""
Custom exceptions for ShopCheckout.

Exception Hierarchy:
    ShopCheckoutError (base)
    ├── CartError                    - Line rejected at add time
    │   ├── InsufficientStockError   - Requested quantity exceeds stock
    │   └── ExpiredProductError      - Expirable product past its expiry date
    ├── CheckoutError                - Checkout aborted, nothing changed
    │   ├── EmptyCartError           - No lines to check out
    │   └── InsufficientBalanceError - Total exceeds customer balance
    ├── LedgerError
    │   └── OverdraftError           - Debit larger than the tracked balance
    └── UnknownProductError          - Name not present in the catalog

Every exception carries an ErrorKind so callers can branch on the
classification instead of parsing the message text.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Dict, Any


class ErrorKind(Enum):
    """Classification of a failed shop operation."""

    INSUFFICIENT_STOCK = "insufficient_stock"
    EXPIRED_PRODUCT = "expired_product"
    EMPTY_CART = "empty_cart"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    OVERDRAFT = "overdraft"
    UNKNOWN_PRODUCT = "unknown_product"


class ShopCheckoutError(Exception):
    """
    Base exception for all ShopCheckout errors.

    All custom exceptions inherit from this class, allowing callers to catch
    every shop failure with a single except clause if needed.
    """

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with structured context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# =============================================================================
# CART ERRORS - raised by Cart.add, the cart is left untouched
# =============================================================================

class CartError(ShopCheckoutError):
    """Base class for rejected cart lines."""

    def __init__(self, message: str, product_name: str, details: Optional[Dict[str, Any]] = None):
        error_details = details or {}
        error_details["product_name"] = product_name
        super().__init__(message, error_details)
        self.product_name = product_name


class InsufficientStockError(CartError):
    """
    Requested quantity is larger than the product's available stock.

    Stock is informational only; it is compared but never decremented.
    """

    kind = ErrorKind.INSUFFICIENT_STOCK

    def __init__(self, product_name: str, requested: int, available: int):
        message = f"Invalid quantity for product: {product_name}"
        details = {
            "requested": requested,
            "available": available,
        }
        super().__init__(message, product_name, details)
        self.requested = requested
        self.available = available


class ExpiredProductError(CartError):
    """An expirable product's expiry date is strictly before today."""

    kind = ErrorKind.EXPIRED_PRODUCT

    def __init__(self, product_name: str, expiry_date: date, today: date):
        message = f"{product_name} is expired."
        details = {
            "expiry_date": expiry_date.isoformat(),
            "today": today.isoformat(),
        }
        super().__init__(message, product_name, details)
        self.expiry_date = expiry_date
        self.today = today


# =============================================================================
# CHECKOUT ERRORS - raised by CheckoutEngine.checkout, no state is changed
# =============================================================================

class CheckoutError(ShopCheckoutError):
    """Base class for checkout failures."""


class EmptyCartError(CheckoutError):
    """Checkout was requested for a cart without lines."""

    kind = ErrorKind.EMPTY_CART

    def __init__(self):
        super().__init__("Cart is empty")


class InsufficientBalanceError(CheckoutError):
    """
    The order total is larger than the customer's balance.

    Carries the exact computed total and the pre-checkout balance.
    """

    kind = ErrorKind.INSUFFICIENT_BALANCE

    def __init__(self, total: Decimal, balance: Decimal):
        message = f"Total {total} is greater than balance {balance}"
        details = {
            "total": str(total),
            "balance": str(balance),
            "resolution": "Reduce cart quantities or top up the balance",
        }
        super().__init__(message, details)
        self.total = total
        self.balance = balance


# =============================================================================
# LEDGER ERRORS
# =============================================================================

class LedgerError(ShopCheckoutError):
    """Base class for balance ledger failures."""


class OverdraftError(LedgerError):
    """A debit would take the ledger below zero."""

    kind = ErrorKind.OVERDRAFT

    def __init__(self, amount: Decimal, balance: Decimal):
        message = f"Debit {amount} exceeds balance {balance}"
        details = {
            "amount": str(amount),
            "balance": str(balance),
        }
        super().__init__(message, details)
        self.amount = amount
        self.balance = balance


# =============================================================================
# CATALOG ERRORS
# =============================================================================

class UnknownProductError(ShopCheckoutError):
    """No catalog entry has the requested name."""

    kind = ErrorKind.UNKNOWN_PRODUCT

    def __init__(self, product_name: str):
        super().__init__(f"Unknown product: {product_name}", {"product_name": product_name})
        self.product_name = product_name
