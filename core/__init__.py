"""
Core module for ShopCheckout.

Contains fundamental infrastructure components:
- exceptions: Custom exception hierarchy and error classification
- clock: Injectable calendar clocks for expiry checks
"""

from .exceptions import (
    ErrorKind,
    ShopCheckoutError,
    CartError,
    InsufficientStockError,
    ExpiredProductError,
    CheckoutError,
    EmptyCartError,
    InsufficientBalanceError,
    LedgerError,
    OverdraftError,
    UnknownProductError,
)
from .clock import Clock, SystemClock, FixedClock

__all__ = [
    "ErrorKind",
    "ShopCheckoutError",
    "CartError",
    "InsufficientStockError",
    "ExpiredProductError",
    "CheckoutError",
    "EmptyCartError",
    "InsufficientBalanceError",
    "LedgerError",
    "OverdraftError",
    "UnknownProductError",
    "Clock",
    "SystemClock",
    "FixedClock",
]
