"""
Data models for ShopCheckout.

This module contains dataclasses for:
- Product: Immutable catalog entry
- Cart / CartLine: Mutable line accumulator with add-time validation
- Order, ShipmentManifest, ShipmentLine, ReceiptLine: Checkout output
- CheckoutResult: Classified outcome of a checkout attempt

Product, CartLine and the order models are frozen; only Cart mutates.
"""

from .product import Product, parse_expiry_date
from .cart import Cart, CartLine
from .order import Order, ReceiptLine, ShipmentLine, ShipmentManifest
from .checkout_result import CheckoutResult, CheckoutStatus

__all__ = [
    # Catalog
    "Product",
    "parse_expiry_date",
    # Cart
    "Cart",
    "CartLine",
    # Order models
    "Order",
    "ReceiptLine",
    "ShipmentLine",
    "ShipmentManifest",
    # Result
    "CheckoutResult",
    "CheckoutStatus",
]
