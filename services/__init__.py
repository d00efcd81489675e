"""
Services layer for ShopCheckout.

This module contains the business logic services:
- BalanceLedger: Locked customer balance with checked debits
- ShipmentBuilder: Manifest for the shippable cart lines
- CheckoutEngine: Validation, totals, debit and receipt for one cart
- ShopSession: One customer's catalog, cart and ledger for the HTTP layer

Ownership:
    Caller (app factory / driver / test)
    ├── Cart            (one per order)
    ├── BalanceLedger   (one per customer)
    └── CheckoutEngine  (stateless apart from its settings and sink)
"""

from .ledger import BalanceLedger
from .shipping_service import ShipmentBuilder, build_manifest
from .checkout_service import CheckoutEngine
from .shop_session import ShopSession

__all__ = [
    "BalanceLedger",
    "ShipmentBuilder",
    "build_manifest",
    "CheckoutEngine",
    "ShopSession",
]
