"""
Single-customer shop session.

Bundles the pieces one customer uses between requests: the catalog, the
current cart, the balance ledger and the checkout engine. The HTTP routes
talk only to this object.

Thread Safety:
    - Flask may serve requests on several threads
    - Cart changes and checkouts are serialized by one lock
    - The ledger additionally locks itself for read-check-debit
"""

from __future__ import annotations

import threading
from decimal import Decimal
from typing import Optional

from core.clock import Clock, SystemClock
from models.cart import Cart, CartLine
from models.checkout_result import CheckoutResult
from modules.catalog import Catalog
from services.checkout_service import CheckoutEngine
from services.ledger import BalanceLedger
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)


class ShopSession:
    """
    One customer's cart and balance.

    A successful checkout starts a fresh cart; a failed one keeps the cart
    so the customer can correct it and try again.
    """

    def __init__(
        self,
        catalog: Catalog,
        ledger: BalanceLedger,
        engine: CheckoutEngine,
        clock: Optional[Clock] = None
    ):
        self._catalog = catalog
        self._ledger = ledger
        self._engine = engine
        self._clock = clock or SystemClock()
        self._cart = Cart(self._clock)
        self._lock = threading.Lock()

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def cart(self) -> Cart:
        return self._cart

    @property
    def ledger(self) -> BalanceLedger:
        return self._ledger

    def add_to_cart(self, product_name: str, quantity: int) -> CartLine:
        """
        Add a catalog product to the cart.

        Raises:
            UnknownProductError: If the product is not in the catalog
            ValueError, InsufficientStockError, ExpiredProductError: From Cart.add
        """
        product = self._catalog.get(product_name)
        with self._lock:
            return self._cart.add(product, quantity)

    def discard_cart(self) -> None:
        with self._lock:
            self._cart = Cart(self._clock)
        logger.info("Cart discarded")

    def checkout(self) -> CheckoutResult:
        """Check out the current cart against the ledger."""
        with self._lock:
            result = self._engine.try_checkout(self._cart, self._ledger)
            if result.succeeded:
                self._cart = Cart(self._clock)
        return result

    def top_up(self, amount: Decimal) -> Decimal:
        """Credit the ledger and return the new balance."""
        return self._ledger.credit(amount)
