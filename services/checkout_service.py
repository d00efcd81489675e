"""
Checkout engine.

Runs the checkout pipeline for one cart against one ledger:

    EmptyCart check
      -> subtotal / shipping / total
      -> balance check           (InsufficientBalanceError)
      -> shipment manifest
      -> debit ledger
      -> receipt

The pipeline is strictly sequential with no retries. Every failure happens
before the debit, and nothing reaches the output sink until the debit has
succeeded, so a failed checkout leaves the cart, the ledger and the output
untouched.

The debit is the commit point. The shipment notice and the receipt are
written to the sink after it, and the debit is not rolled back if the sink
raises: the caller then sees the sink's exception with the balance already
reduced, and order.remaining_balance is never returned.

Usage:
    engine = CheckoutEngine(CheckoutSettings(shipping_fee=Decimal("30")), ConsoleSink())
    order = engine.checkout(cart, ledger)          # raises on failure

    result = engine.try_checkout(cart, ledger)     # classified outcome
    if not result.succeeded:
        print(f"Checkout failed: {result.error_message}")
"""

from __future__ import annotations

from decimal import Decimal
from typing import List

from config import CheckoutSettings
from core.exceptions import EmptyCartError, InsufficientBalanceError, ShopCheckoutError
from models.cart import Cart, validate_line
from models.checkout_result import CheckoutResult
from models.order import Order, ReceiptLine
from modules.output import MemorySink, OutputSink
from modules.receipt import format_manifest, format_receipt
from services.ledger import BalanceLedger
from services.shipping_service import ShipmentBuilder
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)


class CheckoutEngine:
    """
    Computes orders and commits them against a balance ledger.

    The engine holds no per-customer state: the cart and the ledger are
    passed to each call, and the shipping fee comes from CheckoutSettings.

    Attributes:
        settings: Shipping fee and re-validation policy
    """

    def __init__(self, settings: CheckoutSettings, sink: OutputSink):
        """
        Initialize the engine.

        Args:
            settings: Checkout settings (flat shipping fee, re-validation)
            sink: Destination for the shipment notice and the receipt
        """
        self.settings = settings
        self._sink = sink

    def checkout(self, cart: Cart, ledger: BalanceLedger) -> Order:
        """
        Check out the cart and debit the ledger.

        Args:
            cart: Cart to check out (not modified)
            ledger: Customer balance to debit

        Returns:
            Order with totals, receipt lines, manifest and remaining balance

        Raises:
            EmptyCartError: If the cart has no lines
            InsufficientStockError, ExpiredProductError: Only when
                settings.revalidate is set and a line no longer passes
            InsufficientBalanceError: If total exceeds the balance
        """
        lines = cart.lines
        if not lines:
            logger.warning("Checkout refused: cart is empty")
            raise EmptyCartError()

        if self.settings.revalidate:
            for line in lines:
                validate_line(line.product, line.quantity, cart.clock)

        subtotal = sum((line.line_total for line in lines), Decimal("0"))
        shipping_fee = self.settings.shipping_fee
        total = subtotal + shipping_fee
        receipt_lines = tuple(
            ReceiptLine(name=line.product.name, quantity=line.quantity, line_total=line.line_total)
            for line in lines
        )

        with ledger.locked():
            balance = ledger.read()
            if total > balance:
                logger.warning(f"Checkout refused: total {total} exceeds balance {balance}")
                raise InsufficientBalanceError(total, balance)

            # Shipment notice is buffered until the debit has gone through
            pending = MemorySink()
            manifest = ShipmentBuilder(pending).build(lines)

            remaining = ledger.debit(total)

        order = Order(
            subtotal=subtotal,
            shipping_fee=shipping_fee,
            total=total,
            receipt_lines=receipt_lines,
            manifest=manifest,
            remaining_balance=remaining,
        )

        for text in pending.drain() + format_receipt(order):
            self._sink.emit(text)

        logger.info(
            f"Checkout complete: {len(lines)} lines, total {total}, "
            f"remaining balance {remaining}"
        )
        return order

    def try_checkout(self, cart: Cart, ledger: BalanceLedger) -> CheckoutResult:
        """
        Check out the cart and report a classified outcome instead of raising.

        On success the result carries the same shipment notice and receipt
        lines that were written to the sink.

        Returns:
            CheckoutResult (COMPLETED or FAILED)
        """
        try:
            order = self.checkout(cart, ledger)
        except ShopCheckoutError as e:
            # Balance errors carry the value seen under the ledger lock
            balance = getattr(e, "balance", None)
            if balance is None:
                balance = ledger.read()
            return CheckoutResult.create_failed(e, balance)

        output: List[str] = format_manifest(order.manifest) if order.manifest else []
        output.extend(format_receipt(order))
        return CheckoutResult.create_completed(order, output)
