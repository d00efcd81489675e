"""
Unit tests for the Checkout Engine.

Covers the end-to-end scenarios (normal purchase, expired product, stock,
insufficient balance, exact balance) and the no-partial-change guarantees.
"""

import threading
from contextlib import contextmanager
from datetime import date
from decimal import Decimal

import pytest

from config import CheckoutSettings
from core.clock import FixedClock
from core.exceptions import (
    EmptyCartError,
    ErrorKind,
    ExpiredProductError,
    InsufficientBalanceError,
    InsufficientStockError,
)
from models.cart import Cart
from models.checkout_result import CheckoutStatus
from models.order import ReceiptLine, ShipmentLine
from models.product import Product
from modules.output import MemorySink
from services.checkout_service import CheckoutEngine
from services.ledger import BalanceLedger


# Fixtures

@pytest.fixture
def clock():
    return FixedClock(date(2025, 7, 1))


@pytest.fixture
def cart(clock):
    return Cart(clock)


@pytest.fixture
def sink():
    return MemorySink()


@pytest.fixture
def engine(sink):
    return CheckoutEngine(CheckoutSettings(shipping_fee=Decimal("30")), sink)


@pytest.fixture
def cheese():
    return Product("Cheese", Decimal("100"), 5, True, True, Decimal("0.2"), "2025-07-06")


@pytest.fixture
def biscuits():
    return Product("Biscuits", Decimal("150"), 3, True, True, Decimal("0.7"), "2025-07-10")


@pytest.fixture
def scratch_card():
    return Product("Scratch Card", Decimal("50"), 10)


# Scenarios

class TestCheckoutScenarios:
    """Fixed purchase scenarios."""

    def test_normal_purchase(self, engine, sink, cart, cheese, biscuits, scratch_card):
        ledger = BalanceLedger(Decimal("600"))
        cart.add(cheese, 2)
        cart.add(biscuits, 1)
        cart.add(scratch_card, 1)

        order = engine.checkout(cart, ledger)

        assert order.subtotal == Decimal("400")
        assert order.shipping_fee == Decimal("30")
        assert order.total == Decimal("430")
        assert order.remaining_balance == Decimal("170")
        assert ledger.read() == Decimal("170")
        assert order.shipment_lines == (
            ShipmentLine("Cheese", 2, Decimal("0.4")),
            ShipmentLine("Biscuits", 1, Decimal("0.7")),
        )
        assert order.manifest.total_weight == Decimal("1.1")
        assert order.receipt_lines == (
            ReceiptLine("Cheese", 2, Decimal("200")),
            ReceiptLine("Biscuits", 1, Decimal("150")),
            ReceiptLine("Scratch Card", 1, Decimal("50")),
        )
        assert sink.lines == [
            "** Shipment notice **",
            "2x Cheese     0.4kg",
            "1x Biscuits     0.7kg",
            "Total package weight 1.1kg",
            "",
            "** Checkout receipt **",
            "2x Cheese 200",
            "1x Biscuits 150",
            "1x Scratch Card 50",
            "----------------------",
            "Subtotal 400",
            "Shipping 30",
            "Amount 430",
            "Customer Remaining Balance 170",
        ]

    def test_expired_product_then_empty_cart(self, engine, sink, cart):
        ledger = BalanceLedger(Decimal("500"))
        milk = Product("Milk", Decimal("50"), 5, True, True, Decimal("1.0"), "2020-01-01")

        with pytest.raises(ExpiredProductError):
            cart.add(milk, 1)
        with pytest.raises(EmptyCartError):
            engine.checkout(cart, ledger)

        assert cart.is_empty
        assert ledger.read() == Decimal("500")
        assert sink.lines == []

    def test_quantity_above_stock(self, cart):
        chips = Product("Chips", Decimal("20"), 3)

        with pytest.raises(InsufficientStockError) as exc_info:
            cart.add(chips, 5)

        assert "Chips" in exc_info.value.message
        assert cart.is_empty

    def test_insufficient_balance(self, engine, sink, cart):
        ledger = BalanceLedger(Decimal("50"))
        cart.add(Product("TV", Decimal("300"), 3, is_shippable=True, unit_weight=Decimal("5.0")), 1)

        with pytest.raises(InsufficientBalanceError) as exc_info:
            engine.checkout(cart, ledger)

        error = exc_info.value
        assert error.total == Decimal("330")
        assert error.balance == Decimal("50")
        assert str(error) == "Total 330 is greater than balance 50"
        assert ledger.read() == Decimal("50")
        assert len(cart) == 1
        assert sink.lines == []

    def test_exact_balance(self, engine, cart):
        ledger = BalanceLedger(Decimal("230"))
        cart.add(Product("Laptop Bag", Decimal("200"), 5, is_shippable=True, unit_weight=Decimal("0.8")), 1)

        order = engine.checkout(cart, ledger)

        assert order.total == Decimal("230")
        assert ledger.read() == Decimal("0")

    def test_all_shippable(self, engine, cart):
        ledger = BalanceLedger(Decimal("800"))
        cart.add(Product("Phone", Decimal("200"), 3, is_shippable=True, unit_weight=Decimal("0.4")), 2)
        cart.add(Product("Speaker", Decimal("150"), 2, is_shippable=True, unit_weight=Decimal("1.0")), 1)

        order = engine.checkout(cart, ledger)

        assert order.total == Decimal("580")
        assert order.manifest.total_weight == Decimal("1.8")
        assert ledger.read() == Decimal("220")


# Properties

class TestCheckoutProperties:
    """Pipeline ordering and no-partial-change guarantees."""

    def test_empty_cart_has_no_side_effects(self, engine, sink, cart):
        ledger = BalanceLedger(Decimal("500"))

        with pytest.raises(EmptyCartError) as exc_info:
            engine.checkout(cart, ledger)

        assert exc_info.value.kind == ErrorKind.EMPTY_CART
        assert ledger.read() == Decimal("500")
        assert sink.lines == []

    def test_no_shippable_lines_means_no_notice(self, engine, sink, cart, scratch_card):
        ledger = BalanceLedger(Decimal("100"))
        cart.add(scratch_card, 1)

        order = engine.checkout(cart, ledger)

        assert order.manifest is None
        assert order.shipment_lines == ()
        assert not order.requires_shipping
        assert "** Shipment notice **" not in sink.lines
        assert sink.lines[1] == "** Checkout receipt **"
        assert ledger.read() == Decimal("20")

    def test_cart_is_not_modified(self, engine, cart, cheese):
        cart.add(cheese, 2)
        before = cart.lines

        engine.checkout(cart, BalanceLedger(Decimal("600")))

        assert cart.lines == before

    def test_shipping_fee_comes_from_settings(self, sink, cart, scratch_card):
        engine = CheckoutEngine(CheckoutSettings(shipping_fee=Decimal("12.50")), sink)
        cart.add(scratch_card, 2)

        order = engine.checkout(cart, BalanceLedger(Decimal("1000")))

        assert order.total == Decimal("112.50")

    def test_each_checkout_debits_once(self, engine, cart, scratch_card):
        ledger = BalanceLedger(Decimal("200"))
        cart.add(scratch_card, 1)

        engine.checkout(cart, ledger)
        engine.checkout(cart, ledger)

        assert ledger.read() == Decimal("40")

    def test_no_revalidation_by_default(self, engine, clock, cart, cheese):
        cart.add(cheese, 1)
        clock.set(date(2025, 8, 1))

        order = engine.checkout(cart, BalanceLedger(Decimal("600")))

        assert order.total == Decimal("130")

    def test_revalidation_when_enabled(self, sink, clock, cart, cheese):
        engine = CheckoutEngine(CheckoutSettings(shipping_fee=Decimal("30"), revalidate=True), sink)
        ledger = BalanceLedger(Decimal("600"))
        cart.add(cheese, 1)
        clock.set(date(2025, 8, 1))

        with pytest.raises(ExpiredProductError):
            engine.checkout(cart, ledger)

        assert ledger.read() == Decimal("600")
        assert sink.lines == []

    def test_concurrent_checkouts_share_one_balance(self, engine, clock, cheese, biscuits, scratch_card):
        ledger = BalanceLedger(Decimal("600"))
        carts = []
        for _ in range(2):
            cart = Cart(clock)
            cart.add(cheese, 2)
            cart.add(biscuits, 1)
            cart.add(scratch_card, 1)
            carts.append(cart)

        results = []
        results_lock = threading.Lock()

        def run(c):
            result = engine.try_checkout(c, ledger)
            with results_lock:
                results.append(result)

        threads = [threading.Thread(target=run, args=(c,)) for c in carts]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        statuses = sorted(r.status.value for r in results)
        assert statuses == ["completed", "failed"]
        assert ledger.read() == Decimal("170")


class TestTryCheckout:
    """Classified outcomes."""

    def test_completed_result(self, engine, cart, cheese):
        cart.add(cheese, 1)

        result = engine.try_checkout(cart, BalanceLedger(Decimal("600")))

        assert result.succeeded
        assert result.status == CheckoutStatus.COMPLETED
        assert result.balance == Decimal("470")
        assert result.order.total == Decimal("130")
        assert result.output[0] == "** Shipment notice **"
        assert result.output[-1] == "Customer Remaining Balance 470"

    def test_failed_result_carries_kind_and_numbers(self, engine, cart, cheese):
        cart.add(cheese, 5)

        result = engine.try_checkout(cart, BalanceLedger(Decimal("100")))

        assert not result.succeeded
        assert result.error_kind == ErrorKind.INSUFFICIENT_BALANCE
        assert result.details["total"] == "530"
        assert result.details["balance"] == "100"
        assert result.balance == Decimal("100")
        assert result.order is None

    def test_failed_result_reports_balance_seen_at_check(self, engine, cart, cheese):
        class TopUpAfterRelease(BalanceLedger):
            """Simulates a concurrent top-up landing right after the lock is released."""

            @contextmanager
            def locked(self):
                try:
                    with super().locked() as ledger:
                        yield ledger
                finally:
                    self.credit(Decimal("1000"))

        ledger = TopUpAfterRelease(Decimal("100"))
        cart.add(cheese, 5)

        result = engine.try_checkout(cart, ledger)

        assert result.error_kind == ErrorKind.INSUFFICIENT_BALANCE
        assert result.balance == Decimal("100")
        assert result.details["balance"] == "100"
        assert ledger.read() == Decimal("1100")

    def test_receipt_sink_failure_happens_after_debit(self, cart, scratch_card):
        class BrokenSink:
            def emit(self, line):
                raise OSError("sink closed")

        engine = CheckoutEngine(CheckoutSettings(shipping_fee=Decimal("30")), BrokenSink())
        ledger = BalanceLedger(Decimal("100"))
        cart.add(scratch_card, 1)

        with pytest.raises(OSError):
            engine.checkout(cart, ledger)

        assert ledger.read() == Decimal("20")

    def test_empty_cart_result(self, engine, cart):
        result = engine.try_checkout(cart, BalanceLedger(Decimal("10")))

        assert result.error_kind == ErrorKind.EMPTY_CART
        assert result.error_message == "Cart is empty"

    def test_to_dict(self, engine, cart, scratch_card):
        cart.add(scratch_card, 1)

        data = engine.try_checkout(cart, BalanceLedger(Decimal("100"))).to_dict()

        assert data["status"] == "completed"
        assert data["balance"] == "20"
        assert data["order"]["total"] == "80"
        assert data["order"]["manifest"] is None
        assert data["error_kind"] is None
