"""Replay the fixed checkout scenarios and print their receipts."""

import logging
import sys
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Callable, List, Optional, TextIO, Tuple

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from config import CheckoutSettings
from core.clock import FixedClock
from core.exceptions import ShopCheckoutError
from logging_config import setup_logging
from models.cart import Cart
from models.product import Product
from modules.output import ConsoleSink
from services.checkout_service import CheckoutEngine
from services.ledger import BalanceLedger

# Day the scenarios are replayed on; Cheese and Biscuits are still in date
SCENARIO_DAY = date(2025, 7, 1)
SEPARATOR = "------------------------------------------------------"


@dataclass
class Scenario:
    title: str
    balance: Decimal
    lines: List[Tuple[Product, int]]


def _scenarios() -> List[Scenario]:
    cheese = Product("Cheese", Decimal("100"), 5, True, True, Decimal("0.2"), "2025-07-06")
    biscuits = Product("Biscuits", Decimal("150"), 3, True, True, Decimal("0.7"), "2025-07-10")
    scratch_card = Product("Scratch Card", Decimal("50"), 10, False, False, Decimal("0"), "")
    milk = Product("Milk", Decimal("50"), 5, True, True, Decimal("1.0"), "2020-01-01")
    chips = Product("Chips", Decimal("20"), 3, False, False, Decimal("0"), "")
    tv = Product("TV", Decimal("300"), 3, False, True, Decimal("5.0"), "")
    phone = Product("Phone", Decimal("200"), 3, False, True, Decimal("0.4"), "")
    speaker = Product("Speaker", Decimal("150"), 2, False, True, Decimal("1.0"), "")
    laptop_bag = Product("Laptop Bag", Decimal("200"), 5, False, True, Decimal("0.8"), "")

    return [
        Scenario("Normal purchase", Decimal("600"), [(cheese, 2), (biscuits, 1), (scratch_card, 1)]),
        Scenario("Expired product", Decimal("500"), [(milk, 1)]),
        Scenario("Quantity > stock", Decimal("500"), [(chips, 5)]),
        Scenario("Insufficient balance", Decimal("50"), [(tv, 1)]),
        Scenario("Empty cart", Decimal("500"), []),
        Scenario("Only scratch card (non-shippable)", Decimal("100"), [(scratch_card, 1)]),
        Scenario("All items are shippable", Decimal("800"), [(phone, 2), (speaker, 1)]),
        Scenario("Exact balance match", Decimal("230"), [(laptop_bag, 1)]),
    ]


def run_scenario(
    scenario: Scenario,
    engine: CheckoutEngine,
    clock: FixedClock,
    emit: Callable[[str], None]
) -> bool:
    """
    Run one scenario on a fresh cart and ledger.

    Returns:
        True if the checkout passed
    """
    ledger = BalanceLedger(scenario.balance)
    cart = Cart(clock)
    try:
        for product, quantity in scenario.lines:
            cart.add(product, quantity)
        engine.checkout(cart, ledger)
    except ShopCheckoutError as e:
        emit(f"Checkout failed: {e.message}")
        return False

    emit("")
    emit(" Checkout passed.")
    return True


def main(stream: Optional[TextIO] = None, day: date = SCENARIO_DAY) -> int:
    """Run every scenario, printing to stream (stdout by default)."""
    setup_logging(log_level=logging.WARNING)

    sink = ConsoleSink(stream)
    engine = CheckoutEngine(CheckoutSettings(shipping_fee=Decimal("30")), sink)
    clock = FixedClock(day)

    for number, scenario in enumerate(_scenarios(), start=1):
        if number > 1:
            sink.emit("")
        sink.emit(f"===== TEST CASE {number}: {scenario.title} =====")
        run_scenario(scenario, engine, clock, sink.emit)
        sink.emit(SEPARATOR)

    return 0


if __name__ == "__main__":
    sys.exit(main())
