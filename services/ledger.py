"""
Balance ledger for a single customer.

The ledger tracks one Decimal balance. It is owned by whoever creates it
(the app factory, a test, the scenario driver) and handed to the checkout
engine explicitly, so independent customers never share state.

Thread Safety:
    - Every read and write takes an RLock
    - locked() lets the checkout engine hold the lock across its
      read-check-debit sequence so two checkouts cannot both pass the
      sufficiency check against the same stale balance

Usage:
    ledger = BalanceLedger(Decimal("600"))

    with ledger.locked():
        if total <= ledger.read():
            ledger.debit(total)
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from decimal import Decimal
from typing import Iterator, Union

from core.exceptions import OverdraftError
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

Amount = Union[Decimal, int, str]


def _to_decimal(amount: Amount) -> Decimal:
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    if not value.is_finite():
        raise ValueError(f"Amount must be a finite number, got {value}")
    return value


class BalanceLedger:
    """
    Customer balance with checked debits.

    debit() refuses to go below zero and raises OverdraftError, even though
    the checkout engine already validates sufficiency before calling it.
    """

    def __init__(self, opening_balance: Amount = Decimal("0")):
        """
        Initialize the ledger.

        Args:
            opening_balance: Starting funds (must not be negative)

        Raises:
            ValueError: If opening_balance is negative or not finite
        """
        balance = _to_decimal(opening_balance)
        if balance < 0:
            raise ValueError(f"Opening balance must not be negative, got {balance}")

        self._balance = balance
        self._lock = threading.RLock()

    def read(self) -> Decimal:
        """Current balance. No side effects."""
        with self._lock:
            return self._balance

    @contextmanager
    def locked(self) -> Iterator["BalanceLedger"]:
        """Hold the ledger lock for a multi-step update."""
        with self._lock:
            yield self

    def debit(self, amount: Amount) -> Decimal:
        """
        Reduce the balance by amount.

        Args:
            amount: Non-negative amount to take

        Returns:
            New balance

        Raises:
            ValueError: If amount is negative or not finite
            OverdraftError: If amount exceeds the current balance
        """
        value = _to_decimal(amount)
        if value < 0:
            raise ValueError(f"Debit amount must not be negative, got {value}")

        with self._lock:
            if value > self._balance:
                logger.warning(f"Refused debit of {value}: balance is {self._balance}")
                raise OverdraftError(value, self._balance)
            self._balance -= value
            logger.debug(f"Debited {value}, balance now {self._balance}")
            return self._balance

    def credit(self, amount: Amount) -> Decimal:
        """
        Top up the balance.

        Raises:
            ValueError: If amount is not positive or not finite
        """
        value = _to_decimal(amount)
        if value <= 0:
            raise ValueError(f"Credit amount must be positive, got {value}")

        with self._lock:
            self._balance += value
            logger.info(f"Credited {value}, balance now {self._balance}")
            return self._balance

    def __repr__(self) -> str:
        return f"BalanceLedger({self.read()})"
