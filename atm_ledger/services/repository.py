from __future__ import annotations

import itertools
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import ContextManager, Optional, Protocol

from ..core.errors import NotFoundError, PersistenceFailure, StaleAccountError
from ..domain import Account, AccountType
from .locking import AccountLocks


class AccountRepository(Protocol):
    """Owner-scoped account persistence.

    `find_one_for_customer` is the only lookup by account number and it always
    checks ownership; there is deliberately no bare number lookup.
    """

    locks: AccountLocks

    def find_all_by_customer(self, customer_number: int) -> list[Account]: ...

    def find_one_for_customer(self, customer_number: int, account_number: int) -> Account: ...

    def save(self, account: Account) -> None: ...

    def create(
        self, customer_number: int, account_type: AccountType, initial_minor_units: int
    ) -> int: ...

    def transaction(self) -> ContextManager[None]: ...


class InMemoryAccountRepository:
    """Thread-safe dictionary-backed repository used for development and tests."""

    FIRST_ACCOUNT_NUMBER = 1000

    def __init__(self, locks: Optional[AccountLocks] = None) -> None:
        self.locks = locks or AccountLocks()
        self._lock = threading.RLock()
        self._by_number: dict[int, Account] = {}
        self._by_customer: dict[int, list[int]] = {}
        self._next_number = itertools.count(self.FIRST_ACCOUNT_NUMBER)
        self._floor = self.FIRST_ACCOUNT_NUMBER
        self._staged: Optional[dict[int, Account]] = None

    # Seeding -------------------------------------------------------------
    def seed(self, account: Account) -> None:
        with self._lock:
            if account.account_number in self._by_number:
                raise ValueError(f"account {account.account_number} already exists")
            self._insert(account.copy())
            if account.account_number >= self._floor:
                self._floor = account.account_number + 1
                self._next_number = itertools.count(self._floor)

    # Lookups -------------------------------------------------------------
    def find_all_by_customer(self, customer_number: int) -> list[Account]:
        with self._lock:
            numbers = self._by_customer.get(customer_number, [])
            return [self._by_number[number].copy() for number in numbers]

    def find_one_for_customer(self, customer_number: int, account_number: int) -> Account:
        with self._lock:
            account = self._by_number.get(account_number)
            if account is None or account.customer_number != customer_number:
                raise NotFoundError(
                    f"Account {account_number} not found for customer {customer_number}"
                )
            return account.copy()

    # Mutations -----------------------------------------------------------
    def save(self, account: Account) -> None:
        with self._lock:
            current = self._by_number.get(account.account_number)
            if current is None or current.customer_number != account.customer_number:
                raise PersistenceFailure(
                    f"Account {account.account_number} no longer exists"
                )
            # Only the thread holding the RLock can see a staged transaction.
            staged = self._staged
            if staged is not None and account.account_number in staged:
                expected = staged[account.account_number].version
            else:
                expected = current.version
            if account.version != expected:
                raise StaleAccountError(
                    f"Account {account.account_number} was modified concurrently"
                )

            account.version += 1
            if staged is not None:
                staged[account.account_number] = account.copy()
            else:
                self._by_number[account.account_number] = account.copy()

    def create(
        self, customer_number: int, account_type: AccountType, initial_minor_units: int
    ) -> int:
        with self._lock:
            account_number = next(self._next_number)
            self._floor = account_number + 1
            self._insert(
                Account(
                    customer_number=customer_number,
                    account_number=account_number,
                    account_type=account_type,
                    balance=initial_minor_units,
                )
            )
            return account_number

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Stage every save in the block and apply them together on success."""
        with self._lock:
            if self._staged is not None:
                yield
                return
            self._staged = {}
            try:
                yield
                self._by_number.update(self._staged)
            finally:
                self._staged = None

    def _insert(self, account: Account) -> None:
        self._by_number[account.account_number] = account
        numbers = self._by_customer.setdefault(account.customer_number, [])
        numbers.append(account.account_number)
        numbers.sort()
