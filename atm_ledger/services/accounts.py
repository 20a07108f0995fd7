from __future__ import annotations

from decimal import Decimal
from typing import NamedTuple, Optional

from ..core.errors import InsufficientFundsError, ValidationError
from ..domain import (
    MAX_MINOR_UNITS,
    Account,
    AccountType,
    from_minor_units,
    require_non_negative_minor_units,
    require_positive_minor_units,
)
from ..domain.money import AmountLike
from .repository import AccountRepository


class TransferResult(NamedTuple):
    source_balance: Decimal
    destination_balance: Decimal


class AccountService:
    """Validated, owner-aware mutation of accounts.

    Each mutating call holds the per-account lock(s) from the repository while
    it loads, applies the domain change and persists, so mutations of one
    account never interleave. Balances come back as major-unit Decimals.
    """

    def __init__(
        self,
        repository: AccountRepository,
        *,
        allow_cross_customer_transfers: bool = False,
    ) -> None:
        if repository is None:
            raise ValueError("accounts repository required")
        self.accounts = repository
        self.allow_cross_customer_transfers = allow_cross_customer_transfers

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def list_accounts(self, customer_number: int) -> list[Account]:
        return self.accounts.find_all_by_customer(customer_number)

    def get_account(self, customer_number: int, account_number: int) -> Account:
        return self.accounts.find_one_for_customer(customer_number, account_number)

    def get_balance(self, customer_number: int, account_number: int) -> Decimal:
        return from_minor_units(self.get_account(customer_number, account_number).balance)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def deposit(self, customer_number: int, account_number: int, amount: AmountLike) -> Decimal:
        minor = require_positive_minor_units(amount)
        with self.accounts.locks.hold(account_number):
            account = self.accounts.find_one_for_customer(customer_number, account_number)
            self._require_room_for(account, minor)
            if not account.deposit(minor):
                raise ValidationError("Deposit rejected")
            self.accounts.save(account)
            return from_minor_units(account.balance)

    def withdraw(self, customer_number: int, account_number: int, amount: AmountLike) -> Decimal:
        minor = require_positive_minor_units(amount)
        with self.accounts.locks.hold(account_number):
            account = self.accounts.find_one_for_customer(customer_number, account_number)
            if not account.withdraw(minor):
                raise InsufficientFundsError("Insufficient funds")
            self.accounts.save(account)
            return from_minor_units(account.balance)

    def transfer(
        self,
        customer_number: int,
        from_account: int,
        to_account: int,
        amount: AmountLike,
        *,
        to_customer: Optional[int] = None,
    ) -> TransferResult:
        minor = require_positive_minor_units(amount)
        if from_account == to_account:
            raise ValidationError("Cannot transfer to the same account")

        destination_owner = customer_number if to_customer is None else to_customer
        if destination_owner != customer_number and not self.allow_cross_customer_transfers:
            raise ValidationError("Transfers to another customer are not allowed")

        with self.accounts.locks.hold(from_account, to_account):
            source = self.accounts.find_one_for_customer(customer_number, from_account)
            destination = self.accounts.find_one_for_customer(destination_owner, to_account)

            if not source.withdraw(minor):
                raise InsufficientFundsError("Insufficient funds")
            self._credit_or_compensate(source, destination, minor)

            with self.accounts.transaction():
                self.accounts.save(source)
                self.accounts.save(destination)

            return TransferResult(
                from_minor_units(source.balance),
                from_minor_units(destination.balance),
            )

    def open_account(
        self,
        customer_number: int,
        account_type: "AccountType | str | None",
        initial_deposit: AmountLike,
    ) -> int:
        kind = AccountType.parse(account_type)
        initial_minor = require_non_negative_minor_units(initial_deposit)
        return self.accounts.create(customer_number, kind, initial_minor)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _require_room_for(account: Account, minor: int) -> None:
        if account.balance + minor > MAX_MINOR_UNITS:
            raise ValidationError("Deposit would exceed the maximum balance")

    @staticmethod
    def _credit_or_compensate(source: Account, destination: Account, minor: int) -> None:
        # Nothing is persisted yet; put the debited amount back before failing.
        try:
            AccountService._require_room_for(destination, minor)
            credited = destination.deposit(minor)
        except Exception:
            source.deposit(minor)
            raise
        if not credited:
            source.deposit(minor)
            raise ValidationError("Destination rejected the deposit")
