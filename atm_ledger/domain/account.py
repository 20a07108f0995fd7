from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from ..core.errors import ValidationError


class AccountType(str, Enum):
    CHECKING = "CHECKING"
    SAVINGS = "SAVINGS"

    @classmethod
    def parse(cls, value: "AccountType | str | None") -> "AccountType":
        if value is None:
            raise ValidationError("Account type is required")
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as exc:
            raise ValidationError(f"Unknown account type: {value!r}") from exc


@dataclass
class Account:
    """
    Balance-bearing entity. `balance` is an integer count of minor units.

    Amounts handed to deposit/withdraw are assumed to be validated already;
    withdraw guards the non-negative invariant on its own.
    """
    customer_number: int
    account_number: int
    account_type: AccountType
    balance: int = 0
    version: int = 0

    def __post_init__(self) -> None:
        if self.balance < 0:
            raise ValueError("account balance cannot be negative")

    def deposit(self, amount: int) -> bool:
        self.balance += amount
        return True

    def withdraw(self, amount: int) -> bool:
        if amount > self.balance:
            return False
        self.balance -= amount
        return True

    def copy(self) -> "Account":
        return replace(self)
