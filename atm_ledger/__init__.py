"""Account ledger core: balances in minor units, owner-scoped repositories and
an AccountService that validates, serializes and persists every mutation."""

from .core.errors import (
    InsufficientFundsError,
    LedgerError,
    NotFoundError,
    PersistenceFailure,
    StaleAccountError,
    ValidationError,
)
from .domain import Account, AccountType
from .services import AccountService, InMemoryAccountRepository, TransferResult

__all__ = [
    "Account",
    "AccountService",
    "AccountType",
    "InMemoryAccountRepository",
    "InsufficientFundsError",
    "LedgerError",
    "NotFoundError",
    "PersistenceFailure",
    "StaleAccountError",
    "TransferResult",
    "ValidationError",
]
