from __future__ import annotations


class LedgerError(Exception):
    """Base class for every structured failure surfaced by the ledger core."""

    kind = "ledger_error"
    retryable = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "message": self.message}


class ValidationError(LedgerError):
    """Raised for malformed requests: bad amounts, missing type, self-transfer."""

    kind = "validation"


class NotFoundError(LedgerError):
    """Raised when an account is missing or owned by another customer."""

    kind = "not_found"


class InsufficientFundsError(LedgerError):
    """Raised when a withdrawal/transfer would drop balance below zero."""

    kind = "insufficient_funds"


class PersistenceFailure(LedgerError):
    """Raised when durable state could not be read or written."""

    kind = "persistence"
    retryable = True


class StaleAccountError(PersistenceFailure):
    """Raised when an account changed underneath the caller since it was loaded."""


class AuthenticationError(Exception):
    """Raised when a customer number / PIN pair does not verify."""
