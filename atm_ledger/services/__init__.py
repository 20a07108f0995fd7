from .accounts import AccountService, TransferResult
from .auth import Authenticator, InMemoryAuthenticator, SqlAuthenticator
from .locking import AccountLocks
from .repository import AccountRepository, InMemoryAccountRepository
from .sql_repository import SqlAccountRepository

__all__ = [
    "AccountLocks",
    "AccountRepository",
    "AccountService",
    "Authenticator",
    "InMemoryAccountRepository",
    "InMemoryAuthenticator",
    "SqlAccountRepository",
    "SqlAuthenticator",
    "TransferResult",
]
