from __future__ import annotations

from collections.abc import Generator
from functools import lru_cache

from fastapi import Depends, Header
from sqlmodel import Session

from ..services import (
    AccountLocks,
    AccountRepository,
    AccountService,
    Authenticator,
    InMemoryAccountRepository,
    InMemoryAuthenticator,
    SqlAccountRepository,
    SqlAuthenticator,
)
from ..services.seed import seed_demo_data
from .config import get_settings
from .db import get_session
from .errors import AuthenticationError


@lru_cache()
def get_account_locks() -> AccountLocks:
    return AccountLocks()


@lru_cache()
def get_memory_store() -> tuple[InMemoryAccountRepository, InMemoryAuthenticator]:
    repository = InMemoryAccountRepository(get_account_locks())
    authenticator = InMemoryAuthenticator()
    if get_settings().seed_demo_data:
        seed_demo_data(repository, authenticator)
    return repository, authenticator


def _sql_session() -> Generator[Session | None, None, None]:
    if get_settings().backend != "sql":
        yield None
        return
    yield from get_session()


def get_account_repository(
    session: Session | None = Depends(_sql_session),
) -> AccountRepository:
    if session is None:
        return get_memory_store()[0]
    return SqlAccountRepository(session, get_account_locks())


def get_authenticator(session: Session | None = Depends(_sql_session)) -> Authenticator:
    if session is None:
        return get_memory_store()[1]
    return SqlAuthenticator(session)


def get_account_service(
    repository: AccountRepository = Depends(get_account_repository),
) -> AccountService:
    settings = get_settings()
    return AccountService(
        repository,
        allow_cross_customer_transfers=settings.allow_cross_customer_transfers,
    )


def get_customer_number(
    customer_number: int = Header(..., alias="X-Customer-Number"),
    pin: str = Header(..., alias="X-Pin"),
    authenticator: Authenticator = Depends(get_authenticator),
) -> int:
    if not authenticator.verify(customer_number, pin):
        raise AuthenticationError("Wrong customer number or PIN")
    return customer_number
