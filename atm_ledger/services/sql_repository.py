from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..core.errors import NotFoundError, PersistenceFailure, StaleAccountError
from ..domain import Account, AccountType
from ..models import CustomerAccountModel
from .locking import AccountLocks


logger = logging.getLogger(__name__)


class SqlAccountRepository:
    """Account repository on top of a SQLModel session.

    Balances are stored as integer minor units. `save` is a conditional update
    on the row version, so a writer holding a stale copy never overwrites a
    newer balance.
    """

    def __init__(self, session: Session, locks: Optional[AccountLocks] = None) -> None:
        self.session = session
        self.locks = locks or AccountLocks()
        self._in_transaction = False

    # Lookups ------------------------------------------------------------
    def find_all_by_customer(self, customer_number: int) -> list[Account]:
        stmt = (
            select(CustomerAccountModel)
            .where(CustomerAccountModel.customer_number == customer_number)
            .order_by(CustomerAccountModel.account_number)
        )
        with self._translate_errors(f"load accounts for customer {customer_number}"):
            return [self._to_domain(row) for row in self.session.exec(stmt)]

    def find_one_for_customer(self, customer_number: int, account_number: int) -> Account:
        stmt = (
            select(CustomerAccountModel)
            .where(CustomerAccountModel.customer_number == customer_number)
            .where(CustomerAccountModel.account_number == account_number)
        )
        with self._translate_errors(f"load account {account_number}"):
            row = self.session.exec(stmt).first()
        if row is None:
            raise NotFoundError(
                f"Account {account_number} not found for customer {customer_number}"
            )
        return self._to_domain(row)

    # Mutations ----------------------------------------------------------
    def save(self, account: Account) -> None:
        stmt = (
            update(CustomerAccountModel)
            .where(CustomerAccountModel.customer_number == account.customer_number)
            .where(CustomerAccountModel.account_number == account.account_number)
            .where(CustomerAccountModel.version == account.version)
            .values(balance=account.balance, version=account.version + 1)
        )
        with self._translate_errors(f"persist account {account.account_number}"):
            result = self.session.execute(stmt)
            if result.rowcount == 0:
                self._raise_for_missed_update(account)
            self._commit()
        account.version += 1

    def create(
        self, customer_number: int, account_type: AccountType, initial_minor_units: int
    ) -> int:
        row = CustomerAccountModel(
            customer_number=customer_number,
            account_type=account_type.value,
            balance=initial_minor_units,
        )
        with self._translate_errors(f"create account for customer {customer_number}"):
            self.session.add(row)
            self.session.flush()
            account_number = row.account_number
            self._commit()
        logger.info(
            "account.created",
            extra={
                "customer_number": customer_number,
                "account_number": account_number,
                "account_type": account_type.value,
            },
        )
        return account_number

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Run every save in the block inside one database transaction."""
        if self._in_transaction:
            yield
            return
        self._in_transaction = True
        try:
            yield
            with self._translate_errors("commit transaction"):
                self.session.commit()
        except BaseException:
            self.session.rollback()
            raise
        finally:
            self._in_transaction = False

    # Helpers ------------------------------------------------------------
    def _commit(self) -> None:
        if not self._in_transaction:
            self.session.commit()

    def _raise_for_missed_update(self, account: Account) -> None:
        self.session.rollback()
        exists = self.session.exec(
            select(CustomerAccountModel.account_number)
            .where(CustomerAccountModel.customer_number == account.customer_number)
            .where(CustomerAccountModel.account_number == account.account_number)
        ).first()
        if exists is None:
            raise PersistenceFailure(f"Account {account.account_number} no longer exists")
        raise StaleAccountError(
            f"Account {account.account_number} was modified concurrently"
        )

    @contextmanager
    def _translate_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except (SQLAlchemyError, OverflowError) as exc:
            logger.warning("account.persistence_failed", extra={"action": action})
            if not self._in_transaction:
                self.session.rollback()
            raise PersistenceFailure(f"Failed to {action}") from exc

    @staticmethod
    def _to_domain(row: CustomerAccountModel) -> Account:
        return Account(
            customer_number=row.customer_number,
            account_number=row.account_number,
            account_type=AccountType(row.account_type),
            balance=row.balance,
            version=row.version,
        )
