from __future__ import annotations

from sqlmodel import Session, select

from ..domain import Account, AccountType, to_minor_units
from ..models import CustomerAccountModel, CustomerPinModel
from .auth import InMemoryAuthenticator
from .repository import InMemoryAccountRepository

DEMO_PINS = {952141: 191904, 989947: 717976}

DEMO_ACCOUNTS = (
    (952141, 1001, AccountType.CHECKING, "500.00"),
    (952141, 1002, AccountType.SAVINGS, "1200.00"),
    (989947, 2001, AccountType.CHECKING, "250.00"),
)


def seed_demo_data(
    repository: InMemoryAccountRepository, authenticator: InMemoryAuthenticator
) -> None:
    """Load the development customers and accounts."""
    for customer_number, pin in DEMO_PINS.items():
        authenticator.seed(customer_number, pin)
    for customer_number, account_number, account_type, balance in DEMO_ACCOUNTS:
        repository.seed(
            Account(
                customer_number=customer_number,
                account_number=account_number,
                account_type=account_type,
                balance=to_minor_units(balance),
            )
        )


def seed_sql_demo_data(session: Session) -> None:
    """Insert the development customers into an empty SQL store."""
    if session.exec(select(CustomerAccountModel)).first() is not None:
        return
    for customer_number, pin in DEMO_PINS.items():
        session.merge(CustomerPinModel(customer_number=customer_number, pin=str(pin)))
    for customer_number, account_number, account_type, balance in DEMO_ACCOUNTS:
        session.add(
            CustomerAccountModel(
                account_number=account_number,
                customer_number=customer_number,
                account_type=account_type.value,
                balance=to_minor_units(balance),
            )
        )
    session.commit()
