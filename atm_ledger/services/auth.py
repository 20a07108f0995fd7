from __future__ import annotations

import hmac
import threading
from typing import Protocol, Union

from sqlmodel import Session

from ..models import CustomerPinModel

Pin = Union[int, str]


class Authenticator(Protocol):
    def verify(self, customer_number: int, pin: Pin) -> bool: ...


def _pins_match(stored: str, supplied: Pin) -> bool:
    return hmac.compare_digest(stored.encode(), str(supplied).strip().encode())


class InMemoryAuthenticator:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pins: dict[int, str] = {}

    def seed(self, customer_number: int, pin: Pin) -> "InMemoryAuthenticator":
        with self._lock:
            self._pins[customer_number] = str(pin)
        return self

    def verify(self, customer_number: int, pin: Pin) -> bool:
        with self._lock:
            stored = self._pins.get(customer_number)
        return stored is not None and _pins_match(stored, pin)


class SqlAuthenticator:
    """Checks PINs against the customer_pins table."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def seed(self, customer_number: int, pin: Pin) -> "SqlAuthenticator":
        self.session.merge(CustomerPinModel(customer_number=customer_number, pin=str(pin)))
        self.session.commit()
        return self

    def verify(self, customer_number: int, pin: Pin) -> bool:
        row = self.session.get(CustomerPinModel, customer_number)
        return row is not None and _pins_match(row.pin, pin)
