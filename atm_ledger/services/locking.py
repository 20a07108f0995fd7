from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager


class AccountLocks:
    """One mutex per account number, created on first use."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[int, threading.Lock] = {}

    def _lock_for(self, account_number: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(account_number)
            if lock is None:
                lock = self._locks[account_number] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, *account_numbers: int) -> Iterator[None]:
        # Ascending order keeps two opposite transfers from deadlocking.
        with ExitStack() as stack:
            for number in sorted(set(account_numbers)):
                stack.enter_context(self._lock_for(number))
            yield
