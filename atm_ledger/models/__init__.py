from .db import CustomerAccount as CustomerAccountModel
from .db import CustomerPin as CustomerPinModel
from .schemas import (
    AccountCreate,
    AccountCreated,
    AccountResponse,
    BalanceResponse,
    MoneyMovementRequest,
    TransferRequest,
    TransferResponse,
)

__all__ = [
    "AccountCreate",
    "AccountCreated",
    "AccountResponse",
    "BalanceResponse",
    "MoneyMovementRequest",
    "TransferRequest",
    "TransferResponse",
    "CustomerAccountModel",
    "CustomerPinModel",
]
