from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, Field

from ..domain import AccountType

Amount = Union[Decimal, str]

class AccountResponse(BaseModel):
    account_number: int
    account_type: AccountType
    balance: Decimal = Field(..., description="Balance in major units, e.g. 550.00")
    balance_minor_units: int = Field(..., ge=0, description="Balance in minor units (e.g. cents)")

class AccountCreate(BaseModel):
    account_type: Optional[str] = Field(default=None, description="CHECKING or SAVINGS")
    initial_deposit: Amount = Field(default=Decimal("0.00"), description="Opening balance in major units")

class AccountCreated(BaseModel):
    account_number: int

class MoneyMovementRequest(BaseModel):
    amount: Amount = Field(..., description="Amount in major units; validated by the service")

class TransferRequest(BaseModel):
    from_account: int
    to_account: int
    amount: Amount
    to_customer: Optional[int] = Field(
        default=None, description="Destination owner; defaults to the caller"
    )

class BalanceResponse(BaseModel):
    account_number: int
    balance: Decimal

class TransferResponse(BaseModel):
    source: BalanceResponse
    dest: BalanceResponse
