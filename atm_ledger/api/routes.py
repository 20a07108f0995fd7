from fastapi import APIRouter, Depends, status

from ..core.dependencies import get_account_service, get_customer_number
from ..domain import Account, from_minor_units
from ..models import (
    AccountCreate,
    AccountCreated,
    AccountResponse,
    BalanceResponse,
    MoneyMovementRequest,
    TransferRequest,
    TransferResponse,
)
from ..services import AccountService


router = APIRouter(prefix="/accounts", tags=["accounts"])

def _account_to_response(account: Account) -> AccountResponse:
    return AccountResponse(
        account_number=account.account_number,
        account_type=account.account_type,
        balance=from_minor_units(account.balance),
        balance_minor_units=account.balance,
    )

@router.get("", response_model=list[AccountResponse])
def list_accounts(
    customer_number: int = Depends(get_customer_number),
    service: AccountService = Depends(get_account_service),
) -> list[AccountResponse]:
    return [_account_to_response(a) for a in service.list_accounts(customer_number)]

@router.post("", response_model=AccountCreated, status_code=status.HTTP_201_CREATED)
def open_account(
    payload: AccountCreate,
    customer_number: int = Depends(get_customer_number),
    service: AccountService = Depends(get_account_service),
) -> AccountCreated:
    account_number = service.open_account(
        customer_number, payload.account_type, payload.initial_deposit
    )
    return AccountCreated(account_number=account_number)

@router.get("/{account_number}", response_model=AccountResponse)
def get_account(
    account_number: int,
    customer_number: int = Depends(get_customer_number),
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    return _account_to_response(service.get_account(customer_number, account_number))

@router.post("/{account_number}/deposit", response_model=BalanceResponse)
def deposit(
    account_number: int,
    payload: MoneyMovementRequest,
    customer_number: int = Depends(get_customer_number),
    service: AccountService = Depends(get_account_service),
) -> BalanceResponse:
    balance = service.deposit(customer_number, account_number, payload.amount)
    return BalanceResponse(account_number=account_number, balance=balance)

@router.post("/{account_number}/withdraw", response_model=BalanceResponse)
def withdraw(
    account_number: int,
    payload: MoneyMovementRequest,
    customer_number: int = Depends(get_customer_number),
    service: AccountService = Depends(get_account_service),
) -> BalanceResponse:
    balance = service.withdraw(customer_number, account_number, payload.amount)
    return BalanceResponse(account_number=account_number, balance=balance)

transfer_router = APIRouter(prefix="/transfers", tags=["transfers"])

@transfer_router.post("", response_model=TransferResponse)
def create_transfer(
    payload: TransferRequest,
    customer_number: int = Depends(get_customer_number),
    service: AccountService = Depends(get_account_service),
) -> TransferResponse:
    result = service.transfer(
        customer_number,
        payload.from_account,
        payload.to_account,
        payload.amount,
        to_customer=payload.to_customer,
    )
    return TransferResponse(
        source=BalanceResponse(account_number=payload.from_account, balance=result.source_balance),
        dest=BalanceResponse(account_number=payload.to_account, balance=result.destination_balance),
    )

__all__ = ["router", "transfer_router"]
