from __future__ import annotations
from typing import Optional
from sqlmodel import Field, SQLModel

class CustomerAccount(SQLModel, table=True):
    __tablename__ = "customer_accounts"
    # AUTOINCREMENT keeps SQLite from handing out a deleted row's number again.
    __table_args__ = {"sqlite_autoincrement": True}

    account_number: Optional[int] = Field(default=None, primary_key=True)
    customer_number: int = Field(index=True)
    account_type: str
    balance: int = Field(default=0, ge=0)
    version: int = Field(default=0)

class CustomerPin(SQLModel, table=True):
    __tablename__ = "customer_pins"

    customer_number: int = Field(primary_key=True)
    pin: str
