"""
Pydantic schemas for API requests and responses
"""

from decimal import Decimal
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field

from ..account_types import AccountType
from ..models import Account, AccountRequest, Message, OperationResult


class CreateAccountRequest(BaseModel):
    customer_id: str
    type_account: int = Field(..., description="Account type id from the catalog")
    date_account: Optional[date] = None
    number_account: Optional[str] = None
    type_customer: Optional[str] = None

    def to_request(self) -> AccountRequest:
        return AccountRequest(
            customer_id=self.customer_id,
            type_account=self.type_account,
            date_account=self.date_account,
            number_account=self.number_account,
            type_customer=self.type_customer
        )


class UpdateAccountRequest(BaseModel):
    id: str
    customer_id: str
    type_account: int
    amount: Decimal = Field(..., description="New balance")
    maintenance: Decimal = Decimal("0.00")
    transaction: int = Field(0, ge=0, description="Remaining monthly movements")
    operation_day: Optional[int] = Field(None, ge=1, le=31)
    date_account: Optional[date] = None
    number_account: Optional[str] = None
    type_customer: Optional[str] = None

    def to_request(self) -> AccountRequest:
        return AccountRequest(
            id=self.id,
            customer_id=self.customer_id,
            type_account=self.type_account,
            amount=self.amount,
            maintenance=self.maintenance,
            transaction=self.transaction,
            operation_day=self.operation_day,
            date_account=self.date_account,
            number_account=self.number_account,
            type_customer=self.type_customer
        )


class MovementRequest(BaseModel):
    account_id: str
    amount: Decimal = Field(..., gt=0, description="Positive movement amount")


class AccountModel(BaseModel):
    id: str
    customer_id: str
    type_account: int
    type_account_name: str
    balance: str = Field(..., description="Decimal amount as string")
    maintenance_fee: str
    remaining_transactions: int
    operation_day: Optional[int] = None
    opened_date: Optional[date] = None
    account_number: Optional[str] = None
    customer_type: Optional[str] = None

    @classmethod
    def from_account(cls, account: Account) -> 'AccountModel':
        return cls(
            id=account.id,
            customer_id=account.customer_id,
            type_account=account.type_account_id,
            type_account_name=account.type_account_name,
            balance=str(account.balance),
            maintenance_fee=str(account.maintenance_fee),
            remaining_transactions=account.remaining_transactions,
            operation_day=account.operation_day,
            opened_date=account.opened_date,
            account_number=account.account_number,
            customer_type=account.customer_type
        )


class OperationResultModel(BaseModel):
    message: str
    account: Optional[AccountModel] = None

    @classmethod
    def from_result(cls, result: OperationResult) -> 'OperationResultModel':
        account = AccountModel.from_account(result.account) if result.account else None
        return cls(message=result.message, account=account)


class MessageModel(BaseModel):
    message: str

    @classmethod
    def from_message(cls, message: Message) -> 'MessageModel':
        return cls(message=message.message)


class AccountTypeModel(BaseModel):
    id: int
    name: str
    maintenance_fee: str
    monthly_transactions: int
    operation_day: Optional[int] = None

    @classmethod
    def from_account_type(cls, account_type: AccountType) -> 'AccountTypeModel':
        return cls(
            id=account_type.id,
            name=account_type.name,
            maintenance_fee=str(account_type.maintenance_fee),
            monthly_transactions=account_type.monthly_transactions,
            operation_day=account_type.operation_day
        )
