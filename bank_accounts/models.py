"""
Domain Models Module

Account records, ledger entries, customers and the result envelopes returned
by lifecycle and movement operations. Monetary values are Decimal throughout
and are stored as strings.
"""

from decimal import Decimal
from datetime import date, datetime
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional
from enum import Enum


class TransactionType(Enum):
    """Movement types recorded in the ledger"""
    DEPOSITO = "DEPOSITO"
    RETIRO = "RETIRO"


@dataclass
class Account:
    """
    Bank account with a snapshot of its account type rules

    `type_account_name`, `maintenance_fee`, `remaining_transactions` and
    `operation_day` are copied from the catalog and never read through it.
    """
    customer_id: str
    type_account_id: int
    type_account_name: str
    balance: Decimal = Decimal("0.00")
    maintenance_fee: Decimal = Decimal("0.00")
    remaining_transactions: int = 0
    operation_day: Optional[int] = None
    opened_date: Optional[date] = None
    account_number: Optional[str] = None
    customer_type: Optional[str] = None
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage"""
        result = asdict(self)
        result['balance'] = str(self.balance)
        result['maintenance_fee'] = str(self.maintenance_fee)
        result['opened_date'] = self.opened_date.isoformat() if self.opened_date else None
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Account':
        """Create instance from a stored dictionary"""
        opened_date = data.get('opened_date')
        if isinstance(opened_date, str):
            opened_date = date.fromisoformat(opened_date)

        return cls(
            id=data.get('id'),
            customer_id=data['customer_id'],
            type_account_id=int(data['type_account_id']),
            type_account_name=data['type_account_name'],
            balance=Decimal(str(data['balance'])),
            maintenance_fee=Decimal(str(data['maintenance_fee'])),
            remaining_transactions=int(data['remaining_transactions']),
            operation_day=data.get('operation_day'),
            opened_date=opened_date,
            account_number=data.get('account_number'),
            customer_type=data.get('customer_type')
        )


@dataclass
class Transaction:
    """Ledger entry submitted to the transactions service. Write-once."""
    customer_id: str
    product_id: str
    product_type: str
    transaction_type: TransactionType
    amount: Decimal
    transaction_date: datetime
    customer_type: Optional[str] = None
    id: Optional[str] = None


@dataclass
class Customer:
    """Person or company as returned by the customer directory"""
    id: str
    customer_type: str
    name: Optional[str] = None


@dataclass
class AccountRequest:
    """
    Inbound request for lifecycle and movement operations

    Creation reads customer_id, type_account, date_account, number_account and
    type_customer. Update overwrites the account with every field. Movements
    read id and amount.
    """
    customer_id: Optional[str] = None
    type_account: Optional[int] = None
    amount: Decimal = Decimal("0.00")
    maintenance: Decimal = Decimal("0.00")
    transaction: int = 0
    operation_day: Optional[int] = None
    date_account: Optional[date] = None
    number_account: Optional[str] = None
    type_customer: Optional[str] = None
    id: Optional[str] = None


@dataclass
class OperationResult:
    """Outcome of a creation or movement: a message and, on success, the account"""
    message: str
    account: Optional[Account] = None

    @property
    def succeeded(self) -> bool:
        return self.account is not None


@dataclass
class Message:
    """Plain message envelope"""
    message: str
