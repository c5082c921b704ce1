"""
Account Type Catalog Module

Static reference data describing the maintenance fee, monthly movement
allowance and operation day of each account category. Accounts copy these
values at creation/update time, so later catalog changes never alter
existing accounts.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional


AHORRO = "AHORRO"
C_CORRIENTE = "C_CORRIENTE"
PLAZO_FIJO = "PLAZO_FIJO"


class UnknownAccountTypeError(ValueError):
    """Raised when an account type id has no catalog entry"""

    def __init__(self, type_id: int):
        super().__init__(f"Unknown account type: {type_id}")
        self.type_id = type_id


@dataclass(frozen=True)
class AccountType:
    """Catalog entry for an account category"""
    id: int
    name: str
    maintenance_fee: Decimal
    monthly_transactions: int
    operation_day: Optional[int] = None


DEFAULT_ACCOUNT_TYPES = (
    AccountType(1, AHORRO, Decimal("0.00"), 5),
    AccountType(2, C_CORRIENTE, Decimal("15.00"), 30),
    AccountType(3, PLAZO_FIJO, Decimal("0.00"), 1, operation_day=15),
)


class AccountTypeCatalog:
    """
    Read-only lookup of account types by id

    Built once from a sequence of entries and passed explicitly to the
    components that need it.
    """

    def __init__(self, account_types: Iterable[AccountType] = DEFAULT_ACCOUNT_TYPES):
        self._types: Dict[int, AccountType] = {}
        for account_type in account_types:
            if account_type.id in self._types:
                raise ValueError(f"Duplicate account type id: {account_type.id}")
            self._types[account_type.id] = account_type

    def lookup(self, type_id: int) -> AccountType:
        """Get the account type for an id, raising UnknownAccountTypeError on a miss"""
        try:
            return self._types[type_id]
        except KeyError:
            raise UnknownAccountTypeError(type_id) from None

    def all(self) -> List[AccountType]:
        return sorted(self._types.values(), key=lambda t: t.id)

    def __contains__(self, type_id: int) -> bool:
        return type_id in self._types
