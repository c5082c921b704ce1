"""
Ledger Service Module

Submission of movement records to the transactions service. Entries are
write-once: once submitted they are never modified by this service.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
import httpx

from .errors import TransactionServiceError
from .logging_config import get_logger
from .models import Transaction, TransactionType

logger = get_logger("bank_accounts.ledger")


def transaction_to_payload(transaction: Transaction) -> Dict[str, Any]:
    """Wire representation expected by the transactions service"""
    return {
        "customerId": transaction.customer_id,
        "productId": transaction.product_id,
        "productType": transaction.product_type,
        "transactionType": transaction.transaction_type.value,
        "amount": str(transaction.amount),
        "transactionDate": transaction.transaction_date.isoformat(),
        "customerType": transaction.customer_type
    }


def transaction_from_payload(data: Dict[str, Any]) -> Transaction:
    return Transaction(
        id=data.get("id"),
        customer_id=data["customerId"],
        product_id=data["productId"],
        product_type=data["productType"],
        transaction_type=TransactionType(data["transactionType"]),
        amount=Decimal(str(data["amount"])),
        transaction_date=datetime.fromisoformat(data["transactionDate"]),
        customer_type=data.get("customerType")
    )


class LedgerService(ABC):
    """Append-only record of movements"""

    @abstractmethod
    async def create_transaction(self, transaction: Transaction) -> Transaction:
        """Record a movement, raising TransactionServiceError on failure"""
        pass

    async def close(self) -> None:
        pass


class TransactionsClient(LedgerService):
    """REST client for the transactions service"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def create_transaction(self, transaction: Transaction) -> Transaction:
        try:
            response = await self._client.post("/transactions", json=transaction_to_payload(transaction))
        except httpx.HTTPError as e:
            logger.error(f"Transactions service unreachable: {e}")
            raise TransactionServiceError(f"Transactions service unreachable: {e}") from e

        if response.status_code not in (200, 201):
            logger.warning(f"Transactions service returned {response.status_code}: {response.text}")
            raise TransactionServiceError(
                f"Transactions service returned {response.status_code}",
                status_code=response.status_code
            )

        # The entry is recorded once the service accepts it; an unreadable
        # body must not turn that into a failure.
        data = None
        try:
            data = response.json()
            return transaction_from_payload(data)
        except (ValueError, KeyError, TypeError, ArithmeticError) as e:
            logger.warning(f"Transactions service returned an unreadable body: {e}")
            if isinstance(data, dict) and data.get("id"):
                transaction.id = data["id"]
            return transaction

    async def close(self) -> None:
        """Close the HTTP client"""
        await self._client.aclose()


class InMemoryLedger(LedgerService):
    """Ledger kept in a list; can be switched to fail for outage testing"""

    def __init__(self):
        self.entries: List[Transaction] = []
        self.fail_with: Optional[Exception] = None

    async def create_transaction(self, transaction: Transaction) -> Transaction:
        if self.fail_with is not None:
            raise self.fail_with
        transaction.id = transaction.id or f"TX{len(self.entries) + 1:06d}"
        self.entries.append(transaction)
        return transaction
