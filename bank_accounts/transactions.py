"""
Transaction Processing Module

Deposits and withdrawals against an account's monthly movement allowance,
balance and (for PLAZO_FIJO) its single permitted day of the month. Each
accepted movement is persisted first and then recorded in the ledger.
"""

from decimal import Decimal
from datetime import date, datetime, timezone
from typing import Callable

from .account_types import PLAZO_FIJO
from .accounts import ACCOUNT_NOT_FOUND
from .ledger import LedgerService
from .logging_config import get_logger, log_action
from .models import Account, OperationResult, Transaction, TransactionType
from .repository import AccountRepository


LIMIT_EXHAUSTED = "Exhausted monthly movements limit"
DAY_NOT_ALLOWED = "Day of the month not allowed for " + PLAZO_FIJO
INSUFFICIENT_BALANCE = "You don't have enough balance"
TRANSACTION_SUCCESSFUL = "Successful transaction"


class TransactionProcessor:
    """
    Validates and applies deposits and withdrawals

    Rejections are returned as OperationResult messages and leave the account
    untouched. Ledger failures propagate to the caller.
    """

    def __init__(
        self,
        repository: AccountRepository,
        ledger: LedgerService,
        today: Callable[[], date] = date.today
    ):
        self.repository = repository
        self.ledger = ledger
        self.today = today
        self.logger = get_logger("bank_accounts.transactions")

    async def deposit(self, account_id: str, amount: Decimal) -> OperationResult:
        """
        Deposit into an account

        Checks, in order: account exists, monthly allowance left,
        PLAZO_FIJO operation day.
        """
        account = await self.repository.find_by_id(account_id)
        if account is None:
            return self._reject(account_id, TransactionType.DEPOSITO, ACCOUNT_NOT_FOUND)

        if account.remaining_transactions - 1 < 0:
            return self._reject(account_id, TransactionType.DEPOSITO, LIMIT_EXHAUSTED)

        if not self._operation_day_allowed(account):
            return self._reject(account_id, TransactionType.DEPOSITO, DAY_NOT_ALLOWED)

        return await self._commit_movement(
            account, account.balance + amount, amount, TransactionType.DEPOSITO
        )

    async def withdraw(self, account_id: str, amount: Decimal) -> OperationResult:
        """
        Withdraw from an account

        Checks, in order: account exists, monthly allowance left, sufficient
        balance, PLAZO_FIJO operation day.
        """
        account = await self.repository.find_by_id(account_id)
        if account is None:
            return self._reject(account_id, TransactionType.RETIRO, ACCOUNT_NOT_FOUND)

        if account.remaining_transactions - 1 < 0:
            return self._reject(account_id, TransactionType.RETIRO, LIMIT_EXHAUSTED)

        new_balance = account.balance - amount
        if new_balance < 0:
            return self._reject(account_id, TransactionType.RETIRO, INSUFFICIENT_BALANCE)

        if not self._operation_day_allowed(account):
            return self._reject(account_id, TransactionType.RETIRO, DAY_NOT_ALLOWED)

        return await self._commit_movement(account, new_balance, amount, TransactionType.RETIRO)

    def _operation_day_allowed(self, account: Account) -> bool:
        if account.type_account_name != PLAZO_FIJO:
            return True
        return account.operation_day == self.today().day

    async def _commit_movement(
        self,
        account: Account,
        new_balance: Decimal,
        amount: Decimal,
        transaction_type: TransactionType
    ) -> OperationResult:
        """
        Persist the new account state, then record the movement in the ledger.

        The account stays persisted if the ledger call fails.
        """
        account.balance = new_balance
        account.remaining_transactions -= 1
        account = await self.repository.save(account)

        transaction = Transaction(
            customer_id=account.customer_id,
            product_id=account.id,
            product_type=account.type_account_name,
            transaction_type=transaction_type,
            amount=amount,
            transaction_date=datetime.now(timezone.utc),
            customer_type=account.customer_type
        )
        try:
            await self.ledger.create_transaction(transaction)
        except Exception:
            log_action(
                self.logger, "error",
                "Ledger submission failed after account was persisted; ledger and balance diverge",
                action=transaction_type.value.lower(), resource=f"account:{account.id}",
                extra={"amount": str(amount), "balance": str(account.balance)}
            )
            raise

        log_action(
            self.logger, "info", f"Transaction completed: {transaction_type.value}",
            action=transaction_type.value.lower(), resource=f"account:{account.id}",
            extra={
                "amount": str(amount),
                "balance": str(account.balance),
                "remaining_transactions": account.remaining_transactions
            }
        )
        return OperationResult(TRANSACTION_SUCCESSFUL, account)

    def _reject(
        self,
        account_id: str,
        transaction_type: TransactionType,
        message: str
    ) -> OperationResult:
        log_action(
            self.logger, "info", f"Transaction rejected: {message}",
            action=transaction_type.value.lower(), resource=f"account:{account_id}"
        )
        return OperationResult(message)
