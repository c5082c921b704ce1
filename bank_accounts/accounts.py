"""
Account Lifecycle Module

Opening accounts for persons and companies, trusted updates, deletion,
enumeration and the monthly reset of movement allowances.
"""

from typing import List, Optional
import asyncio

from .account_types import AccountType, AccountTypeCatalog, C_CORRIENTE
from .customers import CustomerDirectory
from .errors import AccountNotFoundError
from .logging_config import get_logger, log_action
from .models import Account, AccountRequest, Customer, Message, OperationResult
from .repository import AccountRepository


CLIENT_NOT_FOUND = "Client does not exist"
ACCOUNT_CREATED = "Account created successfully"
PERSON_ALREADY_HAS_ACCOUNT = "Personal client already has a bank account: {}"
COMPANY_ONLY_CURRENT_ACCOUNT = "For company only type of account: " + C_CORRIENTE
ACCOUNT_DELETED = "Account deleted successfully"
ACCOUNT_NOT_FOUND = "Account does not exist"
TRANSACTIONS_RESTARTED = "The number of transactions of the accounts was satisfactorily restarted"


class AccountManager:
    """
    Manages account lifecycle

    Creation checks run in a fixed order: account type, customer lookup,
    then (persons only) the one-account-per-type rule, then persistence.
    """

    def __init__(
        self,
        repository: AccountRepository,
        customers: CustomerDirectory,
        catalog: AccountTypeCatalog
    ):
        self.repository = repository
        self.customers = customers
        self.catalog = catalog
        self.logger = get_logger("bank_accounts.accounts")

    async def get_all(self) -> List[Account]:
        """Get all stored accounts, unordered"""
        return await self.repository.find_all()

    async def get_account(self, account_id: str) -> Optional[Account]:
        return await self.repository.find_by_id(account_id)

    async def get_customer_accounts(self, customer_id: str) -> List[Account]:
        return await self.repository.find_by_customer(customer_id)

    async def create_person_account(self, request: AccountRequest) -> OperationResult:
        """
        Open an account for a personal customer

        A person may hold at most one account per account type name.

        Args:
            request: carries customer_id, type_account, date_account,
                number_account and type_customer

        Returns:
            OperationResult with the new account, or a rejection message
        """
        account_type = self.catalog.lookup(request.type_account)

        customer = await self.customers.get_person_by_id(request.customer_id)
        if customer is None:
            return self._reject(request, CLIENT_NOT_FOUND)

        existing = await self._find_customer_account_of_type(request.customer_id, account_type.name)
        if existing is not None:
            return self._reject(request, PERSON_ALREADY_HAS_ACCOUNT.format(account_type.name))

        return await self._open_account(request, account_type, customer)

    async def create_company_account(self, request: AccountRequest) -> OperationResult:
        """
        Open an account for a company customer

        Companies may only open C_CORRIENTE accounts, any number of them.
        """
        account_type = self.catalog.lookup(request.type_account)

        customer = await self.customers.get_company_by_id(request.customer_id)
        if customer is None:
            return self._reject(request, CLIENT_NOT_FOUND)

        if account_type.name != C_CORRIENTE:
            return self._reject(request, COMPANY_ONLY_CURRENT_ACCOUNT)

        return await self._open_account(request, account_type, customer)

    async def update_account(self, request: AccountRequest) -> Account:
        """
        Overwrite every mutable field of an existing account

        No business rule is re-applied. The type name is re-derived from the
        catalog so it always matches type_account.
        """
        account = await self.repository.find_by_id(request.id)
        if account is None:
            raise AccountNotFoundError(request.id)

        account.customer_id = request.customer_id
        account.type_account_id = request.type_account
        account.type_account_name = self.catalog.lookup(request.type_account).name
        account.balance = request.amount
        account.maintenance_fee = request.maintenance
        account.remaining_transactions = request.transaction
        account.operation_day = request.operation_day
        account.opened_date = request.date_account
        account.account_number = request.number_account
        account.customer_type = request.type_customer

        account = await self.repository.save(account)

        log_action(
            self.logger, "info", "Account updated",
            action="update_account", resource=f"account:{account.id}",
            extra={"customer_id": account.customer_id, "type_account": account.type_account_name}
        )
        return account

    async def delete_account(self, account_id: str) -> Message:
        """Delete an account; a missing account is reported, not raised"""
        account = await self.repository.find_by_id(account_id)
        if account is None:
            return Message(ACCOUNT_NOT_FOUND)

        await self.repository.delete_by_id(account.id)

        log_action(
            self.logger, "info", "Account deleted",
            action="delete_account", resource=f"account:{account.id}"
        )
        return Message(ACCOUNT_DELETED)

    async def restart_transactions(self) -> Message:
        """Reset every account's remaining movements to its type's monthly allowance"""
        accounts = await self.repository.find_all()

        await asyncio.gather(*(self._restart_account(account) for account in accounts))

        log_action(
            self.logger, "info", "Monthly movements restarted",
            action="restart_transactions", extra={"accounts": len(accounts)}
        )
        return Message(TRANSACTIONS_RESTARTED)

    async def _restart_account(self, account: Account) -> Account:
        account.remaining_transactions = self.catalog.lookup(account.type_account_id).monthly_transactions
        return await self.repository.save(account)

    async def _find_customer_account_of_type(self, customer_id: str, type_name: str) -> Optional[Account]:
        for account in await self.repository.find_by_customer(customer_id):
            if account.type_account_name == type_name:
                return account
        return None

    async def _open_account(
        self,
        request: AccountRequest,
        account_type: AccountType,
        customer: Customer
    ) -> OperationResult:
        account = Account(
            customer_id=request.customer_id,
            type_account_id=account_type.id,
            type_account_name=account_type.name,
            maintenance_fee=account_type.maintenance_fee,
            remaining_transactions=account_type.monthly_transactions,
            operation_day=account_type.operation_day,
            opened_date=request.date_account,
            account_number=request.number_account,
            customer_type=customer.customer_type
        )
        account = await self.repository.save(account)

        log_action(
            self.logger, "info", "Account created",
            action="create_account", resource=f"account:{account.id}",
            extra={
                "customer_id": account.customer_id,
                "type_account": account.type_account_name,
                "customer_type": account.customer_type
            }
        )
        return OperationResult(ACCOUNT_CREATED, account)

    def _reject(self, request: AccountRequest, message: str) -> OperationResult:
        log_action(
            self.logger, "info", f"Account creation rejected: {message}",
            action="create_account", resource=f"customer:{request.customer_id}"
        )
        return OperationResult(message)
