"""
Service wiring and FastAPI dependencies
"""

from typing import Optional

from ..account_types import AccountTypeCatalog
from ..accounts import AccountManager
from ..async_storage import AsyncPostgreSQLStorage, AsyncStorageInterface, create_async_storage
from ..config import BankAccountsConfig, get_config
from ..customers import CustomerClient, CustomerDirectory, InMemoryCustomerDirectory
from ..ledger import InMemoryLedger, LedgerService, TransactionsClient
from ..logging_config import get_logger
from ..repository import AccountRepository
from ..transactions import TransactionProcessor

logger = get_logger("bank_accounts.api")


class BankAccountsSystem:
    """Account service with all components initialized"""

    def __init__(
        self,
        storage: Optional[AsyncStorageInterface] = None,
        customers: Optional[CustomerDirectory] = None,
        ledger: Optional[LedgerService] = None,
        catalog: Optional[AccountTypeCatalog] = None,
        config: Optional[BankAccountsConfig] = None
    ):
        config = config or get_config()

        self.storage = storage or create_async_storage(
            config.storage_type, config.database_url, config.database_pool_size
        )
        self.customers = customers or self._create_customer_directory(config)
        self.ledger = ledger or self._create_ledger(config)
        self.catalog = catalog or AccountTypeCatalog()

        self.repository = AccountRepository(self.storage)
        self.account_manager = AccountManager(self.repository, self.customers, self.catalog)
        self.transaction_processor = TransactionProcessor(self.repository, self.ledger)

    @staticmethod
    def _create_customer_directory(config: BankAccountsConfig) -> CustomerDirectory:
        if not config.customers_service_url:
            logger.warning("No customers service configured, using in-memory customer directory")
            return InMemoryCustomerDirectory()
        return CustomerClient(config.customers_service_url, timeout=config.http_timeout)

    @staticmethod
    def _create_ledger(config: BankAccountsConfig) -> LedgerService:
        if not config.transactions_service_url:
            logger.warning("No transactions service configured, using in-memory ledger")
            return InMemoryLedger()
        return TransactionsClient(config.transactions_service_url, timeout=config.http_timeout)

    async def startup(self) -> None:
        if isinstance(self.storage, AsyncPostgreSQLStorage):
            await self.storage.initialize()

    async def shutdown(self) -> None:
        await self.customers.close()
        await self.ledger.close()
        await self.storage.close()


# Global system instance, replaced in tests
system: Optional[BankAccountsSystem] = None


def get_system() -> BankAccountsSystem:
    global system
    if system is None:
        system = BankAccountsSystem()
    return system


def set_system(new_system: Optional[BankAccountsSystem]) -> None:
    global system
    system = new_system
