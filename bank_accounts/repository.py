"""
Account Repository Module

Keyed persistence of Account records on top of an async table storage.
"""

from typing import List, Optional
import uuid

from .async_storage import AsyncStorageInterface
from .models import Account


class AccountRepository:
    """find/save/delete of accounts by id"""

    def __init__(self, storage: AsyncStorageInterface, table: str = "accounts"):
        self.storage = storage
        self.table = table

    async def find_all(self) -> List[Account]:
        records = await self.storage.load_all(self.table)
        return [Account.from_dict(record) for record in records]

    async def find_by_id(self, account_id: str) -> Optional[Account]:
        record = await self.storage.load(self.table, account_id)
        if record:
            return Account.from_dict(record)
        return None

    async def find_by_customer(self, customer_id: str) -> List[Account]:
        records = await self.storage.find(self.table, {"customer_id": customer_id})
        return [Account.from_dict(record) for record in records]

    async def save(self, account: Account) -> Account:
        """Persist an account, assigning a new id when it has none"""
        if not account.id:
            account.id = str(uuid.uuid4())
        await self.storage.save(self.table, account.id, account.to_dict())
        return account

    async def delete_by_id(self, account_id: str) -> None:
        await self.storage.delete(self.table, account_id)
