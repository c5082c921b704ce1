"""
Async Storage Backend Module

Provides the async table storage interface with an in-memory implementation
(tests, local runs) and a PostgreSQL implementation using asyncpg. Records
are plain JSON-compatible dictionaries keyed by id.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Any
import asyncio
import json

from .logging_config import get_logger


logger = get_logger("bank_accounts.storage")


class AsyncStorageInterface(ABC):
    """Abstract interface for async storage backends"""

    @abstractmethod
    async def save(self, table: str, record_id: str, data: Dict[str, Any]) -> None:
        """Save a record to storage"""
        pass

    @abstractmethod
    async def load(self, table: str, record_id: str) -> Optional[Dict[str, Any]]:
        """Load a record from storage"""
        pass

    @abstractmethod
    async def load_all(self, table: str) -> List[Dict[str, Any]]:
        """Load all records from a table"""
        pass

    @abstractmethod
    async def delete(self, table: str, record_id: str) -> bool:
        """Delete a record from storage"""
        pass

    @abstractmethod
    async def find(self, table: str, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Find records matching filters"""
        pass

    async def close(self) -> None:
        """Close storage connection (default no-op)"""
        pass


class AsyncInMemoryStorage(AsyncStorageInterface):
    """In-memory storage. Records are copied on the way in and out."""

    def __init__(self):
        self._data: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = asyncio.Lock()

    @staticmethod
    def _copy(record: Dict[str, Any]) -> Dict[str, Any]:
        return json.loads(json.dumps(record, default=str))

    def _table(self, table: str) -> Dict[str, Dict[str, Any]]:
        return self._data.setdefault(table, {})

    async def save(self, table: str, record_id: str, data: Dict[str, Any]) -> None:
        async with self._lock:
            self._table(table)[record_id] = self._copy(data)

    async def load(self, table: str, record_id: str) -> Optional[Dict[str, Any]]:
        async with self._lock:
            record = self._table(table).get(record_id)
            return self._copy(record) if record is not None else None

    async def load_all(self, table: str) -> List[Dict[str, Any]]:
        async with self._lock:
            return [self._copy(record) for record in self._table(table).values()]

    async def delete(self, table: str, record_id: str) -> bool:
        async with self._lock:
            return self._table(table).pop(record_id, None) is not None

    async def find(self, table: str, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        async with self._lock:
            return [
                self._copy(record)
                for record in self._table(table).values()
                if all(key in record and record[key] == value for key, value in filters.items())
            ]


class AsyncPostgreSQLStorage(AsyncStorageInterface):
    """Async PostgreSQL storage using asyncpg, one JSONB document per row"""

    def __init__(self, connection_string: str, pool_size: int = 10):
        self.connection_string = connection_string
        self.pool_size = pool_size
        self.pool = None
        self._known_tables = set()

    async def initialize(self):
        """Create the connection pool. Call on app startup."""
        try:
            import asyncpg
        except ImportError:
            raise ImportError(
                "asyncpg is required for AsyncPostgreSQLStorage; install the 'postgres' extra"
            )
        self.pool = await asyncpg.create_pool(
            self.connection_string,
            min_size=1,
            max_size=self.pool_size,
            command_timeout=60
        )
        logger.info("PostgreSQL pool initialized")

    async def close(self):
        """Close the pool. Call on app shutdown."""
        if self.pool:
            await self.pool.close()
            self.pool = None

    @staticmethod
    def _decode(data: Any) -> Dict[str, Any]:
        if isinstance(data, str):
            return json.loads(data)
        return dict(data)

    async def _ensure_table(self, table: str) -> None:
        """Ensure table exists"""
        if not self.pool:
            raise RuntimeError("Pool not initialized. Call initialize() first.")
        if table in self._known_tables:
            return

        async with self.pool.acquire() as conn:
            await conn.execute(f'''
                CREATE TABLE IF NOT EXISTS "{table}" (
                    id TEXT PRIMARY KEY,
                    data JSONB NOT NULL,
                    created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
                    updated_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
                )
            ''')
        self._known_tables.add(table)

    async def save(self, table: str, record_id: str, data: Dict[str, Any]) -> None:
        await self._ensure_table(table)

        async with self.pool.acquire() as conn:
            await conn.execute(f'''
                INSERT INTO "{table}" (id, data, updated_at)
                VALUES ($1, $2, NOW())
                ON CONFLICT (id)
                DO UPDATE SET data = $2, updated_at = NOW()
            ''', record_id, json.dumps(data, default=str))

    async def load(self, table: str, record_id: str) -> Optional[Dict[str, Any]]:
        await self._ensure_table(table)

        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(f'SELECT data FROM "{table}" WHERE id = $1', record_id)
            return self._decode(row['data']) if row else None

    async def load_all(self, table: str) -> List[Dict[str, Any]]:
        await self._ensure_table(table)

        async with self.pool.acquire() as conn:
            rows = await conn.fetch(f'SELECT data FROM "{table}" ORDER BY created_at')
            return [self._decode(row['data']) for row in rows]

    async def delete(self, table: str, record_id: str) -> bool:
        await self._ensure_table(table)

        async with self.pool.acquire() as conn:
            result = await conn.execute(f'DELETE FROM "{table}" WHERE id = $1', record_id)
            return result != 'DELETE 0'

    async def find(self, table: str, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        await self._ensure_table(table)

        conditions = []
        params = []
        for key, value in filters.items():
            params.append(str(value))
            conditions.append(f"data->>'{key}' = ${len(params)}")

        where_clause = " AND ".join(conditions) if conditions else "1=1"

        async with self.pool.acquire() as conn:
            rows = await conn.fetch(f'SELECT data FROM "{table}" WHERE {where_clause}', *params)
            return [self._decode(row['data']) for row in rows]


def create_async_storage(
    storage_type: str = "memory",
    connection_string: Optional[str] = None,
    pool_size: int = 10
) -> AsyncStorageInterface:
    """Factory function to create async storage instances"""
    if storage_type.lower() == 'postgresql' and connection_string:
        return AsyncPostgreSQLStorage(connection_string, pool_size)

    if storage_type.lower() == 'postgresql':
        logger.warning("PostgreSQL storage requested without a database URL, using in-memory storage")
    return AsyncInMemoryStorage()
