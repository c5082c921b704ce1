"""
Customer Directory Module

Lookup of persons and companies by customer id. The REST client talks to the
customers service; the in-memory directory backs tests and local runs.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional
import httpx

from .errors import CustomerServiceError
from .logging_config import get_logger
from .models import Customer

logger = get_logger("bank_accounts.customers")


class CustomerDirectory(ABC):
    """Lookup of customers by id"""

    @abstractmethod
    async def get_person_by_id(self, customer_id: str) -> Optional[Customer]:
        """Get a personal customer, None if it does not exist"""
        pass

    @abstractmethod
    async def get_company_by_id(self, customer_id: str) -> Optional[Customer]:
        """Get a company customer, None if it does not exist"""
        pass

    async def close(self) -> None:
        pass


class CustomerClient(CustomerDirectory):
    """REST client for the customers service"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def get_person_by_id(self, customer_id: str) -> Optional[Customer]:
        return await self._get_customer(f"/persons/{customer_id}", customer_id)

    async def get_company_by_id(self, customer_id: str) -> Optional[Customer]:
        return await self._get_customer(f"/companies/{customer_id}", customer_id)

    async def _get_customer(self, path: str, customer_id: str) -> Optional[Customer]:
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as e:
            logger.error(f"Customers service unreachable: {e}")
            raise CustomerServiceError(f"Customers service unreachable: {e}") from e

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            logger.warning(f"Customers service returned {response.status_code}: {response.text}")
            raise CustomerServiceError(
                f"Customers service returned {response.status_code}",
                status_code=response.status_code
            )

        try:
            data = response.json()
            if not data:
                return None
            return Customer(
                id=data.get("id", customer_id),
                customer_type=data.get("typeCustomer"),
                name=data.get("name")
            )
        except (ValueError, AttributeError) as e:
            logger.warning(f"Customers service returned an unreadable body: {e}")
            raise CustomerServiceError(
                f"Customers service returned an unreadable body: {e}",
                status_code=response.status_code
            ) from e

    async def close(self) -> None:
        """Close the HTTP client"""
        await self._client.aclose()


class InMemoryCustomerDirectory(CustomerDirectory):
    """Customer directory backed by dictionaries"""

    def __init__(self):
        self.persons: Dict[str, Customer] = {}
        self.companies: Dict[str, Customer] = {}

    def add_person(self, customer_id: str, customer_type: str = "PERSONAL", name: Optional[str] = None) -> Customer:
        customer = Customer(id=customer_id, customer_type=customer_type, name=name)
        self.persons[customer_id] = customer
        return customer

    def add_company(self, customer_id: str, customer_type: str = "EMPRESARIAL", name: Optional[str] = None) -> Customer:
        customer = Customer(id=customer_id, customer_type=customer_type, name=name)
        self.companies[customer_id] = customer
        return customer

    async def get_person_by_id(self, customer_id: str) -> Optional[Customer]:
        return self.persons.get(customer_id)

    async def get_company_by_id(self, customer_id: str) -> Optional[Customer]:
        return self.companies.get(customer_id)
