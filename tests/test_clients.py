"""
Tests for the customers and transactions service clients
"""

import json
import pytest
from decimal import Decimal
from datetime import datetime, timezone
import httpx

from bank_accounts.customers import CustomerClient, InMemoryCustomerDirectory
from bank_accounts.errors import CustomerServiceError, TransactionServiceError
from bank_accounts.ledger import InMemoryLedger, TransactionsClient, transaction_to_payload
from bank_accounts.models import Transaction, TransactionType


def make_transaction() -> Transaction:
    return Transaction(
        customer_id="P001",
        product_id="acc-1",
        product_type="AHORRO",
        transaction_type=TransactionType.DEPOSITO,
        amount=Decimal("100.00"),
        transaction_date=datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc),
        customer_type="PERSONAL"
    )


class TestCustomerClient:
    """Test CustomerClient against a mocked customers service"""

    def _client(self, handler) -> CustomerClient:
        return CustomerClient("http://customers.local/", transport=httpx.MockTransport(handler))

    @pytest.mark.asyncio
    async def test_get_person(self):
        requested = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(request.url.path)
            return httpx.Response(200, json={"id": "P001", "name": "Ana", "typeCustomer": "PERSONAL"})

        client = self._client(handler)
        customer = await client.get_person_by_id("P001")
        await client.close()

        assert requested == ["/persons/P001"]
        assert customer.id == "P001"
        assert customer.customer_type == "PERSONAL"
        assert customer.name == "Ana"

    @pytest.mark.asyncio
    async def test_get_company(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/companies/C001"
            return httpx.Response(200, json={"id": "C001", "typeCustomer": "EMPRESARIAL"})

        client = self._client(handler)
        customer = await client.get_company_by_id("C001")
        await client.close()

        assert customer.customer_type == "EMPRESARIAL"

    @pytest.mark.asyncio
    async def test_missing_customer_returns_none(self):
        client = self._client(lambda request: httpx.Response(404))

        assert await client.get_person_by_id("P404") is None
        await client.close()

    @pytest.mark.asyncio
    async def test_server_error_raises(self):
        client = self._client(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(CustomerServiceError) as exc_info:
            await client.get_company_by_id("C001")
        await client.close()

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_connection_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = self._client(handler)

        with pytest.raises(CustomerServiceError):
            await client.get_person_by_id("P001")
        await client.close()

    @pytest.mark.asyncio
    async def test_non_json_body_raises(self):
        client = self._client(lambda request: httpx.Response(200, text="<html>maintenance</html>"))

        with pytest.raises(CustomerServiceError) as exc_info:
            await client.get_person_by_id("P001")
        await client.close()

        assert exc_info.value.status_code == 200


class TestTransactionsClient:
    """Test TransactionsClient against a mocked transactions service"""

    def _client(self, handler) -> TransactionsClient:
        return TransactionsClient("http://transactions.local", transport=httpx.MockTransport(handler))

    @pytest.mark.asyncio
    async def test_create_transaction(self):
        received = {}

        def handler(request: httpx.Request) -> httpx.Response:
            received["path"] = request.url.path
            received["body"] = json.loads(request.content)
            return httpx.Response(201, json={"id": "TX1", **received["body"]})

        client = self._client(handler)
        created = await client.create_transaction(make_transaction())
        await client.close()

        assert received["path"] == "/transactions"
        assert received["body"] == {
            "customerId": "P001",
            "productId": "acc-1",
            "productType": "AHORRO",
            "transactionType": "DEPOSITO",
            "amount": "100.00",
            "transactionDate": "2024-03-10T12:00:00+00:00",
            "customerType": "PERSONAL"
        }
        assert created.id == "TX1"
        assert created.amount == Decimal("100.00")
        assert created.transaction_type == TransactionType.DEPOSITO

    @pytest.mark.asyncio
    async def test_failure_raises(self):
        client = self._client(lambda request: httpx.Response(503, text="unavailable"))

        with pytest.raises(TransactionServiceError) as exc_info:
            await client.create_transaction(make_transaction())
        await client.close()

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_timeout_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = self._client(handler)

        with pytest.raises(TransactionServiceError):
            await client.create_transaction(make_transaction())
        await client.close()

    @pytest.mark.asyncio
    async def test_empty_body_returns_submitted_entry(self):
        client = self._client(lambda request: httpx.Response(201, content=b""))
        transaction = make_transaction()

        created = await client.create_transaction(transaction)
        await client.close()

        assert created is transaction
        assert created.id is None

    @pytest.mark.asyncio
    async def test_non_json_body_returns_submitted_entry(self):
        client = self._client(lambda request: httpx.Response(200, text="OK"))
        transaction = make_transaction()

        assert await client.create_transaction(transaction) is transaction
        await client.close()

    @pytest.mark.asyncio
    async def test_partial_body_keeps_assigned_id(self):
        client = self._client(lambda request: httpx.Response(201, json={"id": "T1"}))

        created = await client.create_transaction(make_transaction())
        await client.close()

        assert created.id == "T1"
        assert created.amount == Decimal("100.00")
        assert created.customer_id == "P001"


class TestInMemoryDoubles:
    """Test the in-memory customer directory and ledger"""

    @pytest.mark.asyncio
    async def test_directory_separates_persons_and_companies(self):
        directory = InMemoryCustomerDirectory()
        directory.add_person("P001")
        directory.add_company("C001")

        assert (await directory.get_person_by_id("P001")).customer_type == "PERSONAL"
        assert await directory.get_company_by_id("P001") is None
        assert (await directory.get_company_by_id("C001")).customer_type == "EMPRESARIAL"

    @pytest.mark.asyncio
    async def test_ledger_records_entries(self):
        ledger = InMemoryLedger()

        entry = await ledger.create_transaction(make_transaction())

        assert entry.id == "TX000001"
        assert ledger.entries == [entry]

    def test_payload_uses_wire_names(self):
        payload = transaction_to_payload(make_transaction())
        assert set(payload) == {
            "customerId", "productId", "productType", "transactionType",
            "amount", "transactionDate", "customerType"
        }
