"""
Integration tests for the Bank Accounts API
Tests end-to-end workflows using FastAPI TestClient
"""

import pytest
from datetime import date
from fastapi.testclient import TestClient

from bank_accounts.api import app
from bank_accounts.api.dependencies import BankAccountsSystem, get_system, set_system
from bank_accounts.async_storage import AsyncInMemoryStorage
from bank_accounts.customers import InMemoryCustomerDirectory
from bank_accounts.errors import CustomerServiceError, TransactionServiceError
from bank_accounts.ledger import InMemoryLedger


class UnavailableCustomerDirectory(InMemoryCustomerDirectory):
    """Directory whose lookups fail as if the customers service were down"""

    async def get_person_by_id(self, customer_id):
        raise CustomerServiceError("Customers service unreachable")

    async def get_company_by_id(self, customer_id):
        raise CustomerServiceError("Customers service unreachable")


@pytest.fixture
def system():
    """Create an in-memory system with one person and one company"""
    customers = InMemoryCustomerDirectory()
    customers.add_person("P001")
    customers.add_company("C001")
    test_system = BankAccountsSystem(
        storage=AsyncInMemoryStorage(),
        customers=customers,
        ledger=InMemoryLedger()
    )
    set_system(test_system)
    yield test_system
    set_system(None)


@pytest.fixture
def client(system):
    """Create a test client for the API wired to the in-memory system"""
    app.dependency_overrides[get_system] = lambda: system
    yield TestClient(app)
    app.dependency_overrides.clear()


def open_savings_account(client) -> dict:
    r = client.post("/accounts/person", json={
        "customer_id": "P001",
        "type_account": 1,
        "date_account": "2024-03-01",
        "number_account": "191-0001"
    })
    assert r.status_code == 201
    return r.json()["account"]


class TestHealthEndpoints:
    """Test basic service endpoints"""

    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "healthy"

    def test_account_types(self, client):
        r = client.get("/account-types")
        assert r.status_code == 200
        names = [t["name"] for t in r.json()]
        assert names == ["AHORRO", "C_CORRIENTE", "PLAZO_FIJO"]


class TestAccountFlow:
    """End-to-end account lifecycle tests"""

    def test_create_person_account(self, client):
        r = client.post("/accounts/person", json={"customer_id": "P001", "type_account": 1})
        assert r.status_code == 201
        data = r.json()
        assert data["message"] == "Account created successfully"
        assert data["account"]["type_account_name"] == "AHORRO"
        assert data["account"]["balance"] == "0.00"
        assert data["account"]["remaining_transactions"] == 5

    def test_duplicate_person_account(self, client):
        open_savings_account(client)

        r = client.post("/accounts/person", json={"customer_id": "P001", "type_account": 1})

        assert r.status_code == 200
        assert r.json() == {"message": "Personal client already has a bank account: AHORRO", "account": None}

    def test_unknown_client(self, client):
        r = client.post("/accounts/person", json={"customer_id": "P404", "type_account": 1})
        assert r.status_code == 200
        assert r.json()["message"] == "Client does not exist"

    def test_unknown_account_type(self, client):
        r = client.post("/accounts/person", json={"customer_id": "P001", "type_account": 42})
        assert r.status_code == 400

    def test_customers_service_outage(self, client, system):
        system.account_manager.customers = UnavailableCustomerDirectory()

        r = client.post("/accounts/person", json={"customer_id": "P001", "type_account": 1})

        assert r.status_code == 502
        assert client.get("/accounts").json() == []

    def test_company_account_rules(self, client):
        r = client.post("/accounts/company", json={"customer_id": "C001", "type_account": 1})
        assert r.status_code == 200
        assert r.json()["message"] == "For company only type of account: C_CORRIENTE"

        r = client.post("/accounts/company", json={"customer_id": "C001", "type_account": 2})
        assert r.status_code == 201
        assert r.json()["message"] == "Account created successfully"
        assert r.json()["account"]["customer_type"] == "EMPRESARIAL"

    def test_get_and_list_accounts(self, client):
        account = open_savings_account(client)

        r = client.get(f"/accounts/{account['id']}")
        assert r.status_code == 200
        assert r.json()["account_number"] == "191-0001"
        assert r.json()["opened_date"] == "2024-03-01"

        assert len(client.get("/accounts").json()) == 1
        assert len(client.get("/accounts/customer/P001").json()) == 1
        assert client.get("/accounts/customer/P002").json() == []
        assert client.get("/accounts/missing").status_code == 404

    def test_update_account(self, client):
        account = open_savings_account(client)

        r = client.put("/accounts", json={
            "id": account["id"],
            "customer_id": "P001",
            "type_account": 2,
            "amount": "40.00",
            "maintenance": "15.00",
            "transaction": 10,
            "date_account": date(2024, 4, 1).isoformat(),
            "number_account": "191-0001",
            "type_customer": "PERSONAL"
        })

        assert r.status_code == 200
        data = r.json()
        assert data["type_account_name"] == "C_CORRIENTE"
        assert data["balance"] == "40.00"
        assert data["remaining_transactions"] == 10

    def test_update_missing_account(self, client):
        r = client.put("/accounts", json={
            "id": "missing", "customer_id": "P001", "type_account": 1, "amount": "0"
        })
        assert r.status_code == 404

    def test_delete_account(self, client):
        account = open_savings_account(client)

        r = client.delete(f"/accounts/{account['id']}")
        assert r.json() == {"message": "Account deleted successfully"}

        r = client.delete(f"/accounts/{account['id']}")
        assert r.json() == {"message": "Account does not exist"}


class TestMovementFlow:
    """End-to-end deposit and withdrawal tests"""

    def test_deposit_and_withdraw(self, client, system):
        account = open_savings_account(client)

        r = client.post("/accounts/deposit", json={"account_id": account["id"], "amount": "100"})
        assert r.status_code == 200
        assert r.json()["message"] == "Successful transaction"
        assert r.json()["account"]["remaining_transactions"] == 4

        r = client.post("/accounts/withdrawal", json={"account_id": account["id"], "amount": "30"})
        assert r.json()["message"] == "Successful transaction"
        assert r.json()["account"]["remaining_transactions"] == 3

        r = client.post("/accounts/withdrawal", json={"account_id": account["id"], "amount": "1000"})
        assert r.json() == {"message": "You don't have enough balance", "account": None}

        assert len(system.ledger.entries) == 2

    def test_non_positive_amount_rejected(self, client):
        account = open_savings_account(client)

        r = client.post("/accounts/deposit", json={"account_id": account["id"], "amount": "0"})
        assert r.status_code == 422

    def test_movement_on_missing_account(self, client):
        r = client.post("/accounts/deposit", json={"account_id": "missing", "amount": "10"})
        assert r.json()["message"] == "Account does not exist"

    def test_ledger_outage(self, client, system):
        account = open_savings_account(client)
        system.ledger.fail_with = TransactionServiceError("Transactions service unreachable")

        r = client.post("/accounts/deposit", json={"account_id": account["id"], "amount": "10"})

        assert r.status_code == 502

    def test_restart_transactions(self, client):
        account = open_savings_account(client)
        client.post("/accounts/deposit", json={"account_id": account["id"], "amount": "10"})

        r = client.post("/accounts/restart-transactions")

        assert r.json() == {"message": "The number of transactions of the accounts was satisfactorily restarted"}
        assert client.get(f"/accounts/{account['id']}").json()["remaining_transactions"] == 5
