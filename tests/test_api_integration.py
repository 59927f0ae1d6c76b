"""
Integration tests for the Treasury Simulator API
Tests end-to-end workflows using FastAPI TestClient
"""

import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient

from treasury_sim.api import create_app
from treasury_sim.api.deps import get_simulator
from treasury_sim.clock import FixedClock
from treasury_sim.simulator import TreasurySimulator

TODAY = date(2024, 6, 15)
TOMORROW = TODAY + timedelta(days=1)


@pytest.fixture
def simulator():
    """Seeded simulator on a fixed clock"""
    return TreasurySimulator.from_seed(clock=FixedClock(TODAY))


@pytest.fixture
def client(simulator):
    """Create a test client wired to the test simulator"""
    app = create_app()
    app.dependency_overrides[get_simulator] = lambda: simulator
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealthEndpoints:
    """Test basic health endpoint"""

    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "healthy"


class TestAccountEndpoints:
    """Accounts, balances and totals"""

    def test_list_accounts(self, client):
        r = client.get("/accounts")
        assert r.status_code == 200
        data = r.json()
        assert len(data) == 10
        assert data[0]["identifier"] == "Mpesa_KES_1"
        assert data[0]["formatted_balance"] == "KES 50,000.00"

    def test_get_account(self, client):
        r = client.get("/accounts/Bank_USD_1")
        assert r.status_code == 200
        assert r.json()["currency"] == "USD"

    def test_get_unknown_account(self, client):
        r = client.get("/accounts/missing")
        assert r.status_code == 404

    def test_totals(self, client):
        r = client.get("/accounts/totals")
        assert r.status_code == 200
        data = r.json()
        assert data["totals"] == {"KES": "180000", "USD": "45000", "NGN": "1800000"}
        assert data["formatted"]["NGN"] == "NGN 1,800,000.00"

    def test_currencies(self, client):
        r = client.get("/accounts/currencies")
        assert r.json() == ["KES", "USD", "NGN"]


class TestTransferFlow:
    """Submitting, scheduling and rejecting transfers"""

    def test_immediate_transfer(self, client):
        r = client.post("/transfers", json={
            "from_account": "Bank_USD_1",
            "to_account": "Mpesa_KES_1",
            "amount": "10",
            "note": "float top-up"
        })
        assert r.status_code == 200
        data = r.json()
        assert data["status"] == "completed"
        assert data["transaction"]["converted_amount"] == "1470.0"
        assert data["transaction"]["date"] == TODAY.isoformat()

        balance = client.get("/accounts/Mpesa_KES_1").json()["balance"]
        assert balance == "51470.0"

    def test_numeric_json_amount(self, client):
        r = client.post("/transfers", json={
            "from_account": "Bank_USD_1",
            "to_account": "Bank_USD_2",
            "amount": 40
        })
        assert r.status_code == 200
        assert client.get("/accounts/Bank_USD_1").json()["balance"] == "19960"

    def test_future_transfer_is_scheduled(self, client):
        r = client.post("/transfers", json={
            "from_account": "Bank_USD_1",
            "to_account": "Bank_USD_2",
            "amount": "100",
            "execute_on": TOMORROW.isoformat()
        })
        assert r.status_code == 202
        data = r.json()
        assert data["status"] == "scheduled"
        assert data["transaction"] is None

        scheduled = client.get("/transfers/scheduled").json()
        assert [s["id"] for s in scheduled] == [data["scheduled"]["id"]]
        assert client.get("/accounts/Bank_USD_1").json()["balance"] == "20000"

    @pytest.mark.parametrize("payload,status,error", [
        ({"from_account": "missing", "to_account": "Bank_USD_2", "amount": "1"}, 404, "account_not_found"),
        ({"from_account": "Bank_USD_1", "to_account": "Bank_USD_1", "amount": "1"}, 400, "same_account"),
        ({"from_account": "Bank_USD_1", "to_account": "Bank_USD_2", "amount": "-1"}, 422, "invalid_amount"),
        ({"from_account": "Bank_USD_1", "to_account": "Bank_USD_2", "amount": "1abc2"}, 422, "invalid_amount"),
        ({"from_account": "Bank_USD_1", "to_account": "Bank_NGN_1", "amount": "9e999999"}, 422, "invalid_amount"),
        ({"from_account": "Bank_USD_1", "to_account": "Bank_USD_2", "amount": "1",
          "execute_on": (TODAY - timedelta(days=1)).isoformat()}, 400, "past_date"),
        ({"from_account": "Bank_USD_1", "to_account": "Bank_USD_2", "amount": "20000.01"}, 409, "insufficient_funds"),
    ])
    def test_rejections(self, client, payload, status, error):
        r = client.post("/transfers", json=payload)
        assert r.status_code == status
        assert r.json()["error"] == error
        assert client.get("/transactions").json() == []

    def test_tick_executes_due_transfers(self, client, simulator):
        client.post("/transfers", json={
            "from_account": "Bank_USD_1",
            "to_account": "Bank_USD_2",
            "amount": "100",
            "execute_on": TOMORROW.isoformat()
        })
        client.post("/transfers", json={
            "from_account": "Wallet_USD_3",
            "to_account": "Bank_USD_2",
            "amount": "999999",
            "execute_on": TOMORROW.isoformat()
        })

        r = client.post("/transfers/tick")
        assert r.json()["executed"] == []

        simulator.clock.set(TOMORROW)
        r = client.post("/transfers/tick")
        assert r.status_code == 200
        data = r.json()
        assert len(data["executed"]) == 1
        assert data["failed"][0]["reason"] == "insufficient_funds"
        assert data["remaining"] == 0

        failed = client.get("/transfers/scheduled/failed").json()
        assert failed[0]["entry"]["from_account"] == "Wallet_USD_3"
        assert client.get("/transfers/scheduled").json() == []


class TestTransactionEndpoints:
    """Transaction log and filters"""

    def test_filtered_log(self, client):
        client.post("/transfers", json={"from_account": "Bank_USD_1", "to_account": "Bank_USD_2", "amount": "1"})
        client.post("/transfers", json={"from_account": "Bank_KES_3", "to_account": "Bank_NGN_2", "amount": "100"})

        everything = client.get("/transactions").json()
        assert [t["from_account"] for t in everything] == ["Bank_KES_3", "Bank_USD_1"]

        ngn = client.get("/transactions", params={"currency": "NGN"}).json()
        assert [t["to_account"] for t in ngn] == ["Bank_NGN_2"]

        by_account = client.get("/transactions", params={"account": "Bank_USD_2"}).json()
        assert len(by_account) == 1

    def test_unknown_currency_filter(self, client):
        r = client.get("/transactions", params={"currency": "EUR"})
        assert r.status_code == 400
