from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from .. import main as main_module
from ..core.config import get_settings
from ..core.db import create_engine_for_url, set_engine
from ..core.dependencies import get_account_repository, get_authenticator
from ..core.errors import PersistenceFailure
from ..domain import Account
from ..main import app
from ..services import InMemoryAccountRepository, InMemoryAuthenticator
from ..services.seed import seed_demo_data

ALICE = {"X-Customer-Number": "952141", "X-Pin": "191904"}
BOB = {"X-Customer-Number": "989947", "X-Pin": "717976"}

@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    repository = InMemoryAccountRepository()
    authenticator = InMemoryAuthenticator()
    seed_demo_data(repository, authenticator)

    app.dependency_overrides[get_account_repository] = lambda: repository
    app.dependency_overrides[get_authenticator] = lambda: authenticator

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_list_accounts(client: TestClient) -> None:
    response = client.get("/accounts", headers=ALICE)
    assert response.status_code == 200
    assert response.json() == [
        {"account_number": 1001, "account_type": "CHECKING", "balance": "500.00", "balance_minor_units": 50000},
        {"account_number": 1002, "account_type": "SAVINGS", "balance": "1200.00", "balance_minor_units": 120000},
    ]


def test_wrong_pin_rejected(client: TestClient) -> None:
    response = client.get("/accounts", headers={**ALICE, "X-Pin": "999999"})
    assert response.status_code == 401
    assert response.json()["kind"] == "authentication"


def test_deposit_and_withdraw(client: TestClient) -> None:
    deposit = client.post("/accounts/1001/deposit", json={"amount": "50.00"}, headers=ALICE)
    assert deposit.status_code == 200
    assert deposit.json()["balance"] == "550.00"

    withdraw = client.post("/accounts/1001/withdraw", json={"amount": 50}, headers=ALICE)
    assert withdraw.status_code == 200
    assert withdraw.json()["balance"] == "500.00"


def test_withdraw_insufficient_funds(client: TestClient) -> None:
    response = client.post("/accounts/1001/withdraw", json={"amount": "600.00"}, headers=ALICE)
    assert response.status_code == 409
    assert response.json()["kind"] == "insufficient_funds"

    snapshot = client.get("/accounts/1001", headers=ALICE)
    assert snapshot.json()["balance"] == "500.00"


def test_invalid_amount_returns_400(client: TestClient) -> None:
    response = client.post("/accounts/1001/deposit", json={"amount": "NaN"}, headers=ALICE)
    assert response.status_code == 400
    assert response.json() == {"detail": "Amount must be finite", "kind": "validation"}


def test_other_customers_account_is_404(client: TestClient) -> None:
    response = client.post("/accounts/2001/deposit", json={"amount": "1.00"}, headers=ALICE)
    assert response.status_code == 404

    response = client.get("/accounts/1001", headers=BOB)
    assert response.status_code == 404


def test_transfer(client: TestClient) -> None:
    response = client.post(
        "/transfers",
        json={"from_account": 1002, "to_account": 1001, "amount": "200.00"},
        headers=ALICE,
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["source"] == {"account_number": 1002, "balance": "1000.00"}
    assert payload["dest"] == {"account_number": 1001, "balance": "700.00"}


def test_transfer_rejects_self_transfer(client: TestClient) -> None:
    response = client.post(
        "/transfers",
        json={"from_account": 1001, "to_account": 1001, "amount": "10.00"},
        headers=ALICE,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot transfer to the same account"


def test_transfer_to_other_customer_not_allowed(client: TestClient) -> None:
    response = client.post(
        "/transfers",
        json={"from_account": 1001, "to_account": 2001, "amount": "10.00", "to_customer": 989947},
        headers=ALICE,
    )
    assert response.status_code == 400


def test_open_account(client: TestClient) -> None:
    response = client.post(
        "/accounts", json={"account_type": "CHECKING", "initial_deposit": "0.00"}, headers=ALICE
    )
    assert response.status_code == 201
    number = response.json()["account_number"]
    assert number not in (1001, 1002, 2001)

    account = client.get(f"/accounts/{number}", headers=ALICE)
    assert account.json()["balance"] == "0.00"


def test_open_account_requires_type(client: TestClient) -> None:
    response = client.post("/accounts", json={"initial_deposit": "10.00"}, headers=ALICE)
    assert response.status_code == 400


class UnreachableRepository(InMemoryAccountRepository):
    def save(self, account: Account) -> None:
        raise PersistenceFailure("Backend unreachable")


def test_persistence_failure_returns_503() -> None:
    repository = UnreachableRepository()
    authenticator = InMemoryAuthenticator()
    seed_demo_data(repository, authenticator)
    app.dependency_overrides[get_account_repository] = lambda: repository
    app.dependency_overrides[get_authenticator] = lambda: authenticator

    try:
        with TestClient(app) as test_client:
            response = test_client.post(
                "/accounts/1001/deposit", json={"amount": "50.00"}, headers=ALICE
            )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503
    assert response.json() == {"kind": "persistence", "detail": "Backend unreachable"}


@pytest.fixture
def sql_client(tmp_path, monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    monkeypatch.setenv("LEDGER_BACKEND", "sql")
    monkeypatch.setenv("LEDGER_DATABASE_URL", f"sqlite:///{tmp_path / 'api.db'}")
    get_settings.cache_clear()
    monkeypatch.setattr(main_module, "settings", get_settings())
    engine = create_engine_for_url(get_settings().database_url)
    set_engine(engine)

    with TestClient(app) as test_client:
        yield test_client

    set_engine(None)
    engine.dispose()
    get_settings.cache_clear()


def test_sql_backend_seeds_and_serves_accounts(sql_client: TestClient) -> None:
    accounts = sql_client.get("/accounts", headers=ALICE)
    assert accounts.status_code == 200
    assert [a["balance"] for a in accounts.json()] == ["500.00", "1200.00"]

    wrong_pin = sql_client.get("/accounts", headers={**ALICE, "X-Pin": "000000"})
    assert wrong_pin.status_code == 401


def test_sql_backend_transfer_persists(sql_client: TestClient) -> None:
    response = sql_client.post(
        "/transfers",
        json={"from_account": 1002, "to_account": 1001, "amount": "200.00"},
        headers=ALICE,
    )
    assert response.status_code == 200

    checking = sql_client.get("/accounts/1001", headers=ALICE)
    assert checking.json()["balance"] == "700.00"
    assert sql_client.get("/accounts/1001", headers=BOB).status_code == 404


def test_sql_backend_rejects_oversized_deposit(sql_client: TestClient) -> None:
    response = sql_client.post("/accounts/1001/deposit", json={"amount": "1e30"}, headers=ALICE)
    assert response.status_code == 400
    assert response.json()["kind"] == "validation"
