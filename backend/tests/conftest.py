"""
Test configuration and fixtures
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from moneytransfer.api.deps import get_transactions, get_transfer_service
from moneytransfer.core.backoff import RetryConfig
from moneytransfer.db.session import make_engine, make_session_factory
from moneytransfer.db.transactions import SqlAlchemyTransactionManager
from moneytransfer.main import app
from moneytransfer.models.bank_account import BankAccount
from moneytransfer.models.base import Base
from moneytransfer.models.transfer import Transfer  # noqa: F401
from moneytransfer.repositories.accounts import SqlAlchemyAccountRepository
from moneytransfer.repositories.transfers import SqlAlchemyTransferRepository
from moneytransfer.services.transfer_service import BulkTransferRequest, TransferIntent, TransferService

# Create in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = make_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = make_session_factory(engine)

ORG_IBAN = "FR10474608000002006107XXXXX"
ORG_BIC = "OIVUSCLQXXX"
ORG_NAME = "ACME Corp"


@pytest.fixture(scope="function")
def session_factory():
    """Fresh schema for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield TestingSessionLocal
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def transactions(session_factory):
    return SqlAlchemyTransactionManager(session_factory)


@pytest.fixture
def account_repo():
    return SqlAlchemyAccountRepository()


@pytest.fixture
def transfer_repo():
    return SqlAlchemyTransferRepository()


@pytest.fixture
def retry_config():
    return RetryConfig(base_delay=0.001, max_delay=0.01, max_retries=3)


@pytest.fixture
def org_account(transactions, account_repo):
    """Organization account holding 50.00"""
    account = BankAccount(organization_name=ORG_NAME, iban=ORG_IBAN, bic=ORG_BIC, balance_cents=5000)
    return transactions.run(lambda s: account_repo.create(account, s))


@pytest.fixture
def service(transactions, account_repo, transfer_repo, retry_config):
    return TransferService(transactions, account_repo, transfer_repo, retry_config)


@pytest.fixture
def client(transactions, service):
    """Test client with storage dependencies pointed at the SQLite database"""
    app.dependency_overrides[get_transactions] = lambda: transactions
    app.dependency_overrides[get_transfer_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_request():
    def _make(*amounts: int, iban: str = ORG_IBAN) -> BulkTransferRequest:
        return BulkTransferRequest(
            organization_name=ORG_NAME,
            organization_bic=ORG_BIC,
            organization_iban=iban,
            transfers=tuple(
                TransferIntent(
                    amount_cents=amount,
                    counterparty_name=f"Counterparty {i}",
                    counterparty_iban=f"EE38220022102014568{i}",
                    counterparty_bic="CRLYFRPPTOU",
                    description=f"Invoice {i}",
                )
                for i, amount in enumerate(amounts)
            ),
        )

    return _make


@pytest.fixture
def balance_of(transactions, account_repo):
    return lambda account_id: transactions.run(lambda s: account_repo.get(account_id, s).balance_cents)


@pytest.fixture
def transfers_of(transactions, transfer_repo):
    return lambda account_id: transactions.run(lambda s: transfer_repo.list_by_account(account_id, s))
