"""Pytest configuration and fixtures."""

import os
from typing import AsyncGenerator, Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DEBUG"] = "false"
os.environ["DRY_RUN"] = "true"
os.environ["ADMIN_TOKEN"] = ""
os.environ["COMETH_API_SECRET"] = ""

from web3 import AsyncWeb3

from safe_relay.store.models import Base
from safe_relay.store.repository import SponsorshipRepository
from safe_relay.wallet.base import DraftTransaction, WalletClient
from safe_relay.wallet.gas import GasEstimator

# Checksummed test addresses
WALLET = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
SPENDER = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
TOKEN = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
TARGET = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"


class FakeWalletClient(WalletClient):
    """Wallet client that records calls instead of hitting Cometh."""

    def __init__(
        self,
        nonce: int = 7,
        nonce_error: Optional[Exception] = None,
        draft_nonce: Optional[int] = None,
    ):
        self.nonce = nonce
        self.nonce_error = nonce_error
        self.draft_nonce = draft_nonce
        self.prepared: list[tuple] = []
        self.nonce_calls: list[str] = []
        self._provider = object()

    @property
    def provider(self):
        return self._provider

    async def prepare_transaction(self, to, value, data):
        self.prepared.append((to, value, data))
        return DraftTransaction(
            to=to,
            value=value if value is not None else "0",
            data=data or "0x",
            nonce=self.draft_nonce,
        )

    async def get_nonce(self, wallet_address):
        self.nonce_calls.append(wallet_address)
        if self.nonce_error is not None:
            raise self.nonce_error
        return self.nonce


class FakeGasEstimator(GasEstimator):
    """Deterministic estimator: 21000 gas per transaction data entry."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.calls: list[tuple] = []

    async def estimate(self, wallet_address, safe_transaction_data, provider):
        self.calls.append((wallet_address, safe_transaction_data, provider))
        if self.error is not None:
            raise self.error
        if isinstance(safe_transaction_data, list):
            return 21000 * len(safe_transaction_data)
        return 21000


@pytest.fixture
def wallet_client() -> FakeWalletClient:
    return FakeWalletClient()


@pytest.fixture
def gas_estimator() -> FakeGasEstimator:
    return FakeGasEstimator()


@pytest.fixture
def read_provider() -> AsyncWeb3:
    """Provider used only for local call encoding (never connected)."""
    return AsyncWeb3(AsyncWeb3.AsyncHTTPProvider("http://127.0.0.1:8545"))


@pytest_asyncio.fixture
async def db_engine():
    """Create in-memory database engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for testing."""
    session_factory = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def sponsorship_repo(db_session: AsyncSession) -> SponsorshipRepository:
    """Create sponsorship repository for testing."""
    return SponsorshipRepository(db_session)
