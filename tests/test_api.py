"""Tests for the FastAPI endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

from safe_relay.api.app import create_app
from safe_relay.config import get_settings
from safe_relay.providers.dryrun import DryRunSponsorshipProvider
from safe_relay.store.database import close_db, get_db, get_engine
from safe_relay.store.models import Base
from safe_relay.store.repository import SponsorshipRepository
from safe_relay.wallet.contracts import ZERO_ADDRESS

from conftest import SPENDER, TARGET, TOKEN, WALLET, FakeGasEstimator, FakeWalletClient


@pytest.fixture
def sponsorship_provider():
    return DryRunSponsorshipProvider()


@pytest.fixture
async def test_app(wallet_client, gas_estimator, read_provider, sponsorship_provider):
    """Create test application with fresh database."""
    # Create tables in memory database
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    app = create_app(
        wallet_client=wallet_client,
        gas_estimator=gas_estimator,
        read_provider=read_provider,
        sponsorship_provider=sponsorship_provider,
    )

    yield app

    # Cleanup
    await close_db()


@pytest.fixture
async def client(test_app):
    """Create async test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def sponsor(address: str, chain_id: int = 43113) -> None:
    """Store a sponsored address directly."""
    async with get_db() as session:
        await SponsorshipRepository(session).add_sponsored(chain_id, address)


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    @pytest.mark.asyncio
    async def test_health_check(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "safe-relay"

    @pytest.mark.asyncio
    async def test_detailed_health_redacts_secrets(self, client):
        response = await client.get("/health/detailed")

        assert response.status_code == 200
        config = response.json()["config"]
        assert config["chain_id"] == 43113
        assert config["cometh"]["api_secret"] == "(not set)"

    @pytest.mark.asyncio
    async def test_detailed_health_reports_relay_state(self, client):
        await sponsor(TARGET)

        data = (await client.get("/health/detailed")).json()

        assert data["status"] == "healthy"
        assert data["chain_id"] == 43113
        assert data["sponsorship"] == {"provider": "dryrun", "dry_run": True}
        assert data["wallet_client"] == "FakeWalletClient"
        assert data["store"] == {"reachable": True, "sponsored_addresses": 1}

    @pytest.mark.asyncio
    async def test_detailed_health_degraded_without_table(self, client):
        async with get_engine().begin() as conn:
            await conn.execute(text("DROP TABLE sponsored_addresses"))

        data = (await client.get("/health/detailed")).json()

        assert data["status"] == "degraded"
        assert data["store"]["reachable"] is False


class TestSponsoredAddressEndpoints:
    """Tests for sponsored address listing and registration."""

    @pytest.mark.asyncio
    async def test_list_empty(self, client):
        response = await client.get("/sponsored-address")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_register_stores_lowercase_and_forwards_original_case(
        self, client, sponsorship_provider
    ):
        response = await client.post("/sponsored-address", json={"targetAddress": TARGET})

        assert response.status_code == 200
        data = response.json()
        assert data["sponsoredAddress"]["targetAddress"] == TARGET
        assert sponsorship_provider.registered == [TARGET]

        listing = (await client.get("/sponsored-address")).json()
        assert len(listing) == 1
        assert listing[0]["targetAddress"] == TARGET.lower()
        assert listing[0]["chainId"] == 43113

    @pytest.mark.asyncio
    async def test_register_twice_is_rejected(self, client, sponsorship_provider):
        first = await client.post("/sponsored-address", json={"targetAddress": TARGET})
        second = await client.post("/sponsored-address", json={"targetAddress": TARGET.lower()})

        assert first.status_code == 200
        assert second.status_code == 400
        assert second.json()["message"] == f"Address {TARGET.lower()} is already sponsored"
        # Provider only called once
        assert sponsorship_provider.registered == [TARGET]

        listing = (await client.get("/sponsored-address")).json()
        assert [row["targetAddress"] for row in listing] == [TARGET.lower()]

    @pytest.mark.asyncio
    async def test_register_missing_address(self, client):
        response = await client.post("/sponsored-address", json={})

        assert response.status_code == 400
        assert "targetAddress" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_register_provider_failure_returns_500(self, test_app, client):
        class FailingProvider(DryRunSponsorshipProvider):
            async def register_address(self, target_address):
                raise RuntimeError("cometh unavailable")

        test_app.state.sponsorship_provider = FailingProvider()

        response = await client.post("/sponsored-address", json={"targetAddress": TARGET})

        assert response.status_code == 500
        assert "cometh unavailable" in response.json()["message"]
        assert (await client.get("/sponsored-address")).json() == []

    @pytest.mark.asyncio
    async def test_list_store_failure_returns_500(self, client):
        async with get_engine().begin() as conn:
            await conn.execute(text("DROP TABLE sponsored_addresses"))

        response = await client.get("/sponsored-address")

        assert response.status_code == 500
        assert "sponsored_addresses" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_register_requires_admin_token_when_configured(self, client, monkeypatch):
        monkeypatch.setattr(get_settings(), "admin_token", "s3cret")

        denied = await client.post("/sponsored-address", json={"targetAddress": TARGET})
        allowed = await client.post(
            "/sponsored-address",
            json={"targetAddress": TARGET},
            headers={"X-Admin-Token": "s3cret"},
        )

        assert denied.status_code == 401
        assert denied.json() == {"message": "Invalid admin token"}
        assert allowed.status_code == 200


class TestPrepareTx:
    """Tests for generic Safe transaction preparation."""

    @pytest.mark.asyncio
    async def test_not_sponsored_is_rejected_without_nonce_lookup(self, client, wallet_client):
        response = await client.post(
            "/prepare-tx",
            json={
                "walletAddress": WALLET,
                "safeTransactionData": {"to": TARGET, "value": "0", "data": "0x"},
            },
        )

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == f"Address {TARGET} is not sponsored, please add it to the list"
        assert wallet_client.nonce_calls == []

    @pytest.mark.asyncio
    async def test_sponsored_returns_envelope(self, client, wallet_client, gas_estimator):
        await sponsor(TARGET)

        response = await client.post(
            "/prepare-tx",
            json={
                "walletAddress": WALLET,
                "safeTransactionData": {"to": TARGET, "value": "1000", "data": "0xabcdef"},
            },
        )

        assert response.status_code == 200
        envelope = response.json()
        assert envelope["domain"] == {"chainId": 43113, "verifyingContract": WALLET}
        assert envelope["types"] == {
            "to": TARGET,
            "value": "1000",
            "data": "0xabcdef",
            "operation": "0",
            "safeTxGas": "0",
            "baseGas": "0",
            "gasPrice": "0",
            "gasToken": ZERO_ADDRESS,
            "refundReceiver": ZERO_ADDRESS,
            "nonce": "7",
        }
        assert wallet_client.nonce_calls == [WALLET]
        assert len(gas_estimator.calls) == 1

    @pytest.mark.asyncio
    async def test_sponsorship_check_is_case_insensitive(self, client):
        await sponsor(TARGET)

        response = await client.post(
            "/prepare-tx",
            json={
                "walletAddress": WALLET,
                "safeTransactionData": {"to": TARGET.upper().replace("0X", "0x"), "value": "0"},
            },
        )

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_undeployed_wallet_gets_nonce_zero(self, test_app, client):
        test_app.state.wallet_client = FakeWalletClient(nonce_error=RuntimeError("no contract code"))
        await sponsor(TARGET)

        response = await client.post(
            "/prepare-tx",
            json={"walletAddress": WALLET, "safeTransactionData": {"to": TARGET}},
        )

        assert response.status_code == 200
        assert response.json()["types"]["nonce"] == "0"

    @pytest.mark.asyncio
    async def test_draft_nonce_skips_lookup(self, test_app, client):
        wallet = FakeWalletClient(draft_nonce=3)
        test_app.state.wallet_client = wallet
        await sponsor(TARGET)

        response = await client.post(
            "/prepare-tx",
            json={"walletAddress": WALLET, "safeTransactionData": {"to": TARGET}},
        )

        assert response.json()["types"]["nonce"] == "3"
        assert wallet.nonce_calls == []

    @pytest.mark.asyncio
    async def test_missing_fields(self, client):
        response = await client.post("/prepare-tx", json={"walletAddress": WALLET})

        assert response.status_code == 400
        assert "safeTransactionData" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_gas_estimation_failure_returns_500(self, test_app, client):
        test_app.state.gas_estimator = FakeGasEstimator(error=RuntimeError("execution reverted"))
        await sponsor(TARGET)

        response = await client.post(
            "/prepare-tx",
            json={"walletAddress": WALLET, "safeTransactionData": {"to": TARGET}},
        )

        assert response.status_code == 500
        assert response.json() == {"message": "execution reverted"}


class TestPrepareErc20Tx:
    """Tests for ERC-20 call preparation."""

    @pytest.mark.asyncio
    async def test_approve_envelope_has_string_chain_id_and_value(self, client, wallet_client):
        await sponsor(TOKEN)

        response = await client.post(
            "/prepare-erc20-tx",
            json={
                "walletAddress": WALLET,
                "tokenAddress": TOKEN,
                "functionName": "approve",
                "args": [SPENDER, "1000000000000000000"],
            },
        )

        assert response.status_code == 200
        envelope = response.json()
        assert envelope["domain"]["chainId"] == "43113"
        assert envelope["domain"]["verifyingContract"] == WALLET
        assert envelope["types"]["value"] == "0"
        assert envelope["types"]["to"] == TOKEN
        assert envelope["types"]["data"].startswith("0x095ea7b3")
        assert SPENDER.lower()[2:] in envelope["types"]["data"]
        assert envelope["types"]["nonce"] == "7"

        to, value, data = wallet_client.prepared[0]
        assert to == TOKEN
        assert value == 0

    @pytest.mark.asyncio
    async def test_unsponsored_token_is_rejected(self, client, wallet_client):
        response = await client.post(
            "/prepare-erc20-tx",
            json={
                "walletAddress": WALLET,
                "tokenAddress": TOKEN,
                "functionName": "transfer",
                "args": [SPENDER, 5],
            },
        )

        assert response.status_code == 400
        assert TOKEN in response.text
        assert wallet_client.nonce_calls == []

    @pytest.mark.asyncio
    async def test_missing_required_fields(self, client, wallet_client):
        response = await client.post(
            "/prepare-erc20-tx",
            json={"walletAddress": WALLET, "args": []},
        )

        assert response.status_code == 400
        message = response.json()["message"]
        assert "tokenAddress" in message
        assert "functionName" in message
        assert wallet_client.prepared == []

    @pytest.mark.asyncio
    async def test_unknown_function(self, client):
        response = await client.post(
            "/prepare-erc20-tx",
            json={
                "walletAddress": WALLET,
                "tokenAddress": TOKEN,
                "functionName": "mint",
                "args": [],
            },
        )

        assert response.status_code == 400
        assert "mint" in response.json()["message"]


class TestEstimateSafeTxGas:
    """Tests for safeTxGas estimation."""

    @pytest.mark.asyncio
    async def test_estimate_is_repeatable(self, client, wallet_client, gas_estimator):
        payload = {
            "walletAddress": WALLET,
            "safeTransactionData": {"to": TARGET, "value": "0", "data": "0x"},
        }

        first = await client.post("/estimate-safe-tx-gas", json=payload)
        second = await client.post("/estimate-safe-tx-gas", json=payload)

        assert first.status_code == 200
        assert first.json() == second.json() == 21000
        assert gas_estimator.calls[0][2] is wallet_client.provider

    @pytest.mark.asyncio
    async def test_estimate_batch(self, client):
        response = await client.post(
            "/estimate-safe-tx-gas",
            json={
                "walletAddress": WALLET,
                "safeTransactionData": [{"to": TARGET}, {"to": TOKEN}],
            },
        )

        assert response.json() == 42000

    @pytest.mark.asyncio
    async def test_estimate_failure_returns_500(self, test_app, client):
        test_app.state.gas_estimator = FakeGasEstimator(error=RuntimeError("rpc timeout"))

        response = await client.post(
            "/estimate-safe-tx-gas",
            json={"walletAddress": WALLET, "safeTransactionData": {"to": TARGET}},
        )

        assert response.status_code == 500
        assert response.json()["message"] == "rpc timeout"

    @pytest.mark.asyncio
    async def test_malformed_body_returns_400(self, client):
        response = await client.post(
            "/estimate-safe-tx-gas",
            json={"walletAddress": WALLET, "safeTransactionData": "not-an-object"},
        )

        assert response.status_code == 400
