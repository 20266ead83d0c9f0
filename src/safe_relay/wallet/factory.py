"""Factories for wallet-side collaborators."""

from web3 import AsyncWeb3

from safe_relay.config import Settings, get_settings
from safe_relay.wallet.base import WalletClient
from safe_relay.wallet.cometh import ComethWalletClient
from safe_relay.wallet.gas import GasEstimator, SafeTxGasEstimator


def create_wallet_client(settings: Settings | None = None) -> WalletClient:
    """Create the Cometh wallet client from settings."""
    settings = settings or get_settings()
    return ComethWalletClient(
        api_key=settings.cometh_api_key,
        rpc_url=settings.cometh_rpc_url,
        chain_id=settings.chain_id,
        timeout=settings.http_timeout,
    )


def create_read_provider(settings: Settings | None = None) -> AsyncWeb3:
    """Create the fixed read-only provider used for contract bindings."""
    settings = settings or get_settings()
    return AsyncWeb3(
        AsyncWeb3.AsyncHTTPProvider(
            settings.read_rpc_url,
            request_kwargs={"timeout": settings.http_timeout},
        )
    )


def create_gas_estimator() -> GasEstimator:
    """Create the safeTxGas estimator."""
    return SafeTxGasEstimator()
