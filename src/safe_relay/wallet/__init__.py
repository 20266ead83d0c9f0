"""Smart-contract wallet collaborators: wallet client, gas estimator, contracts."""

from safe_relay.wallet.base import DraftTransaction, WalletClient
from safe_relay.wallet.cometh import ComethWalletClient
from safe_relay.wallet.factory import create_gas_estimator, create_read_provider, create_wallet_client
from safe_relay.wallet.gas import GasEstimator, SafeTxGasEstimator

__all__ = [
    "ComethWalletClient",
    "DraftTransaction",
    "GasEstimator",
    "SafeTxGasEstimator",
    "WalletClient",
    "create_gas_estimator",
    "create_read_provider",
    "create_wallet_client",
]
