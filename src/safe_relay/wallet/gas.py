"""safeTxGas estimation.

Each transaction data entry is estimated as a call from the Safe itself, and
the estimates are summed.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Union

from web3 import AsyncWeb3

from safe_relay.wallet.base import to_int

logger = logging.getLogger(__name__)

TransactionData = Union[dict, list[dict]]


class GasEstimator(ABC):
    """Abstract base class for safeTxGas estimators."""

    @abstractmethod
    async def estimate(
        self,
        wallet_address: str,
        safe_transaction_data: TransactionData,
        provider: Any,
    ) -> int:
        """Estimate safeTxGas for one or more transaction data entries."""
        raise NotImplementedError()


class SafeTxGasEstimator(GasEstimator):
    """Estimates safeTxGas with eth_estimateGas on the wallet provider."""

    async def estimate(
        self,
        wallet_address: str,
        safe_transaction_data: TransactionData,
        provider: AsyncWeb3,
    ) -> int:
        entries = (
            safe_transaction_data
            if isinstance(safe_transaction_data, list)
            else [safe_transaction_data]
        )
        if not entries:
            return 0

        sender = AsyncWeb3.to_checksum_address(wallet_address)
        total = 0
        for entry in entries:
            tx = {
                "from": sender,
                "to": AsyncWeb3.to_checksum_address(entry["to"]),
                "value": to_int(entry.get("value")),
                "data": entry.get("data") or "0x",
            }
            total += await provider.eth.estimate_gas(tx)

        logger.debug(f"safeTxGas for {wallet_address} over {len(entries)} tx: {total}")
        return total
