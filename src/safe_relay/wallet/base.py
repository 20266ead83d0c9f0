"""Wallet client base interface.

The wallet-as-a-service backend is modeled as a capability interface so
handlers can be exercised against fakes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass
class DraftTransaction:
    """Safe transaction data prepared from raw call parameters."""

    to: str
    value: Union[int, str]
    data: str = "0x"
    operation: int = 0
    nonce: Optional[Union[int, str]] = None


def to_int(value: Any) -> int:
    """Convert an int, decimal string or 0x-hex string to int."""
    if value is None or value == "":
        return 0
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.lower().startswith("0x"):
        return int(text, 16)
    return int(text)


class WalletClient(ABC):
    """Abstract base class for smart-contract wallet backends."""

    @abstractmethod
    async def prepare_transaction(
        self, to: str, value: Union[int, str, None], data: Optional[str]
    ) -> DraftTransaction:
        """Prepare Safe transaction data for a call.

        Args:
            to: Destination address
            value: Native value in wei (int, decimal or hex string)
            data: Hex-encoded calldata

        Returns:
            DraftTransaction ready for envelope assembly
        """
        raise NotImplementedError()

    @abstractmethod
    async def get_nonce(self, wallet_address: str) -> int:
        """Read the Safe nonce of a wallet.

        Raises if the wallet has no deployed contract.
        """
        raise NotImplementedError()

    @property
    @abstractmethod
    def provider(self) -> Any:
        """Provider handle used for contract calls and gas estimation."""
        raise NotImplementedError()

    async def close(self) -> None:
        """Release network resources."""
        return None
