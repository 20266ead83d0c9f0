"""Cometh Connect wallet client.

Wraps the Cometh RPC endpoint with web3.py. Transaction preparation mirrors
the Connect SDK: the call is normalized into Safe transaction data and the
nonce is left for the caller to resolve, since the relay holds no wallet
session of its own.
"""

import logging
from typing import Optional, Union

from web3 import AsyncWeb3

from safe_relay.wallet.base import DraftTransaction, WalletClient, to_int
from safe_relay.wallet.contracts import SAFE_NONCE_ABI

logger = logging.getLogger(__name__)


class ComethWalletClient(WalletClient):
    """Wallet client backed by the Cometh Connect RPC."""

    def __init__(
        self,
        api_key: str,
        rpc_url: str,
        chain_id: int,
        timeout: float = 30.0,
    ):
        """Initialize the Cometh wallet client.

        Args:
            api_key: Cometh Connect API key, sent with RPC requests
            rpc_url: Cometh RPC URL
            chain_id: Chain the wallet operates on
            timeout: RPC request timeout in seconds
        """
        self.api_key = api_key
        self.rpc_url = rpc_url
        self.chain_id = chain_id

        request_kwargs: dict = {"timeout": timeout}
        if api_key:
            request_kwargs["headers"] = {"apikey": api_key}

        self._w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url, request_kwargs=request_kwargs))

    @property
    def provider(self) -> AsyncWeb3:
        return self._w3

    async def prepare_transaction(
        self,
        to: str,
        value: Union[int, str, None],
        data: Optional[str],
    ) -> DraftTransaction:
        if not to or not AsyncWeb3.is_address(to):
            raise ValueError(f"Invalid destination address: {to}")

        return DraftTransaction(
            to=to,
            value=str(to_int(value)),
            data=data or "0x",
            operation=0,
        )

    async def get_nonce(self, wallet_address: str) -> int:
        safe = self._w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(wallet_address),
            abi=SAFE_NONCE_ABI,
        )
        nonce = await safe.functions.nonce().call()
        logger.debug(f"Safe nonce for {wallet_address}: {nonce}")
        return int(nonce)

    async def close(self) -> None:
        await self._w3.provider.disconnect()

    def __repr__(self) -> str:
        return f"ComethWalletClient(chain_id={self.chain_id}, rpc_url={self.rpc_url})"
