"""Safe transaction preparation.

Prepares transactions for client-side signing. The relay never signs or
broadcasts; it only gates on sponsorship and assembles the typed-data
envelope.
"""

import logging
from typing import Any, Optional

from safe_relay.errors import NotSponsoredError, RelayError
from safe_relay.store.repository import SponsorshipRepository
from safe_relay.wallet.base import DraftTransaction, WalletClient
from safe_relay.wallet.contracts import populate_erc20_call
from safe_relay.wallet.gas import GasEstimator, TransactionData
from safe_relay.web.contracts.transactions import SignableTransactionEnvelope
from safe_relay.web.services.envelope import build_envelope, stringify_envelope

logger = logging.getLogger(__name__)


class TransactionService:
    """Orchestrates wallet client, gas estimator and sponsorship store.

    Gas estimation needs no store, so the repository may be omitted there.
    """

    def __init__(
        self,
        wallet: WalletClient,
        gas_estimator: GasEstimator,
        chain_id: int,
        repository: Optional[SponsorshipRepository] = None,
        read_provider: Optional[Any] = None,
    ):
        self.wallet = wallet
        self.gas_estimator = gas_estimator
        self.repository = repository
        self.chain_id = chain_id
        self.read_provider = read_provider

    async def ensure_sponsored(self, address: str) -> None:
        """Raise NotSponsoredError unless the address is sponsored on our chain."""
        if self.repository is None:
            raise RelayError("Sponsorship store not available")
        if not await self.repository.is_sponsored(self.chain_id, address):
            logger.info(f"Rejected transaction to unsponsored address {address}")
            raise NotSponsoredError(address)

    async def resolve_nonce(self, draft: DraftTransaction, wallet_address: str) -> str:
        """Use the draft nonce if set, else read the Safe nonce on-chain.

        A failed lookup yields "0": the wallet may not be deployed yet.
        """
        if draft.nonce:
            return str(draft.nonce)

        try:
            nonce = await self.wallet.get_nonce(wallet_address)
        except Exception as e:
            logger.error(f"Nonce lookup failed for {wallet_address}, using 0: {e}")
            return "0"

        return str(nonce)

    async def estimate_safe_tx_gas(
        self,
        wallet_address: str,
        safe_transaction_data: TransactionData,
    ) -> int:
        return await self.gas_estimator.estimate(
            wallet_address,
            safe_transaction_data,
            self.wallet.provider,
        )

    async def _envelope_for(
        self, draft: DraftTransaction, wallet_address: str
    ) -> SignableTransactionEnvelope:
        await self.ensure_sponsored(draft.to)
        nonce = await self.resolve_nonce(draft, wallet_address)
        envelope = build_envelope(draft, wallet_address, nonce, self.chain_id)
        logger.info(f"Envelope for {wallet_address}: {envelope.model_dump(by_alias=True)}")
        return envelope

    async def prepare_transaction(
        self,
        wallet_address: str,
        safe_transaction_data: dict,
    ) -> SignableTransactionEnvelope:
        """Prepare a generic Safe transaction.

        Args:
            wallet_address: Safe wallet address (verifying contract)
            safe_transaction_data: Dict with to, value and data

        Returns:
            Envelope for the client to sign
        """
        # Logged only; the estimate does not gate the transaction
        safe_tx_gas = await self.estimate_safe_tx_gas(wallet_address, safe_transaction_data)
        logger.info(f"safeTxGas for {wallet_address}: {safe_tx_gas}")

        draft = await self.wallet.prepare_transaction(
            safe_transaction_data.get("to"),
            safe_transaction_data.get("value"),
            safe_transaction_data.get("data"),
        )
        logger.debug(f"Draft transaction: {draft}")

        return await self._envelope_for(draft, wallet_address)

    async def prepare_erc20_transaction(
        self,
        wallet_address: str,
        token_address: str,
        function_name: str,
        args: list[Any],
    ) -> SignableTransactionEnvelope:
        """Prepare a Safe transaction calling an ERC-20 function.

        chainId and value are returned as strings.
        """
        call = populate_erc20_call(
            self.read_provider,
            token_address,
            function_name,
            args,
            sender=wallet_address,
            chain_id=self.chain_id,
        )

        draft = await self.wallet.prepare_transaction(call.to, call.value, call.data)
        logger.debug(f"Draft ERC-20 transaction: {draft}")

        envelope = await self._envelope_for(draft, wallet_address)
        return stringify_envelope(envelope)
