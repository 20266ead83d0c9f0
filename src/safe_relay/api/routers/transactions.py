"""Safe transaction preparation endpoints.

These endpoints prepare typed-data envelopes for client-side signing.
NO signing or broadcasting happens server-side.
"""

import logging

from fastapi import APIRouter, Depends

from safe_relay.api.dependencies import get_gas_estimator, get_read_provider, get_wallet_client
from safe_relay.api.errors import upstream_errors
from safe_relay.config import get_settings
from safe_relay.errors import ValidationError
from safe_relay.store.database import get_db
from safe_relay.store.repository import SponsorshipRepository
from safe_relay.wallet.base import WalletClient
from safe_relay.wallet.gas import GasEstimator
from safe_relay.web.contracts.transactions import (
    EstimateSafeTxGasRequest,
    PrepareErc20TxRequest,
    PrepareTxRequest,
    SignableTransactionEnvelope,
)
from safe_relay.web.services.transaction_service import TransactionService
from safe_relay.web.services.validation import validate_required_fields

logger = logging.getLogger(__name__)

router = APIRouter(tags=["transactions"])


@router.post("/prepare-tx", response_model=SignableTransactionEnvelope)
async def prepare_tx(
    body: PrepareTxRequest,
    wallet: WalletClient = Depends(get_wallet_client),
    gas_estimator: GasEstimator = Depends(get_gas_estimator),
) -> SignableTransactionEnvelope:
    """Prepare a Safe transaction to a sponsored address."""
    validate_required_fields(body, ["walletAddress", "safeTransactionData"])
    if not body.safe_transaction_data.to:
        raise ValidationError("Missing required fields: safeTransactionData.to")
    settings = get_settings()

    with upstream_errors("prepare-tx"):
        async with get_db() as session:
            service = TransactionService(
                wallet, gas_estimator, settings.chain_id, SponsorshipRepository(session)
            )
            return await service.prepare_transaction(
                body.wallet_address,
                body.safe_transaction_data.model_dump(),
            )


@router.post("/prepare-erc20-tx", response_model=SignableTransactionEnvelope)
async def prepare_erc20_tx(
    body: PrepareErc20TxRequest,
    wallet: WalletClient = Depends(get_wallet_client),
    gas_estimator: GasEstimator = Depends(get_gas_estimator),
    read_provider=Depends(get_read_provider),
) -> SignableTransactionEnvelope:
    """Prepare a Safe transaction calling an ERC-20 function.

    chainId and value are returned as strings.
    """
    validate_required_fields(body, ["walletAddress", "tokenAddress", "functionName"])
    settings = get_settings()

    logger.info(
        f"prepare-erc20-tx: wallet={body.wallet_address} token={body.token_address} "
        f"function={body.function_name} args={body.args}"
    )

    with upstream_errors("prepare-erc20-tx"):
        async with get_db() as session:
            service = TransactionService(
                wallet,
                gas_estimator,
                settings.chain_id,
                SponsorshipRepository(session),
                read_provider=read_provider,
            )
            return await service.prepare_erc20_transaction(
                body.wallet_address,
                body.token_address,
                body.function_name,
                body.args,
            )


@router.post("/estimate-safe-tx-gas")
async def estimate_safe_tx_gas(
    body: EstimateSafeTxGasRequest,
    wallet: WalletClient = Depends(get_wallet_client),
    gas_estimator: GasEstimator = Depends(get_gas_estimator),
) -> int:
    """Estimate safeTxGas for a wallet's transaction data."""
    validate_required_fields(body, ["walletAddress", "safeTransactionData"])

    data = body.safe_transaction_data
    if isinstance(data, list):
        tx_data = [entry.model_dump() for entry in data]
    else:
        tx_data = data.model_dump()

    service = TransactionService(wallet, gas_estimator, get_settings().chain_id)
    with upstream_errors("estimate-safe-tx-gas"):
        return await service.estimate_safe_tx_gas(body.wallet_address, tx_data)
