"""Typed-data envelope assembly for Safe transactions."""

from typing import Union

from safe_relay.wallet.base import DraftTransaction
from safe_relay.web.contracts.transactions import (
    SafeTxDomain,
    SafeTxTypes,
    SignableTransactionEnvelope,
)


def build_envelope(
    draft: DraftTransaction,
    wallet_address: str,
    nonce: Union[int, str],
    chain_id: int,
) -> SignableTransactionEnvelope:
    """Build the signable envelope for a prepared transaction.

    Gas fields are zero and refunds go nowhere: the relayer pays.
    """
    return SignableTransactionEnvelope(
        domain=SafeTxDomain(chain_id=chain_id, verifying_contract=wallet_address),
        types=SafeTxTypes(
            to=draft.to,
            value=draft.value,
            data=draft.data,
            nonce=str(nonce),
        ),
    )


def stringify_envelope(envelope: SignableTransactionEnvelope) -> SignableTransactionEnvelope:
    """Return a copy with chainId and value rendered as decimal strings."""
    return envelope.model_copy(
        update={
            "domain": envelope.domain.model_copy(update={"chain_id": str(envelope.domain.chain_id)}),
            "types": envelope.types.model_copy(update={"value": str(envelope.types.value)}),
        }
    )
