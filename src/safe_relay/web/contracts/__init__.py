"""Request and response contracts for the relay API."""

from safe_relay.web.contracts.sponsorship import SponsorAddressRequest, SponsoredAddressResponse
from safe_relay.web.contracts.transactions import (
    EstimateSafeTxGasRequest,
    PrepareErc20TxRequest,
    PrepareTxRequest,
    SafeTransactionData,
    SafeTxDomain,
    SafeTxTypes,
    SignableTransactionEnvelope,
)

__all__ = [
    "EstimateSafeTxGasRequest",
    "PrepareErc20TxRequest",
    "PrepareTxRequest",
    "SafeTransactionData",
    "SafeTxDomain",
    "SafeTxTypes",
    "SignableTransactionEnvelope",
    "SponsorAddressRequest",
    "SponsoredAddressResponse",
]
