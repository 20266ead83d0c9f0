"""Safe transaction contracts.

Wire format is camelCase, matching the typed-data payload clients sign with
their Safe owner key. Nothing here is signed server-side.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from safe_relay.wallet.contracts import ZERO_ADDRESS


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SafeTransactionData(CamelModel):
    """Raw call parameters for a Safe transaction."""

    to: Optional[str] = Field(None, description="Destination address")
    value: Optional[Union[int, str]] = Field(None, description="Native value in wei")
    data: Optional[str] = Field(None, description="Hex-encoded calldata")


class PrepareTxRequest(CamelModel):
    """Request to prepare a generic Safe transaction."""

    wallet_address: Optional[str] = Field(None, description="Safe wallet address")
    safe_transaction_data: Optional[SafeTransactionData] = None


class PrepareErc20TxRequest(CamelModel):
    """Request to prepare an ERC-20 call from a Safe."""

    wallet_address: Optional[str] = Field(None, description="Safe wallet address")
    token_address: Optional[str] = Field(None, description="ERC-20 token contract")
    function_name: Optional[str] = Field(None, description="ERC-20 function, e.g. approve")
    args: list[Any] = Field(default_factory=list, description="Positional call arguments")


class EstimateSafeTxGasRequest(CamelModel):
    """Request to estimate safeTxGas for one or more transactions."""

    wallet_address: Optional[str] = Field(None, description="Safe wallet address")
    safe_transaction_data: Optional[Union[SafeTransactionData, list[SafeTransactionData]]] = None


class SafeTxDomain(CamelModel):
    """EIP-712 domain of a Safe transaction."""

    chain_id: Union[int, str]
    verifying_contract: str


class SafeTxTypes(CamelModel):
    """Typed fields of a Safe transaction."""

    to: str
    value: Union[int, str]
    data: str
    operation: str = "0"
    safe_tx_gas: str = "0"
    base_gas: str = "0"
    gas_price: str = "0"
    gas_token: str = ZERO_ADDRESS
    refund_receiver: str = ZERO_ADDRESS
    nonce: str


class SignableTransactionEnvelope(CamelModel):
    """Typed-data envelope returned to the client for signing."""

    domain: SafeTxDomain
    types: SafeTxTypes
