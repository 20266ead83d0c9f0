"""Contract ABIs and local call encoding.

Calls are encoded without touching the network; the binding only needs the
provider for codec configuration.
"""

import logging
from dataclasses import dataclass
from typing import Any

from web3 import AsyncWeb3

from safe_relay.errors import ValidationError
from safe_relay.wallet.base import to_int

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Safe proxies expose nonce() through the singleton
SAFE_NONCE_ABI = [
    {
        "inputs": [],
        "name": "nonce",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
]


def _fn(name: str, inputs: list[tuple[str, str]], outputs: list[str], mutability: str) -> dict:
    return {
        "inputs": [{"name": n, "type": t} for n, t in inputs],
        "name": name,
        "outputs": [{"name": "", "type": t} for t in outputs],
        "stateMutability": mutability,
        "type": "function",
    }


ERC20_ABI = [
    _fn("name", [], ["string"], "view"),
    _fn("symbol", [], ["string"], "view"),
    _fn("decimals", [], ["uint8"], "view"),
    _fn("totalSupply", [], ["uint256"], "view"),
    _fn("balanceOf", [("account", "address")], ["uint256"], "view"),
    _fn("allowance", [("owner", "address"), ("spender", "address")], ["uint256"], "view"),
    _fn("transfer", [("to", "address"), ("amount", "uint256")], ["bool"], "nonpayable"),
    _fn("approve", [("spender", "address"), ("amount", "uint256")], ["bool"], "nonpayable"),
    _fn(
        "transferFrom",
        [("from", "address"), ("to", "address"), ("amount", "uint256")],
        ["bool"],
        "nonpayable",
    ),
    _fn("increaseAllowance", [("spender", "address"), ("addedValue", "uint256")], ["bool"], "nonpayable"),
    _fn(
        "decreaseAllowance",
        [("spender", "address"), ("subtractedValue", "uint256")],
        ["bool"],
        "nonpayable",
    ),
]


@dataclass
class PopulatedCall:
    """Unsigned contract call, tagged with sender and chain."""

    to: str
    value: int
    data: str
    sender: str
    chain_id: int


def _find_function(abi: list[dict], name: str) -> dict:
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == name:
            return entry
    raise ValidationError(f"Unknown ERC-20 function: {name}")


def _coerce_args(fn_abi: dict, args: list[Any]) -> list[Any]:
    """Checksum address arguments and parse integer arguments given as strings."""
    inputs = fn_abi["inputs"]
    if len(args) != len(inputs):
        raise ValidationError(
            f"{fn_abi['name']} expects {len(inputs)} argument(s), got {len(args)}"
        )

    coerced = []
    for spec, arg in zip(inputs, args):
        abi_type = spec["type"]
        try:
            if abi_type == "address":
                arg = AsyncWeb3.to_checksum_address(arg)
            elif abi_type.startswith(("uint", "int")) and not isinstance(arg, int):
                if arg is None or str(arg).strip() == "":
                    raise ValidationError(f"Missing {abi_type} argument '{spec['name']}'")
                arg = to_int(arg)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid {abi_type} argument '{spec['name']}': {arg}") from e
        coerced.append(arg)
    return coerced


def populate_erc20_call(
    provider: AsyncWeb3,
    token_address: str,
    function_name: str,
    args: list[Any],
    sender: str,
    chain_id: int,
) -> PopulatedCall:
    """Encode an ERC-20 call at a token address.

    Args:
        provider: Read provider the contract is bound to
        token_address: Token contract address
        function_name: ERC-20 function to call
        args: Positional call arguments
        sender: Wallet address the call is sent from
        chain_id: Chain the call is tagged with

    Returns:
        PopulatedCall with zero native value
    """
    if not AsyncWeb3.is_address(token_address):
        raise ValidationError(f"Invalid token address: {token_address}")

    fn_abi = _find_function(ERC20_ABI, function_name)
    call_args = _coerce_args(fn_abi, list(args))

    contract = provider.eth.contract(
        address=AsyncWeb3.to_checksum_address(token_address),
        abi=ERC20_ABI,
    )
    data = contract.encode_abi(function_name, args=call_args)

    logger.debug(f"Encoded {function_name} on {token_address} for {sender}")

    return PopulatedCall(
        to=contract.address,
        value=0,
        data=data,
        sender=sender,
        chain_id=chain_id,
    )
