"""FastAPI dependencies for shared collaborators.

Collaborators live on app.state and are built once per application.
"""

from fastapi import Header, Request

from safe_relay.config import get_settings
from safe_relay.errors import AuthenticationError
from safe_relay.providers.base import SponsorshipProvider
from safe_relay.wallet.base import WalletClient
from safe_relay.wallet.gas import GasEstimator


def get_wallet_client(request: Request) -> WalletClient:
    return request.app.state.wallet_client


def get_gas_estimator(request: Request) -> GasEstimator:
    return request.app.state.gas_estimator


def get_read_provider(request: Request):
    return request.app.state.read_provider


def get_sponsorship_provider(request: Request) -> SponsorshipProvider:
    return request.app.state.sponsorship_provider


async def require_admin_token(x_admin_token: str = Header(None)) -> bool:
    """Verify admin token from header.

    If ADMIN_TOKEN is not set, allows access (dev mode).
    """
    settings = get_settings()

    if not settings.admin_token:
        return True

    if x_admin_token != settings.admin_token:
        raise AuthenticationError("Invalid admin token")

    return True
