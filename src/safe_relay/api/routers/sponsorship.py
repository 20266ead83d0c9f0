"""Sponsored address endpoints."""

from typing import Any

from fastapi import APIRouter, Depends

from safe_relay.api.dependencies import get_sponsorship_provider, require_admin_token
from safe_relay.api.errors import upstream_errors
from safe_relay.config import get_settings
from safe_relay.providers.base import SponsorshipProvider
from safe_relay.store.database import get_db
from safe_relay.store.repository import SponsorshipRepository
from safe_relay.web.contracts.sponsorship import SponsorAddressRequest, SponsoredAddressResponse
from safe_relay.web.services.sponsorship_service import SponsorshipService
from safe_relay.web.services.validation import validate_required_fields

router = APIRouter(tags=["sponsorship"])


@router.get("/sponsored-address", response_model=list[SponsoredAddressResponse])
async def list_sponsored_addresses() -> list[SponsoredAddressResponse]:
    """List every sponsored address."""
    settings = get_settings()

    with upstream_errors("list sponsored addresses"):
        async with get_db() as session:
            service = SponsorshipService(SponsorshipRepository(session), settings.chain_id)
            rows = await service.list_sponsored()
            return [SponsoredAddressResponse.model_validate(row) for row in rows]


@router.post("/sponsored-address")
async def register_sponsored_address(
    body: SponsorAddressRequest,
    provider: SponsorshipProvider = Depends(get_sponsorship_provider),
    _: bool = Depends(require_admin_token),
) -> Any:
    """Register an address for gas sponsorship.

    The address is sent to Cometh as given and stored lowercase. Returns
    the Cometh response body.
    """
    validate_required_fields(body, ["targetAddress"])
    settings = get_settings()

    with upstream_errors("register sponsored address"):
        async with get_db() as session:
            service = SponsorshipService(
                SponsorshipRepository(session), settings.chain_id, provider=provider
            )
            return await service.register(body.target_address)
