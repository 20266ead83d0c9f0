"""Sponsored address registration and listing."""

import logging
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError

from safe_relay.errors import DuplicateSponsorshipError, RelayError
from safe_relay.providers.base import SponsorshipProvider
from safe_relay.store.models import SponsoredAddress
from safe_relay.store.repository import SponsorshipRepository

logger = logging.getLogger(__name__)


class SponsorshipService:
    """Keeps the local sponsorship table in step with the provider.

    Listing only reads the local table, so the provider is optional.
    """

    def __init__(
        self,
        repository: SponsorshipRepository,
        chain_id: int,
        provider: Optional[SponsorshipProvider] = None,
    ):
        self.repository = repository
        self.provider = provider
        self.chain_id = chain_id

    async def list_sponsored(self) -> list[SponsoredAddress]:
        return await self.repository.list_sponsored()

    async def register(self, target_address: str) -> Any:
        """Register an address with the provider, then store it locally.

        Args:
            target_address: Address as given by the caller

        Returns:
            Provider response body

        Raises:
            DuplicateSponsorshipError: If the address is already stored
        """
        if self.provider is None:
            raise RelayError("No sponsorship provider configured")

        if await self.repository.is_sponsored(self.chain_id, target_address):
            raise DuplicateSponsorshipError(target_address)

        # Provider receives the caller's casing
        result = await self.provider.register_address(target_address)

        try:
            await self.repository.add_sponsored(self.chain_id, target_address)
        except IntegrityError:
            # A concurrent registration stored the same row first
            await self.repository.rollback()
            logger.warning(f"Address {target_address} was stored by a concurrent registration")
        except Exception:
            logger.error(
                f"Address {target_address} registered upstream but not stored locally "
                f"(chain {self.chain_id})"
            )
            raise

        return result
