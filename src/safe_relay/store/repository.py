"""Repository for sponsored address operations."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from safe_relay.store.models import SponsoredAddress


class SponsorshipRepository:
    """Repository for all sponsorship-related database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_sponsored(self) -> list[SponsoredAddress]:
        """Get every sponsored address across all chains."""
        stmt = select(SponsoredAddress).order_by(SponsoredAddress.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_sponsored(self, chain_id: int, address: str) -> Optional[SponsoredAddress]:
        """Get the sponsorship row for an address (case-insensitive)."""
        stmt = select(SponsoredAddress).where(
            SponsoredAddress.chain_id == chain_id,
            SponsoredAddress.target_address == address.lower(),
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def is_sponsored(self, chain_id: int, address: str) -> bool:
        """Check whether an address is sponsored on a chain."""
        return await self.get_sponsored(chain_id, address) is not None

    async def add_sponsored(self, chain_id: int, address: str) -> SponsoredAddress:
        """Store a new sponsored address.

        Raises sqlalchemy.exc.IntegrityError if the row already exists.
        """
        sponsored = SponsoredAddress(chain_id=chain_id, target_address=address.lower())
        self.session.add(sponsored)
        await self.session.flush()
        return sponsored

    async def rollback(self) -> None:
        """Discard pending changes in the current transaction."""
        await self.session.rollback()
