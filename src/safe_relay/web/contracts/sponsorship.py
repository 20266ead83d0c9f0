"""Sponsorship contracts."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SponsorAddressRequest(BaseModel):
    """Request to register a sponsored destination address."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    target_address: Optional[str] = Field(None, description="Address to sponsor (any casing)")


class SponsoredAddressResponse(BaseModel):
    """A sponsored address row."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    chain_id: int = Field(..., description="Chain the sponsorship applies to")
    target_address: str = Field(..., description="Lowercase sponsored address")
    created_at: Optional[datetime] = None
