"""Gas sponsorship registration providers."""

from safe_relay.providers.base import SponsorshipProvider
from safe_relay.providers.factory import create_sponsorship_provider

__all__ = ["SponsorshipProvider", "create_sponsorship_provider"]
