"""Sponsorship store: sponsored destination addresses per chain."""

from safe_relay.store.database import get_db, init_db
from safe_relay.store.models import SponsoredAddress
from safe_relay.store.repository import SponsorshipRepository

__all__ = [
    "SponsoredAddress",
    "SponsorshipRepository",
    "get_db",
    "init_db",
]
