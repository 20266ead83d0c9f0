"""Relay services: sponsorship bookkeeping and Safe transaction preparation."""

from safe_relay.web.services.envelope import build_envelope, stringify_envelope
from safe_relay.web.services.sponsorship_service import SponsorshipService
from safe_relay.web.services.transaction_service import TransactionService
from safe_relay.web.services.validation import validate_required_fields

__all__ = [
    "SponsorshipService",
    "TransactionService",
    "build_envelope",
    "stringify_envelope",
    "validate_required_fields",
]
