"""Dry-run sponsorship provider for development and testing."""

import logging
from typing import Any

from safe_relay.providers.base import SponsorshipProvider

logger = logging.getLogger(__name__)


class DryRunSponsorshipProvider(SponsorshipProvider):
    """Accepts every registration without calling Cometh.

    Records registered addresses so tests can inspect them.
    """

    def __init__(self):
        self.registered: list[str] = []

    @property
    def name(self) -> str:
        return "dryrun"

    async def register_address(self, target_address: str) -> Any:
        logger.warning(f"[DRY RUN] Sponsorship for {target_address} not sent to Cometh")
        self.registered.append(target_address)
        return {
            "success": True,
            "sponsoredAddress": {"targetAddress": target_address},
            "dryRun": True,
        }
