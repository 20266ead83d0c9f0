"""Provider factory for creating sponsorship providers."""

import logging

from safe_relay.config import Settings, get_settings
from safe_relay.providers.base import SponsorshipProvider
from safe_relay.providers.cometh import ComethSponsorshipProvider
from safe_relay.providers.dryrun import DryRunSponsorshipProvider

logger = logging.getLogger(__name__)


def create_sponsorship_provider(settings: Settings | None = None) -> SponsorshipProvider:
    """Create the configured sponsorship provider.

    Falls back to dry-run when DRY_RUN is set or no API secret is configured.
    """
    settings = settings or get_settings()

    if settings.dry_run or not settings.cometh_api_secret:
        if not settings.dry_run:
            logger.warning("COMETH_API_SECRET not set - sponsorship registration in dry-run mode")
        return DryRunSponsorshipProvider()

    return ComethSponsorshipProvider(
        api_secret=settings.cometh_api_secret,
        base_url=settings.cometh_api_base_url,
        timeout=settings.http_timeout,
    )
