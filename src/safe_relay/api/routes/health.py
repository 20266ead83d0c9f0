"""Health check endpoints."""

import logging

from fastapi import APIRouter, Request

from safe_relay import __version__
from safe_relay.config import get_settings
from safe_relay.store.database import count_sponsored

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check():
    return {"status": "healthy", "service": "safe-relay"}


@router.get("/health/detailed")
async def detailed_health(request: Request):
    """Relay state: chain, sponsorship backend and store reachability.

    A store failure degrades the status instead of failing the check.
    """
    settings = get_settings()
    provider = request.app.state.sponsorship_provider

    store = {"reachable": True}
    try:
        store["sponsored_addresses"] = await count_sponsored()
    except Exception as e:
        logger.warning(f"Sponsorship store unreachable: {e}")
        store = {"reachable": False, "error": str(e)}

    return {
        "status": "healthy" if store["reachable"] else "degraded",
        "service": "safe-relay",
        "version": __version__,
        "chain_id": settings.chain_id,
        "sponsorship": {
            "provider": provider.name,
            "dry_run": provider.name == "dryrun",
        },
        "wallet_client": type(request.app.state.wallet_client).__name__,
        "store": store,
        "config": settings.get_safe_dict(),
    }
