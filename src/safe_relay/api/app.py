"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from safe_relay import __version__
from safe_relay.api.errors import register_error_handlers
from safe_relay.config import get_settings
from safe_relay.providers.base import SponsorshipProvider
from safe_relay.providers.factory import create_sponsorship_provider
from safe_relay.store.database import close_db, init_db
from safe_relay.wallet.base import WalletClient
from safe_relay.wallet.factory import create_gas_estimator, create_read_provider, create_wallet_client
from safe_relay.wallet.gas import GasEstimator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    await init_db()
    logger.info(f"Relay ready on chain {get_settings().chain_id}")
    yield
    # Shutdown
    await app.state.wallet_client.close()
    await app.state.sponsorship_provider.close()
    await close_db()


def create_app(
    wallet_client: Optional[WalletClient] = None,
    gas_estimator: Optional[GasEstimator] = None,
    read_provider: Optional[Any] = None,
    sponsorship_provider: Optional[SponsorshipProvider] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Collaborators not passed in are built from settings and shared by all
    requests for the lifetime of the app.
    """
    settings = get_settings()

    app = FastAPI(
        title="Safe Relay API",
        description="Sponsored Safe transaction preparation backed by Cometh Connect",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    if wallet_client is None:
        wallet_client = create_wallet_client(settings)
    if gas_estimator is None:
        gas_estimator = create_gas_estimator()
    if read_provider is None:
        read_provider = create_read_provider(settings)
    if sponsorship_provider is None:
        sponsorship_provider = create_sponsorship_provider(settings)

    app.state.wallet_client = wallet_client
    app.state.gas_estimator = gas_estimator
    app.state.read_provider = read_provider
    app.state.sponsorship_provider = sponsorship_provider

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Register routes
    from safe_relay.api.routers import sponsorship, transactions
    from safe_relay.api.routes import health

    app.include_router(health.router, tags=["Health"])
    app.include_router(sponsorship.router)
    app.include_router(transactions.router)

    return app
