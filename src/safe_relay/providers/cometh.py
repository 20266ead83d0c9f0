"""Cometh Connect sponsorship registration API."""

import logging
from typing import Any, Optional

import httpx

from safe_relay.providers.base import SponsorshipProvider

logger = logging.getLogger(__name__)

COMETH_API_BASE_URL = "https://api.connect.cometh.io"


class ComethSponsorshipProvider(SponsorshipProvider):
    """Registers sponsored addresses with Cometh Connect.

    Requests are authenticated with the project API secret.
    """

    def __init__(
        self,
        api_secret: str,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the Cometh sponsorship provider.

        Args:
            api_secret: Cometh Connect API secret
            base_url: Optional base URL override
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests)
        """
        self.api_secret = api_secret
        self.base_url = (base_url or COMETH_API_BASE_URL).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    @property
    def name(self) -> str:
        return "cometh"

    async def register_address(self, target_address: str) -> Any:
        response = await self._client.post(
            "/sponsored-address",
            headers={"apiSecret": self.api_secret},
            json={"targetAddress": target_address},
        )
        response.raise_for_status()

        data = response.json()
        logger.info(f"Cometh sponsored address created for {target_address}: {data}")
        return data

    async def close(self) -> None:
        await self._client.aclose()
