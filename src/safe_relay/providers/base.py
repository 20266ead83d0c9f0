"""Sponsorship provider base interface."""

from abc import ABC, abstractmethod
from typing import Any


class SponsorshipProvider(ABC):
    """Abstract base class for gas sponsorship registration backends."""

    @abstractmethod
    async def register_address(self, target_address: str) -> Any:
        """Register a destination address for gas sponsorship.

        Args:
            target_address: Address as supplied by the caller (case preserved)

        Returns:
            Provider response body
        """
        raise NotImplementedError()

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        raise NotImplementedError()

    async def close(self) -> None:
        """Release network resources."""
        return None
