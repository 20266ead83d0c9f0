"""SQLAlchemy models for the sponsorship store."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class SponsoredAddress(Base):
    """Destination address whose transactions are gas-sponsored on a chain.

    Addresses are stored lowercase. Rows are never updated.
    """

    __tablename__ = "sponsored_addresses"
    __table_args__ = (
        UniqueConstraint("chain_id", "target_address", name="uq_sponsored_chain_address"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    chain_id: Mapped[int] = mapped_column(Integer, nullable=False)
    target_address: Mapped[str] = mapped_column(String(42), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"SponsoredAddress(chain_id={self.chain_id}, target_address={self.target_address})"
