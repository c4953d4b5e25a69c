"""SQLAlchemy declarative base and ORM models."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import JSON


class Base(DeclarativeBase):
    """Base class for all database models."""


class AccountModel(Base):
    """ORM model for accounts.

    Role-specific columns are nullable and only populated for the matching
    role. ``shop_id`` is the artist-side half of an affiliation; the shop-side
    half lives in ``shop_artists``.
    """

    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    username: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    role: Mapped[str] = mapped_column(String, nullable=False)
    profile_pic: Mapped[str] = mapped_column(
        String, nullable=False, default="/default-profile.png"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    # artist / shop
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(String, nullable=True)

    # artist
    price_range: Mapped[str | None] = mapped_column(String, nullable=True)
    styles: Mapped[list | None] = mapped_column(JSON, nullable=True)
    shop_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True
    )

    # shop
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
    website: Mapped[str | None] = mapped_column(String, nullable=True)
    hours: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (Index("idx_account_role", "role"),)


class ShopArtistModel(Base):
    """Shop-side affiliation link. An artist appears under at most one shop."""

    __tablename__ = "shop_artists"

    shop_id: Mapped[str] = mapped_column(
        String, ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True
    )
    artist_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        primary_key=True,
        unique=True,
    )


class AffiliationRequestModel(Base):
    """Pending artist/shop affiliation request.

    ``pair_key`` is the sorted ``"<id>:<id>"`` of both parties so that one
    request per unordered pair is enforced by the database.
    """

    __tablename__ = "affiliation_requests"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    from_id: Mapped[str] = mapped_column(
        String, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    to_id: Mapped[str] = mapped_column(
        String, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    pair_key: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    __table_args__ = (
        Index("idx_request_from", "from_id"),
        Index("idx_request_to", "to_id"),
    )


class FollowModel(Base):
    """Follower -> followee edge."""

    __tablename__ = "follows"

    follower_id: Mapped[str] = mapped_column(
        String, ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True
    )
    followee_id: Mapped[str] = mapped_column(
        String, ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True
    )

    __table_args__ = (Index("idx_follow_followee", "followee_id"),)
