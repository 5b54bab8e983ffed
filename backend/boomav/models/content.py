"""Marketing content: blog posts, public events and the service catalog."""

from __future__ import annotations

import enum
from datetime import datetime
from decimal import Decimal

from sqlalchemy import JSON, Boolean, DateTime, Enum, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from boomav.db.base import Base
from boomav.models.mixins import DocumentIdMixin, TimestampMixin


class BlogCategory(str, enum.Enum):
    EVENTS = "events"
    EQUIPMENT = "equipment"
    TIPS = "tips"
    NEWS = "news"
    GENERAL = "general"


class EventCategory(str, enum.Enum):
    WEDDING = "wedding"
    CORPORATE = "corporate"
    CONCERT = "concert"
    CONFERENCE = "conference"
    PARTY = "party"
    OTHER = "other"


class EventStatus(str, enum.Enum):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BlogPost(DocumentIdMixin, TimestampMixin, Base):
    """Blog article shown on the public site."""

    __tablename__ = "blog_posts"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt: Mapped[str] = mapped_column(String(300), nullable=False)
    featured_image: Mapped[str] = mapped_column(String(512), default="", nullable=False)
    author: Mapped[str] = mapped_column(
        String(255), default="Boom Audio Visuals", nullable=False
    )
    category: Mapped[BlogCategory] = mapped_column(
        Enum(BlogCategory, native_enum=False, length=16),
        default=BlogCategory.GENERAL,
        nullable=False,
    )
    tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)


class Event(DocumentIdMixin, TimestampMixin, Base):
    """Public showcase event."""

    __tablename__ = "events"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    event_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    venue: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    address: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    city: Mapped[str] = mapped_column(String(120), default="", nullable=False)
    featured_image: Mapped[str] = mapped_column(String(512), default="", nullable=False)
    category: Mapped[EventCategory] = mapped_column(
        Enum(EventCategory, native_enum=False, length=16),
        default=EventCategory.OTHER,
        nullable=False,
    )
    services: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    ticket_price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )
    status: Mapped[EventStatus] = mapped_column(
        Enum(EventStatus, native_enum=False, length=16),
        default=EventStatus.UPCOMING,
        nullable=False,
    )


class Service(DocumentIdMixin, TimestampMixin, Base):
    """Service catalog entry offered on the public site."""

    __tablename__ = "services"

    service_key: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    features: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    icon: Mapped[str | None] = mapped_column(String(120))
    image: Mapped[str | None] = mapped_column(String(512))
    category: Mapped[str] = mapped_column(String(64), default="general", nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
