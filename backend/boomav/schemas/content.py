"""Blog, event and service catalog schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import AliasChoices, Field

from boomav.models.content import BlogCategory, EventCategory, EventStatus
from boomav.schemas.base import APIModel


class BlogPostCreate(APIModel):
    title: str = Field(min_length=1, max_length=255)
    slug: str | None = None
    content: str
    excerpt: str = Field(max_length=300)
    featured_image: str = ""
    author: str = "Boom Audio Visuals"
    category: BlogCategory = BlogCategory.GENERAL
    tags: list[str] = Field(default_factory=list)
    published: bool = False


class BlogPostUpdate(APIModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = None
    content: str | None = None
    excerpt: str | None = Field(default=None, max_length=300)
    featured_image: str | None = None
    author: str | None = None
    category: BlogCategory | None = None
    tags: list[str] | None = None
    published: bool | None = None


class BlogPostRead(APIModel):
    id: str
    title: str
    slug: str
    content: str
    excerpt: str
    featured_image: str
    author: str
    category: BlogCategory
    tags: list[str]
    published: bool
    published_at: datetime | None = None
    views: int
    created_at: datetime
    updated_at: datetime


class BlogPostEnvelope(APIModel):
    success: bool = True
    message: str | None = None
    post: BlogPostRead


class BlogPostList(APIModel):
    success: bool = True
    posts: list[BlogPostRead]


class EventCreate(APIModel):
    title: str = Field(min_length=1, max_length=255)
    slug: str | None = None
    description: str
    event_date: datetime
    end_date: datetime | None = None
    venue: str = ""
    address: str = ""
    city: str = ""
    featured_image: str = ""
    category: EventCategory = EventCategory.OTHER
    services: list[str] = Field(default_factory=list)
    published: bool = False
    featured: bool = False
    capacity: int = Field(default=0, ge=0)
    ticket_price: Decimal = Field(default=Decimal("0"), ge=0)
    status: EventStatus | None = None


class EventUpdate(APIModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = None
    description: str | None = None
    event_date: datetime | None = None
    end_date: datetime | None = None
    venue: str | None = None
    address: str | None = None
    city: str | None = None
    featured_image: str | None = None
    category: EventCategory | None = None
    services: list[str] | None = None
    published: bool | None = None
    featured: bool | None = None
    capacity: int | None = Field(default=None, ge=0)
    ticket_price: Decimal | None = Field(default=None, ge=0)
    status: EventStatus | None = None


class EventRead(APIModel):
    id: str
    title: str
    slug: str
    description: str
    event_date: datetime
    end_date: datetime | None = None
    venue: str
    address: str
    city: str
    featured_image: str
    category: EventCategory
    services: list[str]
    published: bool
    featured: bool
    capacity: int
    ticket_price: Decimal
    status: EventStatus
    created_at: datetime
    updated_at: datetime


class EventEnvelope(APIModel):
    success: bool = True
    message: str | None = None
    event: EventRead


class EventList(APIModel):
    success: bool = True
    events: list[EventRead]


class ServiceCreate(APIModel):
    service_key: str = Field(
        min_length=1,
        max_length=120,
        validation_alias=AliasChoices("id", "serviceKey", "service_key"),
    )
    title: str = Field(min_length=1, max_length=255)
    description: str
    features: list[str] = Field(default_factory=list)
    icon: str | None = None
    image: str | None = None
    category: str = "general"
    active: bool = True


class ServiceUpdate(APIModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    features: list[str] | None = None
    icon: str | None = None
    image: str | None = None
    category: str | None = None
    active: bool | None = None


class ServiceRead(APIModel):
    service_key: str = Field(
        validation_alias=AliasChoices("service_key", "id"), serialization_alias="id"
    )
    title: str
    description: str
    features: list[str]
    icon: str | None = None
    image: str | None = None
    category: str
    active: bool
    created_at: datetime
    updated_at: datetime


class ServiceEnvelope(APIModel):
    success: bool = True
    service: ServiceRead


class ServiceList(APIModel):
    services: list[ServiceRead]
