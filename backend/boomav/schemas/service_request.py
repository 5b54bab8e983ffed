"""Service request schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from boomav.models.service_request import ServiceRequestStatus
from boomav.schemas.base import APIModel


class ServiceRequestCreate(APIModel):
    """Public form payload; required fields are checked by the service layer."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    event_date: str | None = None
    event_time: str | None = None
    venue: str | None = None
    city: str | None = None
    country: str | None = None
    attendees: int | None = Field(default=None, ge=0)
    selected_services: list[str] = Field(default_factory=list)
    event_description: str | None = None
    special_requirements: str | None = None
    budget: str | None = None


class ServiceRequestRead(APIModel):
    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    company: str | None = None
    event_date: str | None = None
    event_time: str | None = None
    venue: str | None = None
    city: str | None = None
    country: str | None = None
    attendees: int | None = None
    selected_services: list[str] = Field(default_factory=list)
    event_description: str | None = None
    special_requirements: str | None = None
    budget: str | None = None
    status: ServiceRequestStatus
    created_at: datetime


class ServiceRequestCreated(APIModel):
    success: bool = True
    request_id: str
    message: str


class ServiceRequestList(APIModel):
    requests: list[ServiceRequestRead]
