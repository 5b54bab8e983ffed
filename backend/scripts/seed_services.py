"""Seed the public service catalog with the standard offering."""

from __future__ import annotations

import asyncio

from sqlalchemy import select

from boomav.db.session import get_sessionmaker
from boomav.models import Service

CATALOG = [
    {
        "service_key": "event-planning",
        "title": "Event Planning",
        "description": "Comprehensive event coordination from concept to execution",
        "category": "planning",
        "features": [
            "Venue selection & negotiation",
            "Budget management",
            "Vendor coordination",
            "Guest management",
            "Day-of coordination",
            "Post-event analysis",
        ],
    },
    {
        "service_key": "sound-systems",
        "title": "Sound System Rentals",
        "description": "Professional audio engineering for indoor and outdoor venues",
        "category": "audio",
        "features": [
            "Equipment setup & installation",
            "Sound check & calibration",
            "On-site technician",
            "Wireless microphones",
            "Monitor systems",
            "24/7 technical support",
        ],
    },
    {
        "service_key": "acoustic-treatments",
        "title": "Acoustic Treatments",
        "description": "Soundproofing and acoustic optimization solutions",
        "category": "audio",
        "features": [
            "Venue acoustic assessment",
            "Soundproofing installation",
            "Acoustic panel design",
            "Sound isolation solutions",
        ],
    },
    {
        "service_key": "dj-services",
        "title": "DJ Services",
        "description": "Professional DJs with extensive music libraries and equipment",
        "category": "entertainment",
        "features": [
            "Professional DJ talent",
            "Custom playlists",
            "MC services available",
            "Event-specific mixes",
        ],
    },
    {
        "service_key": "live-bands",
        "title": "Live Bands & Musicians",
        "description": "Professional live bands and individual musicians for all genres",
        "category": "entertainment",
        "features": [
            "Genre-specific talent",
            "Backup musicians",
            "Sound check included",
            "Custom setlists",
        ],
    },
    {
        "service_key": "led-screens",
        "title": "LED Screens & Displays",
        "description": "High-definition LED displays for visual impact",
        "category": "visual",
        "features": [
            "Multiple screen sizes",
            "Content management",
            "Live streaming capability",
            "Professional installation",
        ],
    },
    {
        "service_key": "lighting",
        "title": "Stage Lighting Design",
        "description": "Cutting-edge lighting solutions for stunning visual experiences",
        "category": "visual",
        "features": [
            "Lighting design consultation",
            "Dynamic lighting effects",
            "Color coordination",
            "Installation & operation",
        ],
    },
    {
        "service_key": "sound-engineering",
        "title": "Sound Engineering",
        "description": "Expert sound engineering and production services",
        "category": "audio",
        "features": [
            "Audio mixing & mastering",
            "Live sound engineering",
            "Studio recording",
            "Equipment troubleshooting",
        ],
    },
]


async def seed_services() -> int:
    sessionmaker = get_sessionmaker()
    created = 0
    async with sessionmaker() as session:
        existing = set(
            (await session.execute(select(Service.service_key))).scalars().all()
        )
        for entry in CATALOG:
            if entry["service_key"] in existing:
                continue
            session.add(Service(**entry))
            created += 1
        await session.commit()
    return created


def main() -> None:
    created = asyncio.run(seed_services())
    print(f"Seeded {created} catalog service(s).")


if __name__ == "__main__":
    main()
