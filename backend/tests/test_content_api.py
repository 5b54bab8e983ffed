"""Blog, events and service catalog endpoints."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

pytestmark = pytest.mark.asyncio


def _post(title: str = "Choosing a PA System", **overrides) -> dict:
    data = {
        "title": title,
        "content": "Long form content about speakers.",
        "excerpt": "Speakers, explained.",
        "category": "equipment",
        "tags": ["sound"],
    }
    data.update(overrides)
    return data


def _event(title: str, starts_in: timedelta, **overrides) -> dict:
    data = {
        "title": title,
        "description": "Live production by Boom Audio Visuals.",
        "eventDate": (datetime.now(UTC) + starts_in).isoformat(),
        "venue": "Jomo Kenyatta Grounds",
        "city": "Kisumu",
        "category": "concert",
    }
    data.update(overrides)
    return data


async def test_blog_post_lifecycle(client) -> None:
    created = await client.post("/api/blog", json=_post())
    assert created.status_code == 201
    post = created.json()["post"]
    assert post["slug"] == "choosing-a-pa-system"
    assert post["author"] == "Boom Audio Visuals"
    assert post["published"] is False
    assert post["publishedAt"] is None

    updated = await client.put(f"/api/blog/{post['id']}", json={"published": True})
    assert updated.status_code == 200
    published_at = updated.json()["post"]["publishedAt"]
    assert published_at is not None

    again = await client.put(f"/api/blog/{post['id']}", json={"excerpt": "Updated"})
    assert again.json()["post"]["publishedAt"] == published_at

    for expected_views in (1, 2):
        viewed = await client.get("/api/blog/choosing-a-pa-system")
        assert viewed.status_code == 200
        assert viewed.json()["post"]["views"] == expected_views

    deleted = await client.delete(f"/api/blog/{post['id']}")
    assert deleted.json()["success"] is True
    assert (await client.get("/api/blog/choosing-a-pa-system")).status_code == 404
    assert (await client.delete(f"/api/blog/{post['id']}")).status_code == 404


async def test_duplicate_blog_slug_is_rejected(client) -> None:
    assert (await client.post("/api/blog", json=_post())).status_code == 201
    duplicate = await client.post("/api/blog", json=_post("Choosing a PA system!"))
    assert duplicate.status_code == 400


async def test_blog_filters(client) -> None:
    await client.post("/api/blog", json=_post("Draft Post"))
    await client.post("/api/blog", json=_post("Live Post", published=True))
    await client.post("/api/blog", json=_post("News Post", published=True, category="news"))

    published = await client.get("/api/blog", params={"published": "true"})
    assert [p["title"] for p in published.json()["posts"]] == ["News Post", "Live Post"]

    news = await client.get("/api/blog", params={"category": "news"})
    assert [p["title"] for p in news.json()["posts"]] == ["News Post"]

    limited = await client.get("/api/blog", params={"limit": 1})
    assert len(limited.json()["posts"]) == 1


async def test_events_sorted_and_status_derived(client) -> None:
    later = await client.post("/api/events", json=_event("Later Show", timedelta(days=30)))
    past = await client.post("/api/events", json=_event("Past Show", timedelta(days=-30)))
    soon = await client.post(
        "/api/events", json=_event("Soon Show", timedelta(days=2), featured=True)
    )
    assert later.status_code == soon.status_code == past.status_code == 201
    assert later.json()["event"]["status"] == "upcoming"
    assert past.json()["event"]["status"] == "completed"
    assert soon.json()["event"]["slug"] == "soon-show"

    listing = await client.get("/api/events")
    assert [e["title"] for e in listing.json()["events"]] == [
        "Past Show",
        "Soon Show",
        "Later Show",
    ]

    upcoming = await client.get("/api/events", params={"status": "upcoming"})
    assert [e["title"] for e in upcoming.json()["events"]] == ["Soon Show", "Later Show"]

    featured = await client.get("/api/events", params={"featured": "true"})
    assert [e["title"] for e in featured.json()["events"]] == ["Soon Show"]


async def test_event_update_and_delete(client) -> None:
    created = await client.post("/api/events", json=_event("Gala Night", timedelta(days=5)))
    event = created.json()["event"]

    moved = await client.put(
        f"/api/events/{event['id']}",
        json={"eventDate": (datetime.now(UTC) - timedelta(days=1)).isoformat()},
    )
    assert moved.status_code == 200
    assert moved.json()["event"]["status"] == "completed"

    cancelled = await client.put(f"/api/events/{event['id']}", json={"status": "cancelled"})
    assert cancelled.json()["event"]["status"] == "cancelled"

    fetched = await client.get("/api/events/gala-night")
    assert fetched.json()["event"]["id"] == event["id"]

    assert (await client.delete(f"/api/events/{event['id']}")).status_code == 200
    assert (await client.get("/api/events/gala-night")).status_code == 404


async def test_service_catalog(client) -> None:
    created = await client.post(
        "/api/services",
        json={
            "id": "sound",
            "title": "Sound Systems",
            "description": "Line arrays and monitors.",
            "features": ["Line arrays", "Wireless mics"],
        },
    )
    assert created.status_code == 201
    assert created.json()["service"]["id"] == "sound"

    await client.post(
        "/api/services",
        json={"id": "staging", "title": "Staging", "description": "Truss and decks."},
    )
    duplicate = await client.post(
        "/api/services", json={"id": "sound", "title": "Again", "description": "x"}
    )
    assert duplicate.status_code == 400

    hidden = await client.put("/api/services/staging", json={"active": False})
    assert hidden.status_code == 200
    assert hidden.json()["service"]["active"] is False

    listing = await client.get("/api/services")
    assert [s["id"] for s in listing.json()["services"]] == ["sound"]

    assert (await client.delete("/api/services/sound")).status_code == 200
    assert (await client.get("/api/services")).json() == {"services": []}

    restored = await client.put("/api/services/sound", json={"active": True})
    assert restored.json()["service"]["title"] == "Sound Systems"
    assert (await client.delete("/api/services/missing")).status_code == 404
