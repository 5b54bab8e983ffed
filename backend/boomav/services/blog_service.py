"""Blog post operations."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Final

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from boomav.models import BlogCategory, BlogPost
from boomav.schemas.content import BlogPostCreate, BlogPostUpdate
from boomav.services.slugs import slugify

LIST_LIMIT: Final = 200


async def _commit_unique(session: AsyncSession, post: BlogPost) -> BlogPost:
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise ValueError("A blog post with this slug already exists") from exc
    await session.refresh(post)
    return post


async def list_posts(
    session: AsyncSession,
    *,
    published: bool | None = None,
    category: BlogCategory | None = None,
    limit: int = LIST_LIMIT,
) -> list[BlogPost]:
    stmt: Select[tuple[BlogPost]] = select(BlogPost)
    if published is not None:
        stmt = stmt.where(BlogPost.published.is_(published))
    if category is not None:
        stmt = stmt.where(BlogPost.category == category)
    stmt = stmt.order_by(BlogPost.created_at.desc()).limit(min(limit, LIST_LIMIT))
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_post(session: AsyncSession, post_id: str) -> BlogPost | None:
    return await session.get(BlogPost, post_id)


async def view_post(session: AsyncSession, slug: str) -> BlogPost | None:
    """Return the post for ``slug`` and count the view."""

    result = await session.execute(select(BlogPost).where(BlogPost.slug == slug))
    post = result.scalar_one_or_none()
    if post is None:
        return None
    post.views += 1
    await session.commit()
    await session.refresh(post)
    return post


async def create_post(session: AsyncSession, *, payload: BlogPostCreate) -> BlogPost:
    data = payload.model_dump()
    data["slug"] = slugify(data.get("slug") or payload.title)
    if not data["slug"]:
        raise ValueError("Unable to derive a slug from the title")
    post = BlogPost(**data)
    if post.published:
        post.published_at = datetime.now(UTC)
    session.add(post)
    return await _commit_unique(session, post)


async def update_post(
    session: AsyncSession, *, post: BlogPost, payload: BlogPostUpdate
) -> BlogPost:
    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "slug" in data:
        data["slug"] = slugify(data["slug"])
    elif "title" in data and data["title"] != post.title:
        data["slug"] = slugify(data["title"])
    for key, value in data.items():
        setattr(post, key, value)
    if post.published and post.published_at is None:
        post.published_at = datetime.now(UTC)
    return await _commit_unique(session, post)


async def delete_post(session: AsyncSession, *, post: BlogPost) -> None:
    await session.delete(post)
    await session.commit()
