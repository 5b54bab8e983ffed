"""Blog endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from boomav.api import deps
from boomav.models import BlogCategory, BlogPost
from boomav.schemas.content import (
    BlogPostCreate,
    BlogPostEnvelope,
    BlogPostList,
    BlogPostRead,
    BlogPostUpdate,
)
from boomav.services import blog_service

router = APIRouter(prefix="/blog")


async def _get_post_or_404(session: AsyncSession, post_id: str) -> BlogPost:
    post = await blog_service.get_post(session, post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog post not found")
    return post


@router.get("", response_model=BlogPostList, summary="List blog posts")
async def list_posts(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    published: bool | None = Query(default=None),
    category: BlogCategory | None = Query(default=None),
    limit: int = Query(default=blog_service.LIST_LIMIT, ge=1),
) -> BlogPostList:
    posts = await blog_service.list_posts(
        session, published=published, category=category, limit=limit
    )
    return BlogPostList(posts=[BlogPostRead.model_validate(post) for post in posts])


@router.get("/{slug}", response_model=BlogPostEnvelope, summary="Read a blog post")
async def read_post(
    slug: str,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> BlogPostEnvelope:
    post = await blog_service.view_post(session, slug)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog post not found")
    return BlogPostEnvelope(post=BlogPostRead.model_validate(post))


@router.post(
    "",
    response_model=BlogPostEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a blog post",
)
async def create_post(
    payload: BlogPostCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> BlogPostEnvelope:
    try:
        post = await blog_service.create_post(session, payload=payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return BlogPostEnvelope(
        message="Blog post created successfully", post=BlogPostRead.model_validate(post)
    )


@router.put("/{post_id}", response_model=BlogPostEnvelope, summary="Update a blog post")
async def update_post(
    post_id: str,
    payload: BlogPostUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> BlogPostEnvelope:
    post = await _get_post_or_404(session, post_id)
    try:
        post = await blog_service.update_post(session, post=post, payload=payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return BlogPostEnvelope(
        message="Blog post updated successfully", post=BlogPostRead.model_validate(post)
    )


@router.delete("/{post_id}", summary="Delete a blog post")
async def delete_post(
    post_id: str,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> dict[str, bool | str]:
    post = await _get_post_or_404(session, post_id)
    await blog_service.delete_post(session, post=post)
    return {"success": True, "message": "Blog post deleted successfully"}
