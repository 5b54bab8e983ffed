"""Slug helpers shared by blog posts and events."""

from __future__ import annotations

import re

_NON_WORD = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Lowercase ``value`` and join its alphanumeric runs with hyphens."""
    return _NON_WORD.sub("-", value.lower()).strip("-")
