"""Data models for the WordPress REST client.

This package contains Pydantic models for WordPress entities like posts,
terms, taxonomies and post meta, following the WordPress REST API v2
response shapes.
"""

from .post import Post, Title, Content, Excerpt, Guid, RenderedValue
from .term import Term, Taxonomy
from .meta import PostMeta


__all__ = [
    "Post",
    "Term",
    "Taxonomy",
    "PostMeta",
    "RenderedValue",
    "Title",
    "Content",
    "Excerpt",
    "Guid",
]
