"""Post model for the WordPress REST API."""

from datetime import datetime
from typing import List, Optional, Dict, Any, Tuple
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator
from typing_extensions import Literal


class RenderedValue(BaseModel):
    """A ``{raw, rendered}`` pair as WordPress returns it.

    ``raw`` is only present in the ``edit`` context; ``rendered`` has the
    site's content filters applied.
    """

    raw: Optional[str] = None
    rendered: Optional[str] = None

    @classmethod
    def of(cls, text: str):
        """Build a value whose raw and rendered forms are the same text."""
        return cls(raw=text, rendered=text)

    # (raw, rendered) as decoded or constructed
    _loaded: Tuple[Optional[str], Optional[str]] = PrivateAttr(default=(None, None))

    def model_post_init(self, __context: Any) -> None:
        self._loaded = (self.raw, self.rendered)

    def value(self) -> Optional[str]:
        """Text to send back to the server.

        An edit made to ``rendered`` alone wins over the stale ``raw`` the
        server sent; otherwise the raw form is sent first.
        """
        loaded_raw, loaded_rendered = self._loaded
        if self.rendered != loaded_rendered and self.raw == loaded_raw:
            return self.rendered
        return self.raw if self.raw is not None else self.rendered


class Title(RenderedValue):
    """Post title."""
    pass


class Content(RenderedValue):
    """Post body."""
    protected: Optional[bool] = None


class Excerpt(RenderedValue):
    """Post excerpt."""
    protected: Optional[bool] = None


class Guid(RenderedValue):
    """Globally unique identifier of a post."""
    pass


class Post(BaseModel):
    """WordPress post model.

    ``id`` is ``None`` until the server assigns one on create.
    """

    id: Optional[int] = None
    date: Optional[datetime] = None
    date_gmt: Optional[datetime] = None
    modified: Optional[datetime] = None
    modified_gmt: Optional[datetime] = None
    guid: Optional[Guid] = None
    slug: Optional[str] = None
    status: Optional[str] = None
    type: Optional[str] = None
    link: Optional[str] = None
    title: Title = Field(default_factory=Title)
    content: Content = Field(default_factory=Content)
    excerpt: Excerpt = Field(default_factory=Excerpt)
    author: Optional[int] = None
    featured_media: Optional[int] = None
    comment_status: Optional[Literal["open", "closed"]] = None
    ping_status: Optional[Literal["open", "closed"]] = None
    sticky: Optional[bool] = None
    format: Optional[str] = None
    categories: List[int] = []
    tags: List[int] = []

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: Optional[str]) -> Optional[str]:
        """Slugs are stored lowercase, as WordPress stores them."""
        if v is None:
            return v
        return v.lower()

    model_config = ConfigDict(extra="ignore")

    def to_payload(self) -> Dict[str, Any]:
        """Request body for create and update calls.

        Nested values are flattened to plain strings; unset fields are left
        out so the server keeps its own defaults.
        """
        payload: Dict[str, Any] = {}

        for name in ("title", "content", "excerpt"):
            text = getattr(self, name).value()
            if text is not None:
                payload[name] = text

        for name in (
            "slug",
            "status",
            "author",
            "featured_media",
            "comment_status",
            "ping_status",
            "sticky",
            "format",
        ):
            value = getattr(self, name)
            if value is not None:
                payload[name] = value

        if self.date is not None:
            payload["date"] = self.date.isoformat()
        if self.categories:
            payload["categories"] = list(self.categories)
        if self.tags:
            payload["tags"] = list(self.tags)

        return payload
