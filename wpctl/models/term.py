"""Term and taxonomy models for the WordPress REST API."""

from typing import Dict, List, Optional, Any
from pydantic import BaseModel, ConfigDict, field_validator


class Term(BaseModel):
    """A single value within a taxonomy, such as one category or tag."""

    id: Optional[int] = None
    count: Optional[int] = None
    description: Optional[str] = None
    link: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    taxonomy: Optional[str] = None
    parent: Optional[int] = None

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: Optional[str]) -> Optional[str]:
        """Slugs are stored lowercase."""
        if v is None:
            return v
        return v.lower()

    model_config = ConfigDict(extra="ignore")

    def to_payload(self) -> Dict[str, Any]:
        """Request body for create and update calls."""
        payload: Dict[str, Any] = {}
        for name in ("name", "description", "slug", "parent"):
            value = getattr(self, name)
            if value is not None:
                payload[name] = value
        return payload


class Taxonomy(BaseModel):
    """A classification scheme under which terms are organized."""

    slug: str
    name: str
    description: Optional[str] = None
    types: List[str] = []
    hierarchical: bool = False
    rest_base: Optional[str] = None

    model_config = ConfigDict(extra="ignore")
