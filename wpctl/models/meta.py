"""Post meta model."""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict


class PostMeta(BaseModel):
    """Key/value annotation attached to one post."""

    id: Optional[int] = None
    post_id: Optional[int] = None
    key: str
    value: Any = None

    model_config = ConfigDict(extra="ignore")
