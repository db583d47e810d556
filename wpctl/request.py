"""Request paths and query builders for list and search endpoints.

``Request`` holds the path templates every endpoint is built from;
``SearchRequestBuilder`` assembles an immutable ``SearchRequest`` carrying
the path, an optional taxonomy context and an ordered set of query
parameters. Parameter names are passed through to the server verbatim.
"""

from typing import Dict, List, Optional, Tuple, Any

from pydantic import BaseModel, ConfigDict


class Request:
    """Path templates, relative to the API context."""

    POSTS = "/posts"
    POST = "/posts/{post_id}"
    METAS = "/posts/{post_id}/meta"
    META = "/posts/{post_id}/meta/{meta_id}"
    TAXONOMIES = "/taxonomies"
    TAXONOMY = "/taxonomies/{slug}"
    TERMS = "/{taxonomy}"
    TERM = "/{taxonomy}/{term_id}"


class Taxonomies:
    """Slugs of the taxonomies every WordPress site registers."""

    CATEGORY = "category"
    TAG = "post_tag"

    # Term routes use the taxonomy's REST base, not its slug.
    REST_BASES = {
        CATEGORY: "categories",
        TAG: "tags",
    }

    @classmethod
    def rest_base(cls, slug: str) -> str:
        """Return the route segment serving the terms of ``slug``."""
        return cls.REST_BASES.get(slug, slug)


class SearchRequest(BaseModel):
    """Immutable query against a list endpoint."""

    uri: str = Request.POSTS
    taxonomy: Optional[str] = None
    params: Tuple[Tuple[str, str], ...] = ()

    model_config = ConfigDict(frozen=True)

    @classmethod
    def posts(cls) -> "SearchRequest":
        """Unfiltered query for the posts collection."""
        return cls(uri=Request.POSTS)

    @classmethod
    def terms(cls, taxonomy: str) -> "SearchRequest":
        """Unfiltered query for the terms of one taxonomy."""
        return cls(uri=Request.TERMS, taxonomy=taxonomy)

    @classmethod
    def builder(cls) -> "SearchRequestBuilder":
        """Start a new builder."""
        return SearchRequestBuilder()

    def get_param(self, name: str) -> Optional[str]:
        """Return the value of ``name``, or None when not set."""
        return dict(self.params).get(name)

    def query_params(self) -> List[Tuple[str, str]]:
        """Parameters in insertion order, as ``requests`` accepts them."""
        return list(self.params)

    def path(self, **values: Any) -> str:
        """Expand the path template.

        The taxonomy context, when set, fills the ``{taxonomy}`` segment with
        the taxonomy's REST base.
        """
        if self.taxonomy is not None and "taxonomy" not in values:
            values["taxonomy"] = Taxonomies.rest_base(self.taxonomy)
        return self.uri.format(**values)


class SearchRequestBuilder:
    """Chainable builder for ``SearchRequest``."""

    def __init__(self) -> None:
        self._uri = Request.POSTS
        self._taxonomy: Optional[str] = None
        self._params: Dict[str, str] = {}

    def with_uri(self, uri: str) -> "SearchRequestBuilder":
        self._uri = uri
        return self

    def with_taxonomy(self, taxonomy: str) -> "SearchRequestBuilder":
        self._taxonomy = taxonomy
        return self

    def with_param(self, name: str, value: Any) -> "SearchRequestBuilder":
        """Add or overwrite a query parameter.

        Overwriting keeps the parameter's original position.
        """
        self._params[name] = str(value)
        return self

    def with_params(self, params: Dict[str, Any]) -> "SearchRequestBuilder":
        for name, value in params.items():
            self.with_param(name, value)
        return self

    def with_page(self, page: int) -> "SearchRequestBuilder":
        return self.with_param("page", page)

    def with_per_page(self, per_page: int) -> "SearchRequestBuilder":
        return self.with_param("per_page", per_page)

    def with_order_by(self, field: str, order: str = "desc") -> "SearchRequestBuilder":
        self.with_param("orderby", field)
        return self.with_param("order", order)

    def build(self) -> SearchRequest:
        """Freeze the current state into a ``SearchRequest``.

        The builder can keep being used; later changes do not affect
        requests already built.
        """
        return SearchRequest(
            uri=self._uri,
            taxonomy=self._taxonomy,
            params=tuple(self._params.items()),
        )
