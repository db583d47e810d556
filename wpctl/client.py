"""WordPress REST API client.

This module provides a high-level client for the WordPress REST API v2:
posts, post meta, taxonomies and terms. It issues authenticated requests,
decodes JSON into typed models and exposes list endpoints as paged
responses that can be traversed through their ``Link`` headers.

The client keeps no state between calls beyond its connection settings.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Type, TypeVar, Union
from urllib.parse import urljoin

import requests
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .config import DEFAULT_CONTEXT, WordpressSettings
from .models import Post, PostMeta, Taxonomy, Term
from .request import Request, SearchRequest, Taxonomies
from .response import Direction, PagedResponse
from .utils.auth import AuthManager
from .exceptions import (
    APIError,
    BadRequestError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    TransportError,
    AuthenticationError,
    ResponseDecodeError,
    PostCreateError,
    PostNotFoundError,
    PostMetaNotFoundError,
    TermNotFoundError,
    TaxonomyNotFoundError,
    PageNotFoundError,
    WpCtlError,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class WordpressClient:
    """High-level client for WordPress REST API operations."""

    CONTEXT = DEFAULT_CONTEXT

    def __init__(
        self,
        settings: Optional[WordpressSettings] = None,
        base_url: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        token: Optional[str] = None,
        context: str = DEFAULT_CONTEXT,
        timeout: int = 30,
        debug: bool = False,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize WordPress API client.

        Args:
            settings: Connection settings
            base_url: Site URL (if settings not provided)
            username: User name for application-password auth
            password: Application password
            token: Bearer token
            context: API path prefix
            timeout: Request timeout in seconds
            debug: Log response bodies
            session: Transport to use; a new ``requests.Session`` by default

        Raises:
            ValueError: If insufficient configuration is provided
        """
        if settings:
            self.url = settings.url
            self.context = settings.context
            username = settings.username
            password = settings.password.get_secret_value() if settings.password else None
            token = settings.token.get_secret_value() if settings.token else None
            self.timeout = settings.timeout
            self.debug = settings.debug or debug
        else:
            if not base_url:
                raise ValueError("Either settings or base_url must be provided")

            self.url = str(base_url).rstrip("/")
            self.context = context
            self.timeout = timeout
            self.debug = debug

        self.auth = AuthManager(username=username, password=password, token=token)

        self.session = session or requests.Session()
        self.session.headers.update(self.auth.get_headers())
        auth = self.auth.get_auth()
        if auth is not None:
            self.session.auth = auth

    @property
    def api_root(self) -> str:
        return f"{self.url}{self.context}"

    def _url(self, path: str) -> str:
        return f"{self.api_root}{path}"

    def _handle_response(self, response: requests.Response) -> requests.Response:
        """Convert error statuses to the matching exceptions.

        Args:
            response: Response object

        Returns:
            The response, when its status is a success

        Raises:
            APIError: For various HTTP error conditions
        """
        status = response.status_code
        if status < 400:
            return response

        # Extract error details from response
        error_data: Any = {}
        try:
            error_data = response.json()
        except ValueError:
            error_data = {"body": response.text}

        message = f"HTTP {status}"
        if isinstance(error_data, dict) and error_data.get("message"):
            message = f"{message}: {error_data['message']}"

        if status in (400, 422):
            raise BadRequestError(message, status_code=status, response_data=error_data)
        elif status == 401:
            raise UnauthorizedError(message, status_code=status, response_data=error_data)
        elif status == 403:
            raise ForbiddenError(message, status_code=status, response_data=error_data)
        elif status in (404, 410):
            raise NotFoundError(message, status_code=status, response_data=error_data)
        elif status >= 500:
            raise ServerError(message, status_code=status, response_data=error_data)

        raise APIError(message, status_code=status, response_data=error_data)

    def _make_request(
        self,
        method: str,
        url: str,
        params: Optional[Any] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """Send one request and classify its outcome.

        Args:
            method: HTTP method
            url: Absolute URL
            params: Query parameters
            json: Request body

        Returns:
            Successful response

        Raises:
            TransportError: If the request never got an HTTP answer
            APIError: For error statuses
        """
        logger.debug("%s %s params=%s", method, url, params)

        try:
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request to {url} timed out after {self.timeout}s", cause=e) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}", cause=e) from e

        logger.debug("%s %s -> %s", method, response.url, response.status_code)
        if self.debug:
            logger.debug("Response body: %s", response.text)

        return self._handle_response(response)

    def _json(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ResponseDecodeError(
                f"Invalid JSON in response from {response.url}: {e}",
                status_code=response.status_code,
                response_data={"body": response.text},
            ) from e

    def _decode(self, data: Any, entity_type: Type[M], response: Optional[requests.Response] = None) -> M:
        try:
            return entity_type.model_validate(data)
        except PydanticValidationError as e:
            raise ResponseDecodeError(
                f"Response is not a valid {entity_type.__name__}: {e}",
                status_code=response.status_code if response is not None else None,
                response_data=data,
            ) from e

    def _decode_list(self, data: Any, entity_type: Type[M], response: Optional[requests.Response] = None) -> List[M]:
        if not isinstance(data, list):
            raise ResponseDecodeError(
                f"Expected a list of {entity_type.__name__}, got {type(data).__name__}",
                status_code=response.status_code if response is not None else None,
                response_data=data,
            )
        return [self._decode(item, entity_type, response) for item in data]

    def _deleted(self, data: Any, entity_type: Type[M], response: requests.Response) -> M:
        # Forced deletes answer {"deleted": true, "previous": {...}}.
        if isinstance(data, dict) and "previous" in data:
            data = data["previous"]
        return self._decode(data, entity_type, response)

    def _page(self, response: requests.Response, entity_type: Type[M]) -> PagedResponse[M]:
        items = self._decode_list(self._json(response), entity_type, response)
        links = response.links or {}

        def header_int(name: str) -> Optional[int]:
            value = response.headers.get(name)
            return int(value) if value and value.isdigit() else None

        def link(rel: str) -> Optional[str]:
            url = links.get(rel, {}).get("url")
            return urljoin(response.url, url) if url else None

        return PagedResponse(
            items=items,
            self_url=response.url,
            entity_type=entity_type,
            next_url=link("next"),
            previous_url=link("prev"),
            total=header_int("X-WP-Total"),
            total_pages=header_int("X-WP-TotalPages"),
        )

    # Pagination
    def get_paged_response(
        self,
        uri: str,
        entity_type: Type[M],
        taxonomy: Optional[str] = None,
        params: Optional[Any] = None,
        **path_values: Any,
    ) -> PagedResponse[M]:
        """Fetch the first page of a list endpoint.

        Every list operation of the client goes through here.

        Args:
            uri: Path template from ``Request``
            entity_type: Model to decode items into
            taxonomy: Taxonomy slug filling the ``{taxonomy}`` segment
            params: Query parameters, passed through verbatim
            **path_values: Values for the other template segments

        Returns:
            First page of results; empty when nothing matches
        """
        request = SearchRequest(uri=uri, taxonomy=taxonomy)
        url = self._url(request.path(**path_values))
        response = self._make_request("GET", url, params=params)
        return self._page(response, entity_type)

    def search(self, request: SearchRequest, entity_type: Type[M], **path_values: Any) -> PagedResponse[M]:
        """Run a built ``SearchRequest`` against its endpoint."""
        return self.get_paged_response(
            request.uri,
            entity_type,
            taxonomy=request.taxonomy,
            params=request.query_params(),
            **path_values,
        )

    def traverse(self, page: PagedResponse[M], direction: Direction) -> PagedResponse[M]:
        """Fetch the page adjacent to ``page``.

        ``page`` itself is not modified.

        Args:
            page: Current page
            direction: ``Direction.NEXT`` or ``Direction.PREVIOUS``

        Returns:
            The adjacent page, decoded into the same entity type

        Raises:
            PageNotFoundError: If there is no such link, or it no longer resolves
        """
        direction = Direction(direction)
        url = page.link(direction)
        if url is None:
            raise PageNotFoundError(f"No {direction.name.lower()} page for {page.self_url}")

        try:
            response = self._make_request("GET", url)
        except NotFoundError as e:
            raise PageNotFoundError(
                f"Page {url} no longer exists",
                status_code=e.status_code,
                response_data=e.response_data,
            ) from e
        except BadRequestError as e:
            # WordPress answers out-of-range page numbers with a 400.
            if e.error_code and e.error_code.endswith("_invalid_page_number"):
                raise PageNotFoundError(
                    f"Page {url} is out of range",
                    status_code=e.status_code,
                    response_data=e.response_data,
                ) from e
            raise

        return self._page(response, page.entity_type)

    def iter_pages(
        self,
        first: PagedResponse[M],
        direction: Direction = Direction.NEXT,
    ) -> Iterator[PagedResponse[M]]:
        """Yield ``first`` and then every page after it in ``direction``.

        Args:
            first: Page to start from
            direction: Which links to follow

        Yields:
            Pages in traversal order
        """
        page = first
        yield page
        while page.link(direction) is not None:
            page = self.traverse(page, direction)
            yield page

    def fetch_all(self, first: PagedResponse[M]) -> List[M]:
        """Collect the items of ``first`` and all following pages."""
        items: List[M] = []
        for page in self.iter_pages(first):
            items.extend(page.items)
        return items

    # Posts API methods
    def get_post(self, post_id: int) -> Post:
        """Get a specific post by ID.

        Raises:
            PostNotFoundError: If no post has that ID
        """
        try:
            response = self._make_request("GET", self._url(Request.POST.format(post_id=post_id)))
        except NotFoundError as e:
            raise PostNotFoundError(
                f"Post {post_id} not found",
                status_code=e.status_code,
                response_data=e.response_data,
            ) from e
        return self._decode(self._json(response), Post, response)

    def fetch_posts(self, request: Optional[SearchRequest] = None) -> PagedResponse[Post]:
        """Get the first page of posts matching ``request``.

        Args:
            request: Filters and paging; all posts when omitted

        Returns:
            First page of matching posts
        """
        return self.search(request or SearchRequest.posts(), Post)

    search_posts = fetch_posts

    def create_post(self, post: Post) -> Post:
        """Create a new post.

        Args:
            post: Post data; its ``id`` is ignored

        Returns:
            The created post, with its server-assigned ID

        Raises:
            PostCreateError: If the post is refused or cannot be sent
        """
        return self._save_post("POST", self._url(Request.POSTS), post)

    def update_post(self, post: Post) -> Post:
        """Update an existing post.

        Args:
            post: Post carrying the ID of an existing post

        Returns:
            Updated post as stored by the server

        Raises:
            ValueError: If the post has no ID
            PostCreateError: If the server refuses the update
        """
        if post.id is None:
            raise ValueError("Post must have an id to be updated")

        return self._save_post("PUT", self._url(Request.POST.format(post_id=post.id)), post)

    def _save_post(self, method: str, url: str, post: Post) -> Post:
        action = "create" if method == "POST" else "update"
        try:
            response = self._make_request(method, url, json=post.to_payload())
            created = self._decode(self._json(response), Post, response)
        except APIError as e:
            raise PostCreateError(
                f"Failed to {action} post: {e.message}",
                cause=e,
                status_code=e.status_code,
                response_data=e.response_data,
            ) from e
        except (TransportError, AuthenticationError) as e:
            raise PostCreateError(f"Failed to {action} post: {e.message}", cause=e) from e

        if created.id is None:
            raise PostCreateError(
                f"Server did not assign an id to the {action}d post",
                status_code=response.status_code,
                response_data=self._json(response),
            )

        logger.debug("%sd post %s", action, created.id)
        return created

    def delete_post(self, post: Union[Post, int], force: bool = True) -> Post:
        """Delete a post.

        Args:
            post: Post, or post ID
            force: Delete permanently instead of moving to the trash

        Returns:
            The post as it was before deletion

        Raises:
            ValueError: If the post has no ID
            PostNotFoundError: If the post does not exist
        """
        post_id = post if isinstance(post, int) else post.id
        if post_id is None:
            raise ValueError("Post must have an id to be deleted")

        params = {"force": "true"} if force else None
        try:
            response = self._make_request("DELETE", self._url(Request.POST.format(post_id=post_id)), params=params)
        except NotFoundError as e:
            raise PostNotFoundError(
                f"Post {post_id} not found",
                status_code=e.status_code,
                response_data=e.response_data,
            ) from e
        return self._deleted(self._json(response), Post, response)

    # Post meta API methods
    def get_post_metas(self, post_id: int) -> List[PostMeta]:
        """Get all meta entries of a post."""
        first = self.get_paged_response(Request.METAS, PostMeta, post_id=post_id)
        return [meta.model_copy(update={"post_id": post_id}) for meta in self.fetch_all(first)]

    def get_post_meta(self, post_id: int, meta_id: int) -> PostMeta:
        """Get a single meta entry of a post.

        Raises:
            PostMetaNotFoundError: If the post or the meta entry does not exist
        """
        url = self._url(Request.META.format(post_id=post_id, meta_id=meta_id))
        try:
            response = self._make_request("GET", url)
        except NotFoundError as e:
            raise PostMetaNotFoundError(
                f"Meta {meta_id} of post {post_id} not found",
                status_code=e.status_code,
                response_data=e.response_data,
            ) from e
        return self._meta(response, post_id)

    def create_meta(self, post_id: int, key: str, value: Any) -> PostMeta:
        """Attach a new meta entry to a post.

        Returns:
            The created entry, with its server-assigned ID
        """
        url = self._url(Request.METAS.format(post_id=post_id))
        response = self._make_request("POST", url, json={"key": key, "value": value})
        return self._meta(response, post_id)

    def update_post_meta(self, post_id: int, meta_id: int, key: str, value: Any) -> PostMeta:
        """Replace both key and value of a meta entry.

        Raises:
            PostMetaNotFoundError: If the post or the meta entry does not exist
        """
        url = self._url(Request.META.format(post_id=post_id, meta_id=meta_id))
        try:
            response = self._make_request("PUT", url, json={"key": key, "value": value})
        except NotFoundError as e:
            raise PostMetaNotFoundError(
                f"Meta {meta_id} of post {post_id} not found",
                status_code=e.status_code,
                response_data=e.response_data,
            ) from e
        return self._meta(response, post_id)

    def delete_post_meta(self, post_id: int, meta_id: int, force: bool = False) -> bool:
        """Delete a meta entry.

        Args:
            post_id: Post ID
            meta_id: Meta entry ID
            force: Bypass the trash

        Returns:
            True if deletion was successful, False if the entry did not exist
        """
        url = self._url(Request.META.format(post_id=post_id, meta_id=meta_id))
        try:
            self._make_request("DELETE", url, params={"force": "true" if force else "false"})
            return True
        except NotFoundError:
            return False

    def _meta(self, response: requests.Response, post_id: int) -> PostMeta:
        meta = self._decode(self._json(response), PostMeta, response)
        return meta.model_copy(update={"post_id": post_id})

    # Taxonomy API methods
    def get_taxonomies(self) -> List[Taxonomy]:
        """Get all registered taxonomies.

        The endpoint answers with an object keyed by slug, not a list, so it
        is not paged.
        """
        response = self._make_request("GET", self._url(Request.TAXONOMIES))
        data = self._json(response)
        if not isinstance(data, dict):
            raise ResponseDecodeError(
                "Expected an object of taxonomies",
                status_code=response.status_code,
                response_data=data,
            )
        return [self._decode(item, Taxonomy, response) for item in data.values()]

    def get_taxonomy(self, slug: str) -> Taxonomy:
        """Get a taxonomy by slug.

        Raises:
            TaxonomyNotFoundError: If no taxonomy has that slug
        """
        try:
            response = self._make_request("GET", self._url(Request.TAXONOMY.format(slug=slug)))
        except NotFoundError as e:
            raise TaxonomyNotFoundError(
                f"Taxonomy '{slug}' not found",
                status_code=e.status_code,
                response_data=e.response_data,
            ) from e
        return self._decode(self._json(response), Taxonomy, response)

    # Terms API methods
    def get_terms(self, taxonomy: str, per_page: Optional[int] = None) -> List[Term]:
        """Get every term of a taxonomy.

        All pages are fetched; the result is the complete set.

        Args:
            taxonomy: Taxonomy slug
            per_page: Page size to request
        """
        params = {"per_page": per_page} if per_page else None
        first = self.get_paged_response(Request.TERMS, Term, taxonomy, params=params)
        return self.fetch_all(first)

    def get_categories(self) -> List[Term]:
        return self.get_terms(Taxonomies.CATEGORY)

    def get_tags(self) -> List[Term]:
        return self.get_terms(Taxonomies.TAG)

    def get_post_terms(self, post: Union[Post, int], taxonomy: str) -> List[Term]:
        """Get every term of ``taxonomy`` assigned to a post."""
        post_id = post if isinstance(post, int) else post.id
        if post_id is None:
            raise ValueError("Post must have an id")

        first = self.get_paged_response(Request.TERMS, Term, taxonomy, params={"post": post_id})
        return self.fetch_all(first)

    def get_term(self, taxonomy: str, term_id: int) -> Term:
        """Get a specific term by ID.

        Raises:
            TermNotFoundError: If the taxonomy has no term with that ID
        """
        url = self._url(Request.TERM.format(taxonomy=Taxonomies.rest_base(taxonomy), term_id=term_id))
        try:
            response = self._make_request("GET", url)
        except NotFoundError as e:
            raise TermNotFoundError(
                f"Term {term_id} not found in taxonomy '{taxonomy}'",
                status_code=e.status_code,
                response_data=e.response_data,
            ) from e
        return self._decode(self._json(response), Term, response)

    def create_term(self, term: Term, taxonomy: Optional[str] = None) -> Term:
        """Create a new term.

        Args:
            term: Term data
            taxonomy: Taxonomy slug; defaults to ``term.taxonomy``

        Returns:
            The created term, with its server-assigned ID
        """
        taxonomy = self._term_taxonomy(term, taxonomy)
        url = self._url(Request.TERMS.format(taxonomy=Taxonomies.rest_base(taxonomy)))
        response = self._make_request("POST", url, json=term.to_payload())
        return self._decode(self._json(response), Term, response)

    def update_term(self, term: Term, taxonomy: Optional[str] = None) -> Term:
        """Update an existing term.

        Raises:
            ValueError: If the term has no ID
            TermNotFoundError: If the term does not exist
        """
        if term.id is None:
            raise ValueError("Term must have an id to be updated")

        taxonomy = self._term_taxonomy(term, taxonomy)
        url = self._url(Request.TERM.format(taxonomy=Taxonomies.rest_base(taxonomy), term_id=term.id))
        try:
            response = self._make_request("PUT", url, json=term.to_payload())
        except NotFoundError as e:
            raise TermNotFoundError(
                f"Term {term.id} not found in taxonomy '{taxonomy}'",
                status_code=e.status_code,
                response_data=e.response_data,
            ) from e
        return self._decode(self._json(response), Term, response)

    def delete_term(self, term: Term, taxonomy: Optional[str] = None) -> Term:
        """Delete a term permanently. Terms have no trash.

        Returns:
            The term as it was before deletion

        Raises:
            ValueError: If the term has no ID
            TermNotFoundError: If the term does not exist
        """
        if term.id is None:
            raise ValueError("Term must have an id to be deleted")

        taxonomy = self._term_taxonomy(term, taxonomy)
        url = self._url(Request.TERM.format(taxonomy=Taxonomies.rest_base(taxonomy), term_id=term.id))
        try:
            response = self._make_request("DELETE", url, params={"force": "true"})
        except NotFoundError as e:
            raise TermNotFoundError(
                f"Term {term.id} not found in taxonomy '{taxonomy}'",
                status_code=e.status_code,
                response_data=e.response_data,
            ) from e
        return self._deleted(self._json(response), Term, response)

    @staticmethod
    def _term_taxonomy(term: Term, taxonomy: Optional[str]) -> str:
        taxonomy = taxonomy or term.taxonomy
        if not taxonomy:
            raise ValueError("Term taxonomy is required")
        return taxonomy

    # Utility methods
    def test_connection(self) -> bool:
        """Test connection to the WordPress API.

        Returns:
            True if the API root answers
        """
        try:
            self._make_request("GET", self.api_root)
            return True
        except WpCtlError as e:
            logger.debug("Connection test failed: %s", e)
            return False
