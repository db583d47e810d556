"""WordPress REST API client package.

A typed client for the WordPress REST API v2 covering posts, post meta,
taxonomies and terms, with paged list responses and a small command-line
interface.
"""

__version__ = "0.1.0"
__description__ = "Typed client and CLI for the WordPress REST API"

# Re-export main classes for convenience
from .client import WordpressClient
from .config import ClientConfig, WordpressSettings, load_config
from .models import Post, Title, Content, Excerpt, Term, Taxonomy, PostMeta
from .request import Request, SearchRequest, SearchRequestBuilder, Taxonomies
from .response import Direction, PagedResponse
from .utils.client_factory import ClientFactory
from .exceptions import (
    ErrorKind,
    WpCtlError,
    ConfigError,
    AuthenticationError,
    TokenExpiredError,
    TransportError,
    APIError,
    BadRequestError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    PostNotFoundError,
    PostMetaNotFoundError,
    TermNotFoundError,
    TaxonomyNotFoundError,
    PageNotFoundError,
    ServerError,
    ResponseDecodeError,
    PostCreateError,
)

__all__ = [
    "__version__",
    "__description__",
    "WordpressClient",
    "ClientConfig",
    "WordpressSettings",
    "load_config",
    "ClientFactory",
    "Post",
    "Title",
    "Content",
    "Excerpt",
    "Term",
    "Taxonomy",
    "PostMeta",
    "Request",
    "SearchRequest",
    "SearchRequestBuilder",
    "Taxonomies",
    "Direction",
    "PagedResponse",
    "ErrorKind",
    "WpCtlError",
    "ConfigError",
    "AuthenticationError",
    "TokenExpiredError",
    "TransportError",
    "APIError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "PostNotFoundError",
    "PostMetaNotFoundError",
    "TermNotFoundError",
    "TaxonomyNotFoundError",
    "PageNotFoundError",
    "ServerError",
    "ResponseDecodeError",
    "PostCreateError",
]
