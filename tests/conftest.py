"""Shared fixtures for the wpctl test suite.

HTTP never leaves the process: ``FakeWordpress`` stands in for a WordPress
site and is installed as the side effect of the client session's
``request`` method.
"""

import json
import re
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit

import pytest
import requests
from requests.structures import CaseInsensitiveDict
from unittest.mock import patch

from wpctl.client import WordpressClient

BASE_URL = "https://blog.example.com"
API_ROOT = f"{BASE_URL}/wp-json/wp/v2"


def build_response(
    status_code: int = 200,
    body: Any = None,
    url: str = f"{API_ROOT}/posts",
    headers: Optional[Dict[str, str]] = None,
    text: Optional[str] = None,
) -> requests.Response:
    """Build a real ``requests.Response`` without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.headers = CaseInsensitiveDict(headers or {})
    response.encoding = "utf-8"
    if text is not None:
        response._content = text.encode("utf-8")
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
        response.headers.setdefault("Content-Type", "application/json")
    else:
        response._content = b""
    return response


def wp_error(status: int, code: str, message: str, url: str) -> requests.Response:
    return build_response(status, {"code": code, "message": message, "data": {"status": status}}, url=url)


class FakeWordpress:
    """In-memory WordPress REST API answering posts, meta, taxonomy and term routes."""

    TAXONOMIES = {
        "category": {"slug": "category", "name": "Categories", "description": "", "types": ["post"],
                     "hierarchical": True, "rest_base": "categories"},
        "post_tag": {"slug": "post_tag", "name": "Tags", "description": "", "types": ["post"],
                     "hierarchical": False, "rest_base": "tags"},
    }

    def __init__(self, per_page: int = 10) -> None:
        self.per_page = per_page
        self.posts: Dict[int, Dict[str, Any]] = {}
        self.metas: Dict[int, Dict[int, Dict[str, Any]]] = {}
        self.terms: Dict[str, Dict[int, Dict[str, Any]]] = {"categories": {}, "tags": {}}
        self.calls: List[tuple] = []
        self._next_id = 100

    # Seeding helpers
    def new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def add_post(self, title: str = "Post", content: str = "Body", author: int = 1, **fields: Any) -> Dict[str, Any]:
        post_id = self.new_id()
        post = {
            "id": post_id,
            "date": "2024-01-01T10:00:00",
            "slug": f"post-{post_id}",
            "status": fields.pop("status", "publish"),
            "type": "post",
            "link": f"{BASE_URL}/?p={post_id}",
            "title": {"raw": title, "rendered": title},
            "content": {"raw": content, "rendered": content, "protected": False},
            "excerpt": {"raw": "", "rendered": "", "protected": False},
            "author": author,
            "categories": [],
            "tags": [],
        }
        post.update(fields)
        self.posts[post_id] = post
        self.metas[post_id] = {}
        return post

    def add_meta(self, post_id: int, key: str, value: str) -> Dict[str, Any]:
        meta = {"id": self.new_id(), "key": key, "value": value}
        self.metas[post_id][meta["id"]] = meta
        return meta

    def add_term(self, rest_base: str, name: str, description: str = "", posts: Optional[List[int]] = None) -> Dict[str, Any]:
        taxonomy = "category" if rest_base == "categories" else "post_tag"
        term_id = self.new_id()
        term = {
            "id": term_id,
            "count": 0,
            "description": description,
            "link": f"{BASE_URL}/{rest_base}/{name.lower()}",
            "name": name,
            "slug": name.lower(),
            "taxonomy": taxonomy,
            "posts": posts or [],
        }
        self.terms[rest_base][term_id] = term
        return term

    # Transport
    def __call__(self, method: str, url: str, params: Any = None, json: Any = None, timeout: Any = None, **kwargs: Any):
        parts = urlsplit(url)
        query = dict(parse_qsl(parts.query))
        if params:
            query.update({k: str(v) for k, v in (params.items() if isinstance(params, dict) else params)})
        base = f"{parts.scheme}://{parts.netloc}{parts.path}"
        full_url = f"{base}?{urlencode(query)}" if query else base
        self.calls.append((method, full_url, json))

        path = parts.path[len("/wp-json/wp/v2"):]
        return self.route(method, path, query, json or {}, base, full_url)

    def route(self, method, path, query, body, base, full_url):
        if path in ("", "/"):
            return build_response(200, {"namespace": "wp/v2", "routes": {}}, url=full_url)

        if path == "/posts":
            if method == "GET":
                posts = list(self.posts.values())
                if "filter[author]" in query:
                    posts = [p for p in posts if str(p["author"]) == query["filter[author]"]]
                if "filter[meta_key]" in query:
                    key = query["filter[meta_key]"]
                    posts = [p for p in posts if any(m["key"] == key for m in self.metas[p["id"]].values())]
                return self.paginate(posts, query, base, full_url, "rest_post_invalid_page_number")
            if method == "POST":
                if not body.get("title") and not body.get("content"):
                    return wp_error(400, "empty_content", "Content, title, and excerpt are empty.", full_url)
                post = self.add_post(title=body.get("title", ""), content=body.get("content", ""),
                                     status=body.get("status", "draft"))
                self.apply_post_fields(post, body)
                return build_response(201, post, url=full_url)

        match = re.fullmatch(r"/posts/(\d+)", path)
        if match:
            post = self.posts.get(int(match.group(1)))
            if post is None:
                return wp_error(404, "rest_post_invalid_id", "Invalid post ID.", full_url)
            if method == "GET":
                return build_response(200, post, url=full_url)
            if method in ("PUT", "POST"):
                self.apply_post_fields(post, body)
                return build_response(200, post, url=full_url)
            if method == "DELETE":
                if query.get("force") == "true":
                    del self.posts[post["id"]]
                    return build_response(200, {"deleted": True, "previous": post}, url=full_url)
                post["status"] = "trash"
                return build_response(200, post, url=full_url)

        match = re.fullmatch(r"/posts/(\d+)/meta(?:/(\d+))?", path)
        if match:
            post_id = int(match.group(1))
            if post_id not in self.posts:
                return wp_error(404, "rest_post_invalid_id", "Invalid post ID.", full_url)
            metas = self.metas[post_id]
            if match.group(2) is None:
                if method == "GET":
                    return build_response(200, list(metas.values()), url=full_url)
                if method == "POST":
                    meta = self.add_meta(post_id, body["key"], body["value"])
                    return build_response(201, meta, url=full_url)
            meta = metas.get(int(match.group(2)))
            if meta is None:
                return wp_error(404, "rest_meta_invalid_id", "Invalid meta ID.", full_url)
            if method == "GET":
                return build_response(200, meta, url=full_url)
            if method in ("PUT", "POST"):
                meta.update({"key": body["key"], "value": body["value"]})
                return build_response(200, meta, url=full_url)
            if method == "DELETE":
                del metas[meta["id"]]
                return build_response(200, {"message": "Deleted meta"}, url=full_url)

        if path == "/taxonomies":
            return build_response(200, self.TAXONOMIES, url=full_url)

        match = re.fullmatch(r"/taxonomies/(\w+)", path)
        if match:
            taxonomy = self.TAXONOMIES.get(match.group(1))
            if taxonomy is None:
                return wp_error(404, "rest_taxonomy_invalid", "Invalid taxonomy.", full_url)
            return build_response(200, taxonomy, url=full_url)

        match = re.fullmatch(r"/(categories|tags)(?:/(\d+))?", path)
        if match:
            rest_base = match.group(1)
            terms = self.terms[rest_base]
            if match.group(2) is None:
                if method == "GET":
                    found = list(terms.values())
                    if "post" in query:
                        found = [t for t in found if int(query["post"]) in t["posts"]]
                    return self.paginate(found, query, base, full_url, "rest_term_invalid_page_number")
                if method == "POST":
                    term = self.add_term(rest_base, body["name"], body.get("description", ""))
                    return build_response(201, term, url=full_url)
            term = terms.get(int(match.group(2)))
            if term is None:
                return wp_error(404, "rest_term_invalid", "Term does not exist.", full_url)
            if method == "GET":
                return build_response(200, term, url=full_url)
            if method in ("PUT", "POST"):
                term.update({k: v for k, v in body.items() if k in ("name", "description", "slug")})
                return build_response(200, term, url=full_url)
            if method == "DELETE":
                if query.get("force") != "true":
                    return wp_error(501, "rest_trash_not_supported", "Terms do not support trashing.", full_url)
                del terms[term["id"]]
                return build_response(200, {"deleted": True, "previous": term}, url=full_url)

        return wp_error(404, "rest_no_route", "No route was found matching the URL and request method.", full_url)

    def apply_post_fields(self, post, body):
        for name in ("title", "content", "excerpt"):
            if name in body:
                post[name] = dict(post[name], raw=body[name], rendered=body[name])
        for name in ("status", "slug", "author", "categories", "tags"):
            if name in body:
                post[name] = body[name]

    def paginate(self, items, query, base, full_url, invalid_code):
        per_page = int(query.get("per_page", self.per_page))
        page = int(query.get("page", 1))
        total = len(items)
        total_pages = max(1, -(-total // per_page))
        if page > total_pages:
            return wp_error(400, invalid_code, "The page number requested is larger than the number of pages available.", full_url)

        chunk = items[(page - 1) * per_page:page * per_page]
        links = []
        if page > 1:
            links.append(f'<{base}?{urlencode(dict(query, page=page - 1))}>; rel="prev"')
        if page < total_pages:
            links.append(f'<{base}?{urlencode(dict(query, page=page + 1))}>; rel="next"')

        headers = {"X-WP-Total": str(total), "X-WP-TotalPages": str(total_pages)}
        if links:
            headers["Link"] = ", ".join(links)
        return build_response(200, chunk, url=full_url, headers=headers)


@pytest.fixture
def make_response():
    """Factory for ``requests.Response`` objects."""
    return build_response


@pytest.fixture
def client():
    """Client pointed at the fake site's URL."""
    return WordpressClient(base_url=BASE_URL, username="editor", password="abcd efgh ijkl mnop")


@pytest.fixture
def http(client):
    """Mock replacing the client's transport; set ``side_effect`` or ``return_value``."""
    with patch.object(client.session, "request") as mock_request:
        yield mock_request


@pytest.fixture
def wordpress(client):
    """Fake WordPress site wired into the client's transport."""
    site = FakeWordpress()
    with patch.object(client.session, "request", side_effect=site):
        yield site
