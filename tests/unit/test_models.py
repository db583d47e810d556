"""Unit tests for models module.

Tests the Pydantic models for WordPress entities, including decoding of
server payloads and the request bodies built for create and update calls.
"""

import pytest
from datetime import datetime

from pydantic import ValidationError

from wpctl.models import Post, Title, Content, Excerpt, Term, Taxonomy, PostMeta


class TestPost:
    """Test cases for the Post model."""

    @pytest.fixture
    def server_post(self):
        """Post as returned in the edit context."""
        return {
            "id": 3629,
            "date": "2024-03-01T09:30:00",
            "date_gmt": "2024-03-01T08:30:00",
            "guid": {"rendered": "https://blog.example.com/?p=3629"},
            "modified": "2024-03-02T10:00:00",
            "slug": "hello-world",
            "status": "publish",
            "type": "post",
            "link": "https://blog.example.com/hello-world/",
            "title": {"raw": "Hello, World!", "rendered": "Hello, World!"},
            "content": {"raw": "This is the sandbox", "rendered": "<p>This is the sandbox</p>\n", "protected": False},
            "excerpt": {"raw": "", "rendered": "<p>This is&hellip;</p>\n", "protected": False},
            "author": 1,
            "featured_media": 0,
            "comment_status": "open",
            "ping_status": "closed",
            "sticky": False,
            "format": "standard",
            "categories": [1, 7],
            "tags": [12],
            "_links": {"self": [{"href": "https://blog.example.com/wp-json/wp/v2/posts/3629"}]},
        }

    def test_post_decodes_server_payload(self, server_post):
        post = Post.model_validate(server_post)

        assert post.id == 3629
        assert isinstance(post.date, datetime)
        assert post.title.rendered == "Hello, World!"
        assert post.content.rendered == "<p>This is the sandbox</p>\n"
        assert post.content.protected is False
        assert post.guid.rendered == "https://blog.example.com/?p=3629"
        assert post.categories == [1, 7]

    def test_post_ignores_unknown_fields(self, server_post):
        server_post["yoast_head"] = "<meta>"
        post = Post.model_validate(server_post)
        assert not hasattr(post, "yoast_head")

    def test_new_post_has_no_id(self):
        post = Post(title=Title.of("Draft"))
        assert post.id is None
        assert post.content.rendered is None

    def test_nested_defaults_are_not_shared(self):
        first = Post()
        second = Post()
        first.content.rendered = "changed"
        assert second.content.rendered is None

    def test_slug_is_lowercased(self):
        assert Post(slug="Hello-World").slug == "hello-world"

    def test_invalid_comment_status_rejected(self):
        with pytest.raises(ValidationError):
            Post(comment_status="maybe")

    def test_payload_flattens_rendered_values(self):
        post = Post(
            title=Title(rendered="Hello, World!"),
            excerpt=Excerpt(rendered="This is..."),
            content=Content(rendered="<p>This is the sandbox</p>\n"),
        )

        assert post.to_payload() == {
            "title": "Hello, World!",
            "content": "<p>This is the sandbox</p>\n",
            "excerpt": "This is...",
        }

    def test_payload_prefers_raw_over_rendered(self, server_post):
        post = Post.model_validate(server_post)
        assert post.to_payload()["content"] == "This is the sandbox"

    def test_payload_sends_edited_rendered_value(self, server_post):
        post = Post.model_validate(server_post)
        post.content.rendered = "<p>Edited</p>"

        payload = post.to_payload()

        assert payload["content"] == "<p>Edited</p>"
        assert payload["title"] == "Hello, World!"

    def test_payload_prefers_edited_raw(self, server_post):
        post = Post.model_validate(server_post)
        post.content.raw = "Edited"
        post.content.rendered = "<p>Edited</p>"
        assert post.to_payload()["content"] == "Edited"

    def test_payload_leaves_out_unset_fields(self):
        payload = Post(id=5, status="draft").to_payload()
        assert payload == {"status": "draft"}

    def test_payload_carries_taxonomies_and_date(self):
        post = Post(title=Title.of("t"), categories=[3], tags=[4, 5], date=datetime(2024, 1, 2, 3, 4, 5))
        payload = post.to_payload()
        assert payload["categories"] == [3]
        assert payload["tags"] == [4, 5]
        assert payload["date"] == "2024-01-02T03:04:05"


class TestTerm:
    """Test cases for the Term model."""

    def test_term_decodes(self):
        term = Term.model_validate({
            "id": 12,
            "count": 3,
            "description": "Python posts",
            "link": "https://blog.example.com/tag/python/",
            "name": "Python",
            "slug": "python",
            "taxonomy": "post_tag",
            "meta": [],
        })
        assert term.id == 12
        assert term.taxonomy == "post_tag"
        assert term.parent is None

    def test_term_payload(self):
        term = Term(name="abc", description="desc", taxonomy="post_tag")
        assert term.to_payload() == {"name": "abc", "description": "desc"}


class TestTaxonomy:
    """Test cases for the Taxonomy model."""

    def test_taxonomy_requires_slug_and_name(self):
        with pytest.raises(ValidationError):
            Taxonomy(name="Categories")

    def test_taxonomy_decodes(self):
        taxonomy = Taxonomy.model_validate({
            "name": "Categories",
            "slug": "category",
            "description": "",
            "types": ["post"],
            "hierarchical": True,
            "rest_base": "categories",
            "capabilities": {},
        })
        assert taxonomy.hierarchical is True
        assert taxonomy.rest_base == "categories"


class TestPostMeta:
    """Test cases for the PostMeta model."""

    def test_meta_requires_key(self):
        with pytest.raises(ValidationError):
            PostMeta(value="v")

    def test_meta_decodes(self):
        meta = PostMeta.model_validate({"id": 11934, "key": "pKlRn", "value": "x"})
        assert meta.id == 11934
        assert meta.post_id is None
