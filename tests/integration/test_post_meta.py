"""Integration tests for post meta operations."""

import pytest

from wpctl.exceptions import PostMetaNotFoundError


@pytest.fixture
def post_id(wordpress):
    return wordpress.add_post(title="With meta")["id"]


class TestPostMeta:
    """Create, read, update and delete meta entries."""

    def test_meta_lifecycle(self, client, wordpress, post_id):
        created = client.create_meta(post_id, "k1", "v1")
        assert created.id is not None
        assert created.post_id == post_id
        assert (created.key, created.value) == ("k1", "v1")

        updated = client.update_post_meta(post_id, created.id, "k2", "v2")
        assert updated.id == created.id
        assert (updated.key, updated.value) == ("k2", "v2")

        metas = client.get_post_metas(post_id)
        assert [(m.id, m.key, m.value) for m in metas] == [(created.id, "k2", "v2")]
        assert all(m.key != "k1" and m.value != "v1" for m in metas)

        fetched = client.get_post_meta(post_id, created.id)
        assert (fetched.key, fetched.value) == ("k2", "v2")

        assert client.delete_post_meta(post_id, created.id) is True
        with pytest.raises(PostMetaNotFoundError):
            client.get_post_meta(post_id, created.id)

    def test_list_metas(self, client, wordpress, post_id):
        wordpress.add_meta(post_id, "color", "blue")
        wordpress.add_meta(post_id, "size", "L")

        metas = client.get_post_metas(post_id)

        assert sorted(m.key for m in metas) == ["color", "size"]
        assert all(m.post_id == post_id for m in metas)

    def test_list_metas_empty(self, client, wordpress, post_id):
        assert client.get_post_metas(post_id) == []

    def test_delete_missing_meta_returns_false(self, client, wordpress, post_id):
        assert client.delete_post_meta(post_id, 999) is False

    def test_delete_sends_force_flag(self, client, wordpress, post_id):
        meta = wordpress.add_meta(post_id, "k", "v")

        client.delete_post_meta(post_id, meta["id"], force=True)

        method, url, _ = wordpress.calls[-1]
        assert method == "DELETE"
        assert url.endswith("force=true")

    def test_update_missing_meta(self, client, wordpress, post_id):
        with pytest.raises(PostMetaNotFoundError):
            client.update_post_meta(post_id, 999, "k", "v")

    def test_meta_of_missing_post(self, client, wordpress):
        with pytest.raises(PostMetaNotFoundError):
            client.get_post_meta(999, 1)
