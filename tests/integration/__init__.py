"""Integration tests for wpctl.

These tests drive ``WordpressClient`` and the CLI end to end against the
in-memory ``FakeWordpress`` site from ``tests/conftest.py``.

Test Structure:
- test_posts.py: Post CRUD and filtering
- test_post_meta.py: Post meta CRUD
- test_terms.py: Taxonomies and terms
- test_pagination.py: Paged responses and traversal
- test_error_handling.py: Transport, HTTP and decoding failures
- test_cli.py: Command-line workflows
"""
