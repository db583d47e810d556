"""Command modules for the wpctl CLI.

This module exports all command groups (Typer apps) that can be registered
with the main application.
"""

from .posts import app as posts_app
from .meta import app as meta_app
from .terms import app as terms_app
from .taxonomies import app as taxonomies_app

__all__ = [
    "posts_app",
    "meta_app",
    "terms_app",
    "taxonomies_app",
]
