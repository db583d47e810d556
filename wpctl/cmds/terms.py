"""Taxonomy term commands for the wpctl CLI.

This module provides commands for listing, creating and deleting the terms
of a taxonomy, such as categories and tags.
"""

from typing import Optional

import typer
from rich.console import Console

from ..models import Term
from ..utils.client_factory import get_client_and_formatter
from ..app import handle_exceptions

app = typer.Typer()
console = Console()

TERM_COLUMNS = ["id", "taxonomy", "name", "slug", "count", "description"]


@app.command("list")
@handle_exceptions
def list_terms(
    ctx: typer.Context,
    taxonomy: str = typer.Argument(..., help="Taxonomy slug (category, post_tag, ...)"),
    post_id: Optional[int] = typer.Option(None, "--post", help="Only terms assigned to this post"),
) -> None:
    """List every term of a taxonomy.

    Examples:
        # All categories
        wpctl terms list category

        # Tags of post 42
        wpctl terms list post_tag --post 42
    """
    client, formatter = get_client_and_formatter(ctx)

    if post_id is not None:
        terms = client.get_post_terms(post_id, taxonomy)
    else:
        terms = client.get_terms(taxonomy)

    formatter.render(terms, format=ctx.obj["output_format"], columns=TERM_COLUMNS, title=f"Terms of {taxonomy}")


@app.command()
@handle_exceptions
def get(
    ctx: typer.Context,
    taxonomy: str = typer.Argument(..., help="Taxonomy slug"),
    term_id: int = typer.Argument(..., help="Term ID"),
) -> None:
    """Get a specific term by ID."""
    client, formatter = get_client_and_formatter(ctx)
    term = client.get_term(taxonomy, term_id)
    formatter.render(term, format=ctx.obj["output_format"], columns=TERM_COLUMNS)


@app.command()
@handle_exceptions
def create(
    ctx: typer.Context,
    taxonomy: str = typer.Argument(..., help="Taxonomy slug"),
    name: str = typer.Option(..., "--name", help="Term name"),
    description: Optional[str] = typer.Option(None, "--description", help="Term description"),
    slug: Optional[str] = typer.Option(None, "--slug", help="Term slug (auto-generated if not provided)"),
    parent: Optional[int] = typer.Option(None, "--parent", help="Parent term ID (hierarchical taxonomies)"),
) -> None:
    """Create a new term."""
    client, formatter = get_client_and_formatter(ctx)

    term = Term(name=name, description=description, slug=slug, parent=parent, taxonomy=taxonomy)
    created = client.create_term(term)

    console.print(f"[green]Created term {created.id} in {taxonomy}[/green]")
    formatter.render(created, format=ctx.obj["output_format"], columns=TERM_COLUMNS)


@app.command()
@handle_exceptions
def delete(
    ctx: typer.Context,
    taxonomy: str = typer.Argument(..., help="Taxonomy slug"),
    term_id: int = typer.Argument(..., help="Term ID"),
) -> None:
    """Delete a term permanently."""
    client, _ = get_client_and_formatter(ctx)
    deleted = client.delete_term(Term(id=term_id, taxonomy=taxonomy))
    console.print(f"[green]Deleted term {deleted.id} ({deleted.name})[/green]")
