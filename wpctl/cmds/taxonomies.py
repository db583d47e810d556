"""Taxonomy commands for the wpctl CLI."""

import typer

from ..utils.client_factory import get_client_and_formatter
from ..app import handle_exceptions

app = typer.Typer()

TAXONOMY_COLUMNS = ["slug", "name", "rest_base", "hierarchical", "types"]


@app.command("list")
@handle_exceptions
def list_taxonomies(ctx: typer.Context) -> None:
    """List registered taxonomies."""
    client, formatter = get_client_and_formatter(ctx)
    taxonomies = client.get_taxonomies()
    formatter.render(taxonomies, format=ctx.obj["output_format"], columns=TAXONOMY_COLUMNS, title="Taxonomies")


@app.command()
@handle_exceptions
def get(
    ctx: typer.Context,
    slug: str = typer.Argument(..., help="Taxonomy slug"),
) -> None:
    """Get a taxonomy by slug."""
    client, formatter = get_client_and_formatter(ctx)
    taxonomy = client.get_taxonomy(slug)
    formatter.render(taxonomy, format=ctx.obj["output_format"], columns=TAXONOMY_COLUMNS)
