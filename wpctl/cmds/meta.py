"""Post meta commands for the wpctl CLI.

This module provides commands for managing the key/value meta entries
attached to a post.
"""

import typer
from rich.console import Console

from ..utils.client_factory import get_client_and_formatter
from ..app import handle_exceptions

app = typer.Typer()
console = Console()

META_COLUMNS = ["id", "post_id", "key", "value"]


@app.command("list")
@handle_exceptions
def list_meta(
    ctx: typer.Context,
    post_id: int = typer.Argument(..., help="Post ID"),
) -> None:
    """List the meta entries of a post."""
    client, formatter = get_client_and_formatter(ctx)
    metas = client.get_post_metas(post_id)
    formatter.render(metas, format=ctx.obj["output_format"], columns=META_COLUMNS, title=f"Meta of post {post_id}")


@app.command()
@handle_exceptions
def get(
    ctx: typer.Context,
    post_id: int = typer.Argument(..., help="Post ID"),
    meta_id: int = typer.Argument(..., help="Meta entry ID"),
) -> None:
    """Get a single meta entry."""
    client, formatter = get_client_and_formatter(ctx)
    meta = client.get_post_meta(post_id, meta_id)
    formatter.render(meta, format=ctx.obj["output_format"], columns=META_COLUMNS)


@app.command()
@handle_exceptions
def create(
    ctx: typer.Context,
    post_id: int = typer.Argument(..., help="Post ID"),
    key: str = typer.Option(..., "--key", help="Meta key"),
    value: str = typer.Option(..., "--value", help="Meta value"),
) -> None:
    """Attach a new meta entry to a post."""
    client, formatter = get_client_and_formatter(ctx)
    meta = client.create_meta(post_id, key, value)
    console.print(f"[green]Created meta {meta.id} on post {post_id}[/green]")
    formatter.render(meta, format=ctx.obj["output_format"], columns=META_COLUMNS)


@app.command()
@handle_exceptions
def update(
    ctx: typer.Context,
    post_id: int = typer.Argument(..., help="Post ID"),
    meta_id: int = typer.Argument(..., help="Meta entry ID"),
    key: str = typer.Option(..., "--key", help="New meta key"),
    value: str = typer.Option(..., "--value", help="New meta value"),
) -> None:
    """Replace the key and value of a meta entry."""
    client, formatter = get_client_and_formatter(ctx)
    meta = client.update_post_meta(post_id, meta_id, key, value)
    console.print(f"[green]Updated meta {meta.id} on post {post_id}[/green]")
    formatter.render(meta, format=ctx.obj["output_format"], columns=META_COLUMNS)


@app.command()
@handle_exceptions
def delete(
    ctx: typer.Context,
    post_id: int = typer.Argument(..., help="Post ID"),
    meta_id: int = typer.Argument(..., help="Meta entry ID"),
    force: bool = typer.Option(False, "--force", help="Bypass the trash"),
) -> None:
    """Delete a meta entry."""
    client, _ = get_client_and_formatter(ctx)

    if client.delete_post_meta(post_id, meta_id, force=force):
        console.print(f"[green]Deleted meta {meta_id} from post {post_id}[/green]")
    else:
        console.print(f"[yellow]Meta {meta_id} of post {post_id} not found[/yellow]")
        raise typer.Exit(1)
