"""Post management commands for the wpctl CLI.

This module provides commands for listing, inspecting, creating, updating
and deleting WordPress posts.
"""

from typing import List, Optional

import typer
from rich.console import Console

from ..models import Post, Title, Content, Excerpt
from ..request import SearchRequest
from ..utils.client_factory import get_client_and_formatter
from ..app import handle_exceptions

app = typer.Typer()
console = Console()

POST_COLUMNS = ["id", "date", "status", "slug", "title"]


def parse_params(values: List[str]) -> List[tuple]:
    """Split ``name=value`` strings into pairs."""
    pairs = []
    for item in values:
        if "=" not in item:
            raise typer.BadParameter(f"Expected name=value, got '{item}'", param_hint="--param")
        name, value = item.split("=", 1)
        pairs.append((name, value))
    return pairs


@app.command("list")
@handle_exceptions
def list_posts(
    ctx: typer.Context,
    author: Optional[int] = typer.Option(None, "--author", help="Only posts by this author ID"),
    search: Optional[str] = typer.Option(None, "--search", help="Full-text search"),
    meta_key: Optional[str] = typer.Option(None, "--meta-key", help="Only posts carrying this meta key"),
    param: List[str] = typer.Option([], "--param", help="Extra query parameter as name=value (repeatable)"),
    page: Optional[int] = typer.Option(None, "--page", help="Page number"),
    per_page: Optional[int] = typer.Option(None, "--per-page", help="Posts per page"),
    all_pages: bool = typer.Option(False, "--all", help="Follow next links and list every page"),
) -> None:
    """List posts.

    Examples:
        # First page of posts
        wpctl posts list

        # Posts by author 1
        wpctl posts list --author 1

        # Posts carrying a meta key
        wpctl posts list --meta-key subtitle

        # Any server-side filter
        wpctl posts list --param "status=draft"
    """
    client, formatter = get_client_and_formatter(ctx)

    builder = SearchRequest.builder()
    if author is not None:
        builder.with_param("filter[author]", author)
    if search:
        builder.with_param("search", search)
    if meta_key:
        builder.with_param("filter[meta_key]", meta_key)
    for name, value in parse_params(param):
        builder.with_param(name, value)
    if page:
        builder.with_page(page)
    if per_page:
        builder.with_per_page(per_page)

    response = client.fetch_posts(builder.build())
    posts = client.fetch_all(response) if all_pages else response.items

    formatter.render(posts, format=ctx.obj["output_format"], columns=POST_COLUMNS, title="Posts")

    if not all_pages and response.has_next() and formatter.determine_format(ctx.obj["output_format"]) == "table":
        console.print("[dim]More posts available, use --page or --all[/dim]")


@app.command()
@handle_exceptions
def get(
    ctx: typer.Context,
    post_id: int = typer.Argument(..., help="Post ID"),
) -> None:
    """Get a specific post by ID."""
    client, formatter = get_client_and_formatter(ctx)
    post = client.get_post(post_id)
    formatter.render(post, format=ctx.obj["output_format"], columns=POST_COLUMNS + ["link"])


@app.command()
@handle_exceptions
def create(
    ctx: typer.Context,
    title: str = typer.Option(..., "--title", help="Post title"),
    content: str = typer.Option("", "--content", help="Post body (HTML)"),
    excerpt: Optional[str] = typer.Option(None, "--excerpt", help="Post excerpt"),
    status: str = typer.Option("draft", "--status", help="Post status (draft, publish, pending, private)"),
    slug: Optional[str] = typer.Option(None, "--slug", help="Post slug (auto-generated if not provided)"),
) -> None:
    """Create a new post.

    Examples:
        # Create a draft
        wpctl posts create --title "Hello" --content "<p>Hi</p>"

        # Publish immediately
        wpctl posts create --title "Hello" --status publish
    """
    client, formatter = get_client_and_formatter(ctx)

    post = Post(
        title=Title.of(title),
        content=Content.of(content),
        excerpt=Excerpt.of(excerpt) if excerpt is not None else Excerpt(),
        status=status,
        slug=slug,
    )
    created = client.create_post(post)

    console.print(f"[green]Created post {created.id}[/green]")
    formatter.render(created, format=ctx.obj["output_format"], columns=POST_COLUMNS + ["link"])


@app.command()
@handle_exceptions
def update(
    ctx: typer.Context,
    post_id: int = typer.Argument(..., help="Post ID"),
    title: Optional[str] = typer.Option(None, "--title", help="New title"),
    content: Optional[str] = typer.Option(None, "--content", help="New body (HTML)"),
    excerpt: Optional[str] = typer.Option(None, "--excerpt", help="New excerpt"),
    status: Optional[str] = typer.Option(None, "--status", help="New status"),
) -> None:
    """Update fields of an existing post."""
    client, formatter = get_client_and_formatter(ctx)

    # Only the given fields are sent
    post = Post(id=post_id, status=status)
    if title is not None:
        post.title = Title.of(title)
    if content is not None:
        post.content = Content.of(content)
    if excerpt is not None:
        post.excerpt = Excerpt.of(excerpt)

    updated = client.update_post(post)

    console.print(f"[green]Updated post {updated.id}[/green]")
    formatter.render(updated, format=ctx.obj["output_format"], columns=POST_COLUMNS)


@app.command()
@handle_exceptions
def delete(
    ctx: typer.Context,
    post_id: int = typer.Argument(..., help="Post ID"),
    trash: bool = typer.Option(False, "--trash", help="Move to the trash instead of deleting permanently"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Delete without confirmation"),
) -> None:
    """Delete a post."""
    client, formatter = get_client_and_formatter(ctx)

    if not yes:
        post = client.get_post(post_id)
        console.print(f"Post {post.id}: {post.title.rendered or post.slug}")
        if not typer.confirm("Are you sure you want to delete this post?"):
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit()

    deleted = client.delete_post(post_id, force=not trash)
    console.print(f"[green]Deleted post {deleted.id}[/green]")
