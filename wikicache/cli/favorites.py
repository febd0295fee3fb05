"""Favorites and history commands."""

from typing import Optional

import typer

from ..container import AppContainer
from .common import console, render_articles, run_with_container


def favorite_command(
    pageid: int = typer.Argument(..., help="Wikipedia page ID"),
    remove: bool = typer.Option(False, "--remove", "-r", help="Remove from favorites"),
) -> None:
    """Add an article to favorites, or remove it."""

    async def action(container: AppContainer):
        article = await container.repository.get_article(pageid)
        if article is None:
            return None
        return article.title, await container.repository.toggle_favorite(pageid, not remove)

    outcome = run_with_container(action)

    if outcome is None:
        console.print(f"[red]Article {pageid} not found.[/red]")
        raise typer.Exit(1)

    title, updated = outcome
    if not updated:
        console.print(f"[red]Failed to update favorite status of '{title}'.[/red]")
        raise typer.Exit(1)

    if remove:
        console.print(f"[green]✅ Removed from favorites: {title}[/green]")
    else:
        console.print(f"[green]✅ Added to favorites: {title}[/green]")


def favorites_command() -> None:
    """List favorite articles."""

    async def action(container: AppContainer):
        with container.repository.get_favorite_articles() as favorites:
            return favorites.value

    articles = run_with_container(action)

    if not articles:
        console.print("[yellow]No favorite articles yet.[/yellow]")
        return

    render_articles(articles, "Favorite Articles")


def recent_command(
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Number of articles", min=1),
) -> None:
    """List recently viewed articles."""

    async def action(container: AppContainer):
        with container.repository.get_recent_articles(limit) as recent:
            return recent.value

    articles = run_with_container(action)

    if not articles:
        console.print("[yellow]No cached articles yet.[/yellow]")
        return

    render_articles(articles, "Recently Viewed")
