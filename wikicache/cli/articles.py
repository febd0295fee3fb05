"""Article lookup commands."""

from typing import Optional

import typer

from ..container import AppContainer
from .common import console, render_article, render_articles, run_with_container


def search_command(
    query: str = typer.Argument(..., help="Text to search for"),
) -> None:
    """Search Wikipedia articles, using the local cache when possible."""

    async def action(container: AppContainer):
        return await container.repository.search(query)

    result = run_with_container(action)

    if not result.success:
        console.print(f"[red]Search failed: {result.error}[/red]")
        if not result.articles:
            raise typer.Exit(1)
        console.print("[yellow]Showing cached results.[/yellow]")

    if not result.articles:
        console.print(f"[yellow]No articles found for '{query}'.[/yellow]")
        return

    source = "cache" if result.from_cache else "Wikipedia"
    render_articles(result.articles, f"Results for '{query}' ({source})")


def show_command(
    pageid: int = typer.Argument(..., help="Wikipedia page ID"),
    summary: bool = typer.Option(
        True,
        "--summary/--no-summary",
        help="Generate an AI summary if the article has none",
    ),
) -> None:
    """Show an article, fetching it if it is not cached."""

    async def action(container: AppContainer):
        result = await container.repository.get(pageid)
        article = result.article
        if article is not None and summary and article.ai_summary is None:
            ai_summary = await container.repository.generate_ai_summary(pageid)
            article = article.model_copy(update={"ai_summary": ai_summary})
        return result, article

    result, article = run_with_container(action)

    if not result.success:
        console.print(f"[red]Failed to load article {pageid}: {result.error}[/red]")
        raise typer.Exit(1)
    if article is None:
        console.print(f"[red]Article {pageid} not found.[/red]")
        raise typer.Exit(1)

    render_article(article)


def summarize_command(
    pageid: int = typer.Argument(..., help="Wikipedia page ID"),
) -> None:
    """Generate and store the AI summary of an article."""

    async def action(container: AppContainer):
        article = await container.repository.get_article(pageid)
        if article is None:
            return None
        return await container.repository.generate_ai_summary(pageid)

    summary = run_with_container(action)

    if summary is None:
        console.print(f"[red]Article {pageid} not found.[/red]")
        raise typer.Exit(1)

    console.print(summary)


def nearby_command(
    lat: Optional[float] = typer.Option(None, "--lat", help="Latitude (default: current location)"),
    lon: Optional[float] = typer.Option(None, "--lon", help="Longitude (default: current location)"),
) -> None:
    """List articles near a location."""
    if (lat is None) != (lon is None):
        console.print("[red]--lat and --lon must be given together.[/red]")
        raise typer.Exit(1)

    async def action(container: AppContainer):
        if lat is not None and lon is not None:
            return None, lat, lon, await container.repository.get_nearby(lat, lon)

        if not container.location.has_permission():
            return "disabled", None, None, None

        coordinates = await container.location.current_location()
        if coordinates is None:
            return "failed", None, None, None
        return (
            None,
            coordinates.lat,
            coordinates.lon,
            await container.repository.get_nearby(coordinates.lat, coordinates.lon),
        )

    location_error, point_lat, point_lon, result = run_with_container(action)

    if location_error == "disabled":
        console.print("[red]Location access is disabled.[/red]")
        console.print("Set location.enabled: true in the config, or pass --lat and --lon.")
        raise typer.Exit(1)
    if location_error == "failed":
        console.print("[red]Could not determine the current location.[/red]")
        console.print("Pass --lat and --lon instead.")
        raise typer.Exit(1)

    if not result.success:
        console.print(f"[red]Nearby lookup failed: {result.error}[/red]")
        raise typer.Exit(1)

    if not result.articles:
        console.print("[yellow]No nearby articles found.[/yellow]")
        return

    render_articles(result.articles, f"Articles near {point_lat}, {point_lon}")


def cleanup_command() -> None:
    """Evict cached articles that were not accessed recently."""

    async def action(container: AppContainer):
        return await container.repository.cleanup_old_articles()

    deleted = run_with_container(action, startup=False)
    console.print(f"[green]✅ Removed {deleted} old article(s) from the cache[/green]")
