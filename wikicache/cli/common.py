"""Shared helpers for CLI commands."""

import asyncio
from typing import Awaitable, Callable, Iterable, TypeVar

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import Config
from ..container import AppContainer
from ..models import Article

console = Console()

T = TypeVar("T")


def load_cli_config() -> Config:
    """Load configuration or exit with a hint."""
    config = Config()
    try:
        config.config
    except FileNotFoundError:
        console.print(f"[red]Config file not found: {config.config_path}[/red]")
        console.print("Run 'wikicache init' first.")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    return config


def build_container(config: Config) -> AppContainer:
    return AppContainer.from_config(config)


def run_with_container(
    action: Callable[[AppContainer], Awaitable[T]],
    startup: bool = True,
) -> T:
    """Build the application, run cold-start maintenance and then the action."""
    config = load_cli_config()

    with build_container(config) as container:
        async def main() -> T:
            if startup:
                await container.startup()
            return await action(container)

        return asyncio.run(main())


def render_articles(articles: Iterable[Article], title: str) -> None:
    """Print articles as a table."""
    table = Table(title=title)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Title", style="bold")
    table.add_column("Favorite", style="yellow")
    table.add_column("Location", style="magenta")
    table.add_column("Last accessed", style="dim")

    for article in articles:
        location = ""
        if article.coordinates:
            location = f"{article.coordinates.lat:.4f}, {article.coordinates.lon:.4f}"
        table.add_row(
            str(article.pageid),
            article.title,
            "★" if article.is_favorite else "",
            location,
            article.last_accessed.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


def render_article(article: Article, max_extract_chars: int = 1200) -> None:
    """Print a single article with its summary."""
    extract = article.extract
    if len(extract) > max_extract_chars:
        extract = extract[:max_extract_chars].rstrip() + "..."

    body = f"[dim]{article.full_url}[/dim]\n\n{extract or '[dim]No extract available.[/dim]'}"
    if article.ai_summary:
        body += f"\n\n[bold]AI summary[/bold]\n{article.ai_summary}"
    if article.coordinates:
        body += f"\n\n[magenta]Location: {article.coordinates.lat}, {article.coordinates.lon}[/magenta]"

    title = f"{'★ ' if article.is_favorite else ''}{article.title} ({article.pageid})"
    console.print(Panel(body, title=title, style="blue"))
