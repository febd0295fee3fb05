"""Init command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import ConfigModel, default_config_path, save_config
from ..db import init_database, validate_connection

console = Console()


def init_command(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file to write (default: $WIKICACHE_CONFIG or ~/.config/wikicache/config.yaml)",
    ),
    backend: str = typer.Option("postgres", "--backend", help="Article store backend (postgres, memory)"),
    db_host: str = typer.Option("localhost", "--db-host", help="Postgres host"),
    db_port: int = typer.Option(5432, "--db-port", help="Postgres port"),
    db_name: str = typer.Option("wikicache", "--db-name", help="Database name"),
    db_user: str = typer.Option("wikicache_user", "--db-user", help="Database user"),
    lat: Optional[float] = typer.Option(None, "--lat", help="Fixed latitude for nearby searches"),
    lon: Optional[float] = typer.Option(None, "--lon", help="Fixed longitude for nearby searches"),
) -> None:
    """Initialize wikicache configuration and database."""
    console.print(Panel.fit("📚 wikicache - Initialization", style="bold blue"))

    if config_path is None:
        config_path = default_config_path()

    try:
        config = ConfigModel(
            postgres={
                "host": db_host,
                "port": db_port,
                "database": db_name,
                "user": db_user,
                "password_env": "WIKICACHE_DB_PASSWORD",
            },
            cache={"backend": backend},
            location={
                "provider": "fixed",
                "enabled": lat is not None and lon is not None,
                "latitude": lat,
                "longitude": lon,
            },
        )
    except ValueError as e:
        console.print(f"[red]❌ Invalid options: {e}[/red]")
        raise typer.Exit(1)

    # Save configuration
    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    if backend == "postgres":
        # Validate database connection
        console.print("\n[bold]Testing database connection...[/bold]")
        db_config = config.postgres.model_dump()

        if not validate_connection(db_config):
            console.print(
                "[red]❌ Database connection failed![/red]\n"
                "Please ensure Postgres is running and credentials are correct.\n"
                "Set the password via environment variable: [bold]export WIKICACHE_DB_PASSWORD=your_password[/bold]"
            )
            raise typer.Exit(1)

        console.print("✅ Database connection successful")

        # Initialize database schema
        console.print("\n[bold]Initializing database schema...[/bold]")
        try:
            init_database(db_config)
            console.print("✅ Database schema initialized")
        except Exception as e:
            console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
            raise typer.Exit(1)
    else:
        console.print("[yellow]Memory backend selected: articles are not kept between runs.[/yellow]")

    console.print(
        Panel(
            f"[green]✅ wikicache initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n\n"
            f"Next steps:\n"
            f"1. Set LLM API key: [bold]export OPENAI_API_KEY=your_key[/bold]\n"
            f"2. Run: [bold]wikicache search \"Albert Einstein\"[/bold]",
            style="green",
        )
    )
