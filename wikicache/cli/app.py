"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .articles import cleanup_command, nearby_command, search_command, show_command, summarize_command
from .favorites import favorite_command, favorites_command, recent_command
from .init import init_command

app = typer.Typer(
    name="wikicache",
    help="wikicache - Wikipedia search with an offline article cache and AI summaries",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("search")(search_command)
app.command("show")(show_command)
app.command("summarize")(summarize_command)
app.command("nearby")(nearby_command)
app.command("favorite")(favorite_command)
app.command("favorites")(favorites_command)
app.command("recent")(recent_command)
app.command("cleanup")(cleanup_command)


if __name__ == "__main__":
    app()
