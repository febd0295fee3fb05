"""wikicache - Wikipedia search with an offline article cache and AI summaries."""

__version__ = "0.1.0"
