"""AI summary generation."""

from .summarizer import PROMPT_TEMPLATE, MockSummarizer, OpenAISummarizer, Summarizer

__all__ = ["PROMPT_TEMPLATE", "MockSummarizer", "OpenAISummarizer", "Summarizer"]
