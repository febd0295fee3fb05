"""Article summarization through an LLM completion API."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from openai import OpenAI
from rich.console import Console

console = Console(stderr=True)

PROMPT_TEMPLATE = "Summarize this Wikipedia article in 3-5 sentences:\n\n{text}"


class Summarizer(ABC):
    """Abstract base class for summarizers."""

    @abstractmethod
    def summarize(self, text: str) -> str:
        """
        Summarize article text.

        Implementations never raise: a failure is reported as
        placeholder text in the returned summary.

        Args:
            text: Plain text extract of the article

        Returns:
            Summary text
        """
        pass

    @abstractmethod
    def get_usage_stats(self) -> Dict[str, Any]:
        """Get usage statistics."""
        pass


class OpenAISummarizer(Summarizer):
    """OpenAI completions implementation of the summarizer."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-3.5-turbo-instruct",
        base_url: Optional[str] = None,
        max_input_chars: int = 3000,
        max_tokens: int = 150,
        temperature: float = 0.5,
        client: Optional[Any] = None,
    ) -> None:
        """
        Initialize OpenAI summarizer.

        Args:
            api_key: OpenAI API key
            model: Completion model name
            base_url: Custom base URL
            max_input_chars: Characters of the article kept in the prompt
            max_tokens: Upper bound on summary length
            temperature: Sampling temperature
            client: Preconfigured client (for testing)
        """
        self.client = client if client is not None else OpenAI(api_key=api_key, base_url=base_url)
        self.model = model
        self.max_input_chars = max_input_chars
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.total_tokens = 0
        self.api_calls = 0

        # Token cost estimates (per 1K tokens)
        self.cost_per_1k_tokens = {
            "gpt-3.5-turbo-instruct": {"input": 0.0015, "output": 0.002},
            "davinci-002": {"input": 0.002, "output": 0.002},
            "babbage-002": {"input": 0.0004, "output": 0.0004},
        }

    def build_prompt(self, text: str) -> str:
        """Prompt for the first max_input_chars characters of the text."""
        return PROMPT_TEMPLATE.format(text=text[: self.max_input_chars])

    def summarize(self, text: str) -> str:
        """Summarize article text using OpenAI."""
        prompt = self.build_prompt(text)

        try:
            self.api_calls += 1
            response = self.client.completions.create(
                model=self.model,
                prompt=prompt,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )

            # Update usage stats
            if response.usage:
                self.total_tokens += response.usage.total_tokens

            return response.choices[0].text.strip()

        except Exception as e:
            console.print(f"[red]Error generating summary: {e}[/red]")
            return f"Unable to generate summary: {e}"

    def get_usage_stats(self) -> Dict[str, Any]:
        """Get usage statistics."""
        estimated_cost = 0.0
        if self.model in self.cost_per_1k_tokens:
            # Rough estimate (assuming 90% input, 10% output)
            input_tokens = int(self.total_tokens * 0.9)
            output_tokens = int(self.total_tokens * 0.1)
            rates = self.cost_per_1k_tokens[self.model]
            estimated_cost = (
                (input_tokens / 1000) * rates["input"] +
                (output_tokens / 1000) * rates["output"]
            )

        return {
            "total_tokens": self.total_tokens,
            "api_calls": self.api_calls,
            "estimated_cost": estimated_cost,
            "model": self.model,
        }


class MockSummarizer(Summarizer):
    """Offline summarizer used when no API key is configured."""

    def __init__(self) -> None:
        """Initialize mock summarizer."""
        self.calls: List[str] = []

    def summarize(self, text: str) -> str:
        """Mock summarization: the first sentences of the text."""
        self.calls.append(text)

        sentences = [s.strip() for s in text.split(". ") if s.strip()]
        if not sentences:
            return "No content available to summarize."
        summary = ". ".join(sentences[:3])
        return summary if summary.endswith(".") else summary + "."

    def get_usage_stats(self) -> Dict[str, Any]:
        """Get mock usage statistics."""
        return {
            "total_tokens": 0,
            "api_calls": len(self.calls),
            "estimated_cost": 0.0,
            "model": "mock",
        }
