from types import SimpleNamespace

from wikicache.generation import MockSummarizer, OpenAISummarizer


class FakeCompletions:
    def __init__(self, text="  Einstein developed relativity.  ", error=None):
        self.text = text
        self.error = error
        self.requests = []

    def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(
            choices=[SimpleNamespace(text=self.text)],
            usage=SimpleNamespace(total_tokens=120),
        )


def make_summarizer(**kwargs):
    completions = kwargs.pop("completions", FakeCompletions())
    client = SimpleNamespace(completions=completions)
    return OpenAISummarizer(client=client, **kwargs), completions


def test_summary_request_shape():
    summarizer, completions = make_summarizer()

    summary = summarizer.summarize("Albert Einstein was a physicist.")

    assert summary == "Einstein developed relativity."
    request = completions.requests[0]
    assert request["model"] == "gpt-3.5-turbo-instruct"
    assert request["max_tokens"] == 150
    assert request["temperature"] == 0.5
    assert request["prompt"] == (
        "Summarize this Wikipedia article in 3-5 sentences:\n\nAlbert Einstein was a physicist."
    )


def test_long_input_is_truncated():
    summarizer, completions = make_summarizer()

    summarizer.summarize("a" * 3000 + "b" * 500)

    prompt = completions.requests[0]["prompt"]
    assert prompt.endswith("a" * 3000)
    assert "b" not in prompt.split("\n\n", 1)[1]


def test_failure_becomes_placeholder_text():
    summarizer, _ = make_summarizer(completions=FakeCompletions(error=RuntimeError("rate limited")))

    summary = summarizer.summarize("text")

    assert summary == "Unable to generate summary: rate limited"


def test_usage_stats():
    summarizer, _ = make_summarizer()

    summarizer.summarize("one")
    summarizer.summarize("two")

    stats = summarizer.get_usage_stats()
    assert stats["api_calls"] == 2
    assert stats["total_tokens"] == 240
    assert stats["estimated_cost"] > 0
    assert stats["model"] == "gpt-3.5-turbo-instruct"


def test_mock_summarizer_keeps_first_sentences():
    summarizer = MockSummarizer()

    summary = summarizer.summarize("One. Two. Three. Four.")

    assert summary == "One. Two. Three."
    assert summarizer.calls == ["One. Two. Three. Four."]
    assert summarizer.summarize("") == "No content available to summarize."
