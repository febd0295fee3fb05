"""Push-updated query results."""

import threading
from typing import Callable, List, Optional

from rich.console import Console

from ..models import Article

console = Console(stderr=True)

Subscriber = Callable[[List[Article]], None]


class LiveQuery:
    """
    Result of a store query that is re-evaluated after every store write.

    Subscribers receive the current value immediately and then every
    re-evaluated value until they unsubscribe or the query is closed.
    """

    def __init__(
        self,
        fetch: Callable[[], List[Article]],
        on_close: Optional[Callable[["LiveQuery"], None]] = None,
    ) -> None:
        self._fetch = fetch
        self._on_close = on_close
        self._subscribers: List[Subscriber] = []
        self._lock = threading.Lock()
        # Serializes re-query, assignment and delivery across writer threads
        self._refresh_lock = threading.RLock()
        self.closed = False
        self.value: List[Article] = fetch()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback; returns a function that unregisters it."""
        with self._lock:
            self._subscribers.append(callback)
            value = self.value
        callback(value)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def refresh(self) -> List[Article]:
        """Re-run the query and push the result to subscribers."""
        with self._refresh_lock:
            if self.closed:
                return self.value
            value = self._fetch()
            with self._lock:
                self.value = value
                subscribers = list(self._subscribers)
            for callback in subscribers:
                try:
                    callback(value)
                except Exception as e:
                    console.print(f"[red]Live query subscriber failed: {e}[/red]")
            return value

    def close(self) -> None:
        """Stop receiving updates."""
        if self.closed:
            return
        self.closed = True
        with self._lock:
            self._subscribers.clear()
        if self._on_close is not None:
            self._on_close(self)

    def __enter__(self) -> "LiveQuery":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
