"""Attempt ledger interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractAttemptLedger(ABC):
    """Per-client count of answered questions.

    Counts start at 0 implicitly and only ever grow. The ledger makes no
    promise about atomicity across calls: a caller that reads, awaits
    something, then increments can race with another request for the same
    client.
    """

    @abstractmethod
    def get(self, client_id: str) -> int:
        """Return the count for ``client_id`` (0 when never seen)."""
        raise NotImplementedError

    @abstractmethod
    def increment(self, client_id: str) -> int:
        """Add one answered question for ``client_id`` and return the new count."""
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        """Forget every client."""
        raise NotImplementedError
