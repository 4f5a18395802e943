"""Process-lifetime attempt ledger.

Entries are never evicted, so memory grows with the number of distinct
clients until the process restarts.
"""

from __future__ import annotations

import threading

from tutor_proxy.adapters.attempts.base import AbstractAttemptLedger


class InMemoryAttemptLedger(AbstractAttemptLedger):
    """Dict-backed ledger shared by every request of the process."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts: dict[str, int] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._counts)

    def __repr__(self) -> str:  # pragma: no cover - representation only
        return f"InMemoryAttemptLedger(clients={len(self)})"

    def get(self, client_id: str) -> int:
        with self._lock:
            return self._counts.get(client_id, 0)

    def increment(self, client_id: str) -> int:
        with self._lock:
            count = self._counts.get(client_id, 0) + 1
            self._counts[client_id] = count
            return count

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()
