"""Attempt ledger adapters.

Track how many questions each client has had answered. The in-memory ledger
resets on restart; a persistent or shared store can implement the same
interface.
"""

from tutor_proxy.adapters.attempts.base import AbstractAttemptLedger
from tutor_proxy.adapters.attempts.in_memory import InMemoryAttemptLedger

__all__ = ["AbstractAttemptLedger", "InMemoryAttemptLedger"]
