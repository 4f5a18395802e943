"""Request throttling adapters.

Starts with an in-memory fixed window; a shared store can implement the same
interface later without changing the API layer.
"""

from tutor_proxy.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from tutor_proxy.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "InMemoryFixedWindowRateLimiter",
    "RateLimitResult",
]
