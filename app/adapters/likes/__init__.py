"""Like ledger adapters.

The service depends on ``AbstractLikeLedger`` so the in-memory store can be
replaced by a shared backend without touching the request flow.
"""

from app.adapters.likes.base import AbstractLikeLedger
from app.adapters.likes.in_memory import InMemoryLikeLedger

__all__ = ["AbstractLikeLedger", "InMemoryLikeLedger"]
