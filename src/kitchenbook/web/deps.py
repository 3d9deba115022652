"""FastAPI dependencies."""

from kitchenbook.db.adapter import DatabaseAdapter
from kitchenbook.db.client import get_client


def get_db() -> DatabaseAdapter:
    """Database client for request handlers (overridden in tests)."""
    return get_client()
