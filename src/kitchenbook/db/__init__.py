"""
Kitchenbook - Database Client.

Provides Supabase access for the kitchen catalog tables.
"""

from kitchenbook.db.adapter import DatabaseAdapter
from kitchenbook.db.client import get_client, get_service_client

__all__ = [
    "DatabaseAdapter",
    "get_client",
    "get_service_client",
]
