"""
Database Adapter Protocol.

Defines the interface service code is written against. The Supabase
client satisfies it directly; tests pass MagicMock fakes.

The adapter exposes the Supabase/PostgREST query builder pattern:
table() returns a query builder, rpc() calls stored procedures.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DatabaseAdapter(Protocol):
    """
    Abstract database access for Kitchenbook services.

    The table() method returns a query builder supporting the
    PostgREST-style fluent API: .select(), .insert(), .update(),
    .delete(), .eq(), .order(), .execute(), etc.
    """

    def table(self, name: str) -> Any:
        """Return a query builder for the given table."""
        ...

    def rpc(self, function_name: str, params: dict) -> Any:
        """
        Call a stored procedure / database function.

        Returns an object with .execute() that yields .data.
        """
        ...
