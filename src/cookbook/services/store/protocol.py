"""Row-level data store protocol."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


Row = dict[str, Any]


@runtime_checkable
class DataStoreProtocol(Protocol):
    """Row operations against tables keyed by opaque identifiers.

    Filters are column/value equality pairs combined with AND.
    """

    async def initialize(self) -> None: ...

    async def shutdown(self) -> None: ...

    async def select(self, table: str, **filters: Any) -> list[Row]:
        """Return all rows of ``table`` matching ``filters``."""
        ...

    async def insert(self, table: str, row: Row) -> Row:
        """Insert ``row`` and return it as stored (with its issued id)."""
        ...

    async def update(self, table: str, values: Row, **filters: Any) -> list[Row]:
        """Set ``values`` on matching rows and return them."""
        ...

    async def delete(self, table: str, **filters: Any) -> None:
        """Delete matching rows."""
        ...
