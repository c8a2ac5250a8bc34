"""Base repository class for the Grievance API."""

from abc import ABC
from abc import abstractmethod
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from asyncpg import Connection
from asyncpg import Record

from grievance_api.database.connection import get_db_connection


class BaseRepository[T](ABC):
    """Base repository class with common database operations.

    Every method accepts an optional ``connection``. Lifecycle operations pass
    the connection of their open transaction so that all writes commit or roll
    back together; without one a pooled connection is used.
    """

    def __init__(self, table_name: str):
        self.table_name = table_name

    @abstractmethod
    def _record_to_model(self, record: Record) -> T:
        """Convert database record to model instance."""

    @asynccontextmanager
    async def _use_connection(
        self, connection: Connection | None
    ) -> AsyncGenerator[Connection]:
        if connection is not None:
            yield connection
            return
        async with get_db_connection() as pooled:
            yield pooled

    async def get_by_id(
        self, record_id: int, connection: Connection | None = None
    ) -> T | None:
        """Get a record by primary key."""
        query = f"SELECT * FROM {self.table_name} WHERE id = $1"  # nosec B608

        async with self._use_connection(connection) as conn:
            record = await conn.fetchrow(query, record_id)
            return self._record_to_model(record) if record else None

    async def get_all(self, limit: int = 100, offset: int = 0) -> list[T]:
        """Get all records with pagination."""
        query = f"""
            SELECT * FROM {self.table_name}
            ORDER BY created_at DESC
            LIMIT $1 OFFSET $2
        """  # nosec B608

        async with self._use_connection(None) as conn:
            records = await conn.fetch(query, limit, offset)
            return [self._record_to_model(record) for record in records]

    async def delete_by_id(
        self, record_id: int, connection: Connection | None = None
    ) -> bool:
        """Delete a record by primary key."""
        query = f"DELETE FROM {self.table_name} WHERE id = $1"  # nosec B608

        async with self._use_connection(connection) as conn:
            result = await conn.execute(query, record_id)
            return result == "DELETE 1"

    async def create_from_dict(
        self, data: dict[str, Any], connection: Connection | None = None
    ) -> T:
        """Create a new record."""
        columns = list(data.keys())
        placeholders = [f"${i + 1}" for i in range(len(columns))]
        values = list(data.values())

        query = f"""
            INSERT INTO {self.table_name} ({", ".join(columns)})
            VALUES ({", ".join(placeholders)})
            RETURNING *
        """  # nosec B608

        async with self._use_connection(connection) as conn:
            record = await conn.fetchrow(query, *values)
            if record is None:
                raise ValueError(f"Failed to create record in {self.table_name}")
            return self._record_to_model(record)

    async def find_by(
        self, connection: Connection | None = None, **kwargs
    ) -> list[T]:
        """Find records by field values."""
        if not kwargs:
            return await self.get_all()

        conditions = []
        values = []
        for param_count, (field, value) in enumerate(kwargs.items(), start=1):
            conditions.append(f"{field} = ${param_count}")
            values.append(value)

        query = f"""
            SELECT * FROM {self.table_name}
            WHERE {" AND ".join(conditions)}
            ORDER BY created_at DESC
        """  # nosec B608

        async with self._use_connection(connection) as conn:
            records = await conn.fetch(query, *values)
            return [self._record_to_model(record) for record in records]

    async def find_one_by(
        self, connection: Connection | None = None, **kwargs
    ) -> T | None:
        """Find a single record by field values."""
        results = await self.find_by(connection, **kwargs)
        return results[0] if results else None
