"""Complaint action log repository for the Grievance API."""

from asyncpg import Connection
from asyncpg import Record

from grievance_api.database.models.complaint_log import ComplaintLogCreate
from grievance_api.database.models.complaint_log import ComplaintLogEntry
from grievance_api.database.repositories.base import BaseRepository


class ComplaintLogRepository(BaseRepository[ComplaintLogEntry]):
    """Append-only audit trail of lifecycle transitions."""

    def __init__(self):
        super().__init__("complaint_logs")

    def _record_to_model(self, record: Record) -> ComplaintLogEntry:
        """Convert database record to ComplaintLogEntry model."""
        return ComplaintLogEntry.model_validate(dict(record))

    async def append(
        self, entry: ComplaintLogCreate, connection: Connection | None = None
    ) -> ComplaintLogEntry:
        """Log a transition, normally inside the transition's transaction."""
        return await self.create_from_dict(entry.model_dump(), connection)

    async def get_by_complaint(self, complaint_id: int) -> list[ComplaintLogEntry]:
        """History of a complaint, oldest first."""
        query = """
            SELECT * FROM complaint_logs
            WHERE complaint_id = $1
            ORDER BY created_at ASC, id ASC
        """

        async with self._use_connection(None) as conn:
            records = await conn.fetch(query, complaint_id)
            return [self._record_to_model(record) for record in records]
