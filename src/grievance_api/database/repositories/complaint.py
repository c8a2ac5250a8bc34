"""Complaint repository for the Grievance API."""

from collections.abc import Iterable
from datetime import datetime

from asyncpg import Connection
from asyncpg import Record

from grievance_api.database.models.base import ComplaintStatus
from grievance_api.database.models.complaint import Complaint
from grievance_api.database.models.complaint import ComplaintCreate
from grievance_api.database.repositories.base import BaseRepository


class ComplaintRepository(BaseRepository[Complaint]):
    """Repository for complaint records and their status transitions."""

    def __init__(self):
        super().__init__("complaints")

    def _record_to_model(self, record: Record) -> Complaint:
        """Convert database record to Complaint model."""
        return Complaint.model_validate(dict(record))

    async def create_complaint(
        self, complaint: ComplaintCreate, connection: Connection | None = None
    ) -> Complaint:
        """Insert a newly submitted complaint."""
        return await self.create_from_dict(complaint.model_dump(), connection)

    async def get_for_update(
        self, complaint_id: int, connection: Connection
    ) -> Complaint | None:
        """Read a complaint and lock its row until the transaction ends."""
        record = await connection.fetchrow(
            "SELECT * FROM complaints WHERE id = $1 FOR UPDATE", complaint_id
        )
        return self._record_to_model(record) if record else None

    async def transition(
        self,
        complaint_id: int,
        from_statuses: Iterable[ComplaintStatus],
        to_status: ComplaintStatus,
        connection: Connection,
        assigned_to: int | None = None,
    ) -> Complaint | None:
        """Move a complaint to ``to_status`` if it is still in ``from_statuses``.

        Returns None when the row no longer matches, so the caller can tell a
        lost race from success. ``assigned_to`` is only written when given.
        """
        expected = [ComplaintStatus(status).value for status in from_statuses]

        if assigned_to is None:
            query = """
                UPDATE complaints
                SET status = $1, updated_at = NOW()
                WHERE id = $2 AND status = ANY($3::text[])
                RETURNING *
            """
            args = (ComplaintStatus(to_status).value, complaint_id, expected)
        else:
            query = """
                UPDATE complaints
                SET status = $1, assigned_to = $4, updated_at = NOW()
                WHERE id = $2 AND status = ANY($3::text[])
                RETURNING *
            """
            args = (ComplaintStatus(to_status).value, complaint_id, expected, assigned_to)

        record = await connection.fetchrow(query, *args)
        return self._record_to_model(record) if record else None

    async def get_overdue(
        self, now: datetime, connection: Connection | None = None
    ) -> list[Complaint]:
        """In-progress complaints whose deadline is before ``now``."""
        query = """
            SELECT * FROM complaints
            WHERE status = $1 AND deadline < $2
            ORDER BY deadline ASC
        """

        async with self._use_connection(connection) as conn:
            records = await conn.fetch(query, ComplaintStatus.IN_PROGRESS.value, now)
            return [self._record_to_model(record) for record in records]

    async def get_by_complainant(self, complainant_id: int) -> list[Complaint]:
        """Grievance history for a complainant."""
        return await self.find_by(complainant_id=complainant_id)

    async def get_by_assignee(self, member_id: int) -> list[Complaint]:
        """Complaints currently assigned to a committee member."""
        return await self.find_by(assigned_to=member_id)

    async def get_by_status(self, status: ComplaintStatus) -> list[Complaint]:
        return await self.find_by(status=ComplaintStatus(status).value)
