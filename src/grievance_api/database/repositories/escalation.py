"""Escalation repository for the Grievance API."""

from asyncpg import Connection
from asyncpg import Record

from grievance_api.database.models.escalation import Escalation
from grievance_api.database.models.escalation import EscalationCreate
from grievance_api.database.repositories.base import BaseRepository


class EscalationRepository(BaseRepository[Escalation]):
    """Repository for escalation records."""

    def __init__(self):
        super().__init__("escalations")

    def _record_to_model(self, record: Record) -> Escalation:
        """Convert database record to Escalation model."""
        return Escalation.model_validate(dict(record))

    async def create_escalation(
        self, escalation: EscalationCreate, connection: Connection | None = None
    ) -> Escalation:
        return await self.create_from_dict(escalation.model_dump(), connection)

    async def get_by_complaint(self, complaint_id: int) -> list[Escalation]:
        return await self.find_by(complaint_id=complaint_id)
