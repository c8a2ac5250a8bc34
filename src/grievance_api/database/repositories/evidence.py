"""Evidence repository for the Grievance API."""

from asyncpg import Connection
from asyncpg import Record

from grievance_api.database.models.evidence import Evidence
from grievance_api.database.models.evidence import EvidenceCreate
from grievance_api.database.repositories.base import BaseRepository


class EvidenceRepository(BaseRepository[Evidence]):
    """Repository for evidence attachments."""

    def __init__(self):
        super().__init__("evidences")

    def _record_to_model(self, record: Record) -> Evidence:
        """Convert database record to Evidence model."""
        return Evidence.model_validate(dict(record))

    async def create_evidence(
        self, evidence: EvidenceCreate, connection: Connection | None = None
    ) -> Evidence:
        return await self.create_from_dict(evidence.model_dump(), connection)

    async def get_by_complaint(self, complaint_id: int) -> list[Evidence]:
        return await self.find_by(complaint_id=complaint_id)
