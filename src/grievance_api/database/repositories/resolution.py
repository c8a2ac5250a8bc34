"""Resolution repository for the Grievance API."""

from asyncpg import Connection
from asyncpg import Record

from grievance_api.database.models.resolution import Resolution
from grievance_api.database.models.resolution import ResolutionCreate
from grievance_api.database.repositories.base import BaseRepository


class ResolutionRepository(BaseRepository[Resolution]):
    """Repository for complaint resolutions."""

    def __init__(self):
        super().__init__("resolutions")

    def _record_to_model(self, record: Record) -> Resolution:
        """Convert database record to Resolution model."""
        return Resolution.model_validate(dict(record))

    async def create_resolution(
        self, resolution: ResolutionCreate, connection: Connection | None = None
    ) -> Resolution:
        return await self.create_from_dict(resolution.model_dump(), connection)

    async def get_by_complaint(self, complaint_id: int) -> Resolution | None:
        return await self.find_one_by(complaint_id=complaint_id)
