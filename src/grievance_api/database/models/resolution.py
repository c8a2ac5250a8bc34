"""Resolution models for the Grievance API."""

from pydantic import BaseModel
from pydantic import Field

from grievance_api.database.models.base import BaseDBModel


class Resolution(BaseDBModel):
    """Outcome recorded when a complaint is resolved."""

    complaint_id: int
    resolved_by: int
    action_taken: str
    remarks: str | None = None


class ResolutionCreate(BaseModel):
    """Resolution creation model."""

    complaint_id: int
    resolved_by: int
    action_taken: str = Field(..., min_length=1)
    remarks: str | None = None
