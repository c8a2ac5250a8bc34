"""Complaint models for the Grievance API."""

from datetime import datetime

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from grievance_api.database.models.base import BaseDBModel
from grievance_api.database.models.base import ComplaintStatus
from grievance_api.database.models.base import Urgency
from grievance_api.database.models.complaint_log import ComplaintLogEntry
from grievance_api.database.models.evidence import Evidence
from grievance_api.database.models.resolution import Resolution


class Complaint(BaseDBModel):
    """Complaint database model."""

    complainant_id: int
    title: str
    description: str
    category: str
    urgency: Urgency
    status: ComplaintStatus = ComplaintStatus.PENDING
    assigned_to: int | None = None
    deadline: datetime
    updated_at: datetime | None = None


class ComplaintSubmission(BaseModel):
    """Grievance details supplied by the complainant."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, max_length=100)


class ComplaintCreate(BaseModel):
    """Complaint row as inserted at submission time."""

    complainant_id: int
    title: str
    description: str
    category: str
    urgency: Urgency
    status: ComplaintStatus = ComplaintStatus.PENDING
    deadline: datetime

    model_config = ConfigDict(use_enum_values=True)


class GrievanceDetail(BaseModel):
    """Complaint with its audit history and attachments."""

    grievance: Complaint
    resolution: Resolution | None = None
    evidence: list[Evidence] = Field(default_factory=list)
    history: list[ComplaintLogEntry] = Field(default_factory=list)
