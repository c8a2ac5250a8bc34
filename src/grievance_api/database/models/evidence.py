"""Evidence attachment models for the Grievance API."""

from pydantic import BaseModel

from grievance_api.database.models.base import BaseDBModel


class Evidence(BaseDBModel):
    """Evidence file attached to a complaint."""

    complaint_id: int
    file_name: str
    file_url: str
    uploaded_by: int


class EvidenceCreate(BaseModel):
    """Evidence creation model."""

    complaint_id: int
    file_name: str
    file_url: str
    uploaded_by: int


class EvidenceUpload(BaseModel):
    """Raw attachment supplied with a submission."""

    file_name: str
    content: bytes
    content_type: str = "application/octet-stream"
